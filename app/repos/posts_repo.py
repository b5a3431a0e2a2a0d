import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

import pycouchdb

from app.utils import slugify

logger = logging.getLogger(__name__)

PUBLISHED = "published"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CouchPostsRepo:
    """
    Posts collection stored one document per post, `_id` == post id.
    Collections are small, so lookups scan `all(include_docs=True)`.
    """

    def __init__(self, couch_db):
        self.db = couch_db

    def list_all(self) -> List[dict]:
        docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        posts = [_to_post(doc) for doc in docs if self._is_post(doc)]
        return sorted(posts, key=lambda p: p.get("createdAt") or "", reverse=True)

    def list_published(self) -> List[dict]:
        return [p for p in self.list_all() if p.get("status") == PUBLISHED]

    def list_featured(self, limit: int = 3) -> List[dict]:
        return [p for p in self.list_published() if p.get("featured")][:limit]

    def find_by_slug(self, slug: str) -> Optional[dict]:
        # First match wins when two titles normalize to the same slug.
        return next(
            (p for p in self.list_published() if slugify(p.get("title")) == slug),
            None,
        )

    def find_by_id(self, post_id: str, published_only: bool = False) -> Optional[dict]:
        doc = self._get_doc(post_id)
        if not doc:
            return None
        if published_only and doc.get("status") != PUBLISHED:
            return None
        return _to_post(doc)

    def find_featured(self) -> Optional[dict]:
        return select_featured(self.list_all())

    def exists(self, post_id: str) -> bool:
        return self._get_doc(post_id) is not None

    def create(self, post: dict) -> dict:
        saved = self.db.save({**post, "_id": post["id"]})
        return _to_post(saved)

    def create_many(self, posts: List[dict]) -> List[dict]:
        saved = self.db.save_bulk([{**p, "_id": p["id"]} for p in posts])
        return [_to_post(doc) for doc in saved]

    def update(self, post_id: str, changes: dict) -> Optional[dict]:
        doc = self._get_doc(post_id)
        if not doc:
            return None
        doc.update(changes)
        return _to_post(self.db.save(doc))

    def delete(self, post_id: str) -> bool:
        doc = self._get_doc(post_id)
        if not doc:
            return False
        self.db.delete(doc)
        return True

    def set_featured(self, post_id: Optional[str]) -> Optional[dict]:
        """
        Clear the flag on every post, then flag `post_id` if given.

        Not transactional: a reader between the two steps can see no featured
        post, and the flags stay cleared when `post_id` is unknown or a draft.
        Returns the flagged post, or None when nothing was flagged.
        """
        flagged = [
            row.get("doc", row)
            for row in self.db.all(include_docs=True)
            if row.get("doc", row).get("featured")
            and self._is_post(row.get("doc", row))
        ]
        if flagged:
            self.db.save_bulk([{**doc, "featured": False} for doc in flagged])
            logger.info(f"Cleared featured flag on {len(flagged)} post(s)")

        if not post_id:
            return None

        doc = self._get_doc(post_id)
        if not doc or doc.get("status") != PUBLISHED:
            return None
        doc.update({"featured": True, "updatedAt": utc_now_iso()})
        return _to_post(self.db.save(doc))

    def _get_doc(self, post_id: str) -> Optional[dict]:
        if not post_id:
            return None
        try:
            doc = self.db.get(post_id)
        except pycouchdb.exceptions.NotFound:
            return None
        return doc if self._is_post(doc) else None

    @staticmethod
    def _is_post(doc: dict | None) -> bool:
        if not doc:
            return False
        return not doc.get("_id", "").startswith("_design/") and "title" in doc


def select_featured(posts: Iterable[dict]) -> Optional[dict]:
    """
    Homepage selection: a flagged published post, else the newest published
    post, else None. `posts` may be in any order.
    """
    published = sorted(
        (p for p in posts if p.get("status") == PUBLISHED),
        key=lambda p: p.get("createdAt") or "",
        reverse=True,
    )
    flagged = next((p for p in published if p.get("featured")), None)
    return flagged or (published[0] if published else None)


def _to_post(doc: dict) -> dict:
    post = {k: v for k, v in doc.items() if not k.startswith("_")}
    post.setdefault("id", doc.get("_id"))
    return post
