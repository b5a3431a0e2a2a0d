import datetime
import logging
from typing import List, Optional

from pydantic import ValidationError

from app.repos.posts_repo import PUBLISHED, utc_now_iso
from app.schemas.blog import Post, PostCreate, PostUpdate
from app.utils import generate_post_id

logger = logging.getLogger(__name__)

TRIMMED_FIELDS = ("title", "excerpt", "content", "contentHtml", "link")
IMMUTABLE_FIELDS = ("id", "createdAt")
NON_NULLABLE_FIELDS = (
    "title",
    "type",
    "status",
    "featured",
    "noIndex",
    "autoGenerateSEO",
    "tags",
)


class InvalidPostError(ValueError):
    """Raised when a post payload is missing or carries invalid data."""


class PostsService:
    def __init__(self, repo):
        self.repo = repo

    def list_published(self, featured_only: bool = False) -> List[Post]:
        docs = self.repo.list_featured() if featured_only else self.repo.list_published()
        return [Post(**doc) for doc in docs]

    def list_all(self) -> List[Post]:
        return [Post(**doc) for doc in self.repo.list_all()]

    def get_by_slug(self, slug: str) -> Optional[Post]:
        doc = self.repo.find_by_slug(slug)
        return Post(**doc) if doc else None

    def get_by_id(self, post_id: str, published_only: bool = False) -> Optional[Post]:
        doc = self.repo.find_by_id(post_id, published_only=published_only)
        return Post(**doc) if doc else None

    def get_featured(self) -> Optional[Post]:
        doc = self.repo.find_featured()
        if not doc:
            return None
        post = Post(**doc)
        # The homepage widget renders contentHtml directly.
        if not post.contentHtml:
            post.contentHtml = post.content
        return post

    def create(self, draft: PostCreate, author: str) -> Post:
        validate_draft(draft)
        post_id = draft.id or generate_post_id(draft.title)
        if self.repo.exists(post_id):
            raise InvalidPostError("Post with this ID already exists")

        now = utc_now_iso()
        data = _trimmed(draft.model_dump(exclude={"id"}))
        data.update(
            {
                "id": post_id,
                "type": draft.type or "News",
                "status": draft.status or PUBLISHED,
                "date": draft.date or datetime.date.today().isoformat(),
                "author": author,
                "createdAt": now,
                "updatedAt": now,
            }
        )
        post = Post(**self.repo.create(data))
        logger.info(f"Created post '{post.title}' ({post.id}) by {author}")
        return post

    def update(self, post_id: str, patch: PostUpdate, author: str) -> Optional[Post]:
        """
        Apply the fields present in `patch`. An explicit null on a required
        field is ignored. The merged post is validated before anything is
        written, and `featured: true` goes through `set_featured` so at most
        one post stays flagged.
        """
        changes = _trimmed(patch.model_dump(exclude_unset=True))
        for field in IMMUTABLE_FIELDS:
            changes.pop(field, None)
        for field in NON_NULLABLE_FIELDS:
            if changes.get(field, "") is None:
                changes.pop(field)
        if "title" in changes and not changes["title"]:
            raise InvalidPostError("Title is required")
        feature = changes.get("featured") is True
        if feature:
            changes.pop("featured")
        changes.update({"updatedAt": utc_now_iso(), "author": author})

        existing = self.repo.find_by_id(post_id)
        if not existing:
            return None
        try:
            Post(**{**existing, **changes})
        except ValidationError as e:
            raise InvalidPostError(f"Invalid post data: {e.error_count()} error(s)")

        doc = self.repo.update(post_id, changes)
        if not doc:
            return None
        if feature and doc.get("status") == PUBLISHED:
            doc = self.repo.set_featured(post_id) or doc
        logger.info(f"Updated post '{doc.get('title')}' ({post_id}) by {author}")
        return Post(**doc)

    def delete(self, post_id: str) -> bool:
        deleted = self.repo.delete(post_id)
        if deleted:
            logger.info(f"Deleted post {post_id}")
        return deleted

    def set_featured(self, post_id: Optional[str]) -> Optional[Post]:
        doc = self.repo.set_featured(post_id)
        if doc:
            logger.info(f"Featured post set to {post_id}")
        elif not post_id:
            logger.info("Featured post cleared")
        return Post(**doc) if doc else None


def validate_draft(draft: PostCreate) -> None:
    if not (draft.title or "").strip():
        raise InvalidPostError("Title and content are required")
    if not (draft.content or "").strip() and not (draft.contentHtml or "").strip():
        raise InvalidPostError("Title and content are required")


def _trimmed(data: dict) -> dict:
    return {
        key: value.strip() if key in TRIMMED_FIELDS and isinstance(value, str) else value
        for key, value in data.items()
    }
