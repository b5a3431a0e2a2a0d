import copy
import itertools

import pycouchdb
import pytest

from app.settings import Settings


class FakeCouchDB:
    """
    Minimal in-memory CouchDB stand-in.
    Set track_calls=True to record the order of calls.
    """

    def __init__(self, docs: dict | None = None, track_calls: bool = False):
        self.docs = {doc_id: dict(doc, _id=doc_id) for doc_id, doc in (docs or {}).items()}
        self.track_calls = track_calls
        self.calls = []
        self._revs = itertools.count(1)

    def _track(self, call: str) -> None:
        if self.track_calls:
            self.calls.append(call)

    def get(self, doc_id: str) -> dict:
        self._track(f"get({doc_id})")
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        return copy.deepcopy(self.docs[doc_id])

    def all(self, include_docs: bool = True):
        self._track(f"all(include_docs={include_docs})")
        if include_docs:
            return [
                {"id": doc_id, "doc": copy.deepcopy(doc)}
                for doc_id, doc in self.docs.items()
            ]
        return [{"id": doc_id} for doc_id in self.docs]

    def save(self, doc: dict) -> dict:
        self._track(f"save({doc.get('_id')})")
        saved = dict(doc, _rev=f"{next(self._revs)}-fake")
        self.docs[saved["_id"]] = copy.deepcopy(saved)
        return saved

    def save_bulk(self, docs):
        self._track(f"save_bulk({len(docs)})")
        return [self.save(doc) for doc in docs]

    def delete(self, doc_or_id):
        doc_id = doc_or_id["_id"] if isinstance(doc_or_id, dict) else doc_or_id
        self._track(f"delete({doc_id})")
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        del self.docs[doc_id]


class FakeCouchConnection:
    def __init__(self, posts_db=None, users_db=None):
        self.posts_db = posts_db if posts_db is not None else FakeCouchDB()
        self.users_db = users_db if users_db is not None else FakeCouchDB()


class FakePostsService:
    """
    Minimal posts service stand-in for router tests.
    """

    def __init__(self, posts=None, featured=None):
        self.posts = list(posts or [])
        self.featured = featured
        self.calls = []

    def list_published(self, featured_only=False):
        self.calls.append(("list_published", featured_only))
        return [p for p in self.posts if not featured_only or p.featured]

    def list_all(self):
        return self.posts

    def get_by_slug(self, slug):
        self.calls.append(("get_by_slug", slug))
        from app.utils import slugify

        return next((p for p in self.posts if slugify(p.title) == slug), None)

    def get_by_id(self, post_id, published_only=False):
        self.calls.append(("get_by_id", post_id, published_only))
        return next((p for p in self.posts if p.id == post_id), None)

    def get_featured(self):
        return self.featured


def make_post_doc(post_id: str, title: str, **overrides) -> dict:
    doc = {
        "id": post_id,
        "title": title,
        "type": "News",
        "date": "2024-05-01",
        "excerpt": "",
        "content": f"Body of {title}.",
        "tags": [],
        "status": "published",
        "featured": False,
        "author": "admin",
        "createdAt": "2024-05-01T10:00:00+00:00",
        "updatedAt": "2024-05-01T10:00:00+00:00",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def test_settings():
    return Settings(
        JWT_SECRET="test-secret",
        ADMIN_USERNAME="admin",
        ADMIN_PASSWORD="s3cret",
        SITE_BASE_URL="https://example.test",
    )
