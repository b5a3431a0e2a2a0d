import re

import pytest

from app.repos.posts_repo import CouchPostsRepo
from app.schemas.blog import Post, PostCreate, PostUpdate
from app.services.posts_service import InvalidPostError, PostsService, validate_draft
from tests.conftest import FakeCouchDB, make_post_doc


def make_service(*docs):
    repo = CouchPostsRepo(FakeCouchDB({doc["id"]: doc for doc in docs}))
    return PostsService(repo=repo)


def test_create_assigns_id_timestamps_and_author():
    service = make_service()

    post = service.create(
        PostCreate(title="  Hello, World! 2024 ", content=" Body ", tags="a, b ,c"),
        author="editor",
    )

    assert isinstance(post, Post)
    assert re.fullmatch(r"hello-world-2024-\d+", post.id)
    assert post.title == "Hello, World! 2024"
    assert post.content == "Body"
    assert post.tags == ["a", "b", "c"]
    assert post.status == "published"
    assert post.type == "News"
    assert post.author == "editor"
    assert post.createdAt and post.createdAt == post.updatedAt
    assert post.date


def test_create_honours_explicit_id_and_rejects_duplicates():
    service = make_service(make_post_doc("taken", "Taken"))

    created = service.create(PostCreate(id="fresh", title="Fresh", content="x"), author="a")
    assert created.id == "fresh"

    with pytest.raises(InvalidPostError):
        service.create(PostCreate(id="taken", title="Again", content="x"), author="a")


@pytest.mark.parametrize(
    "draft",
    [
        PostCreate(content="body only"),
        PostCreate(title="   ", content="blank title"),
        PostCreate(title="No body"),
        PostCreate(title="Blank body", content="  ", contentHtml=""),
    ],
)
def test_create_requires_title_and_some_content(draft):
    service = make_service()
    with pytest.raises(InvalidPostError):
        service.create(draft, author="a")
    assert service.repo.list_all() == []


@pytest.mark.parametrize(
    "draft",
    [
        PostCreate(title="Text", content="body"),
        PostCreate(title="Html", contentHtml="<p>body</p>"),
    ],
)
def test_validate_draft_accepts_either_body(draft):
    validate_draft(draft)


def test_update_restamps_and_keeps_immutable_fields():
    original = make_post_doc("p-1", "Original", author="first")
    service = make_service(original)

    updated = service.update("p-1", PostUpdate(title=" New title ", tags="x, y"), author="second")

    assert updated.title == "New title"
    assert updated.tags == ["x", "y"]
    assert updated.author == "second"
    assert updated.id == "p-1"
    assert updated.createdAt == original["createdAt"]
    assert updated.updatedAt != original["updatedAt"]
    assert updated.content == original["content"]


def test_update_missing_post_returns_none():
    assert make_service().update("nope", PostUpdate(title="x"), author="a") is None


def test_delete_reports_missing():
    service = make_service(make_post_doc("p-1", "Gone soon"))
    assert service.delete("p-1") is True
    assert service.delete("p-1") is False


def test_set_featured_then_get_featured_returns_that_post():
    service = make_service(
        make_post_doc("old", "Old", createdAt="2024-01-01"),
        make_post_doc("new", "New", createdAt="2024-06-01"),
    )

    service.set_featured("old")
    assert service.get_featured().id == "old"

    service.set_featured(None)
    assert service.get_featured().id == "new"


def test_get_featured_fills_content_html_from_content():
    service = make_service(make_post_doc("p-1", "Plain", content="Just text"))
    assert service.get_featured().contentHtml == "Just text"


def test_get_featured_none_when_empty():
    assert make_service().get_featured() is None


def test_public_reads_hide_drafts():
    service = make_service(
        make_post_doc("pub", "Public Post"),
        make_post_doc("draft", "Draft Post", status="draft"),
    )

    assert [p.id for p in service.list_published()] == ["pub"]
    assert service.get_by_slug("draft-post") is None
    assert service.get_by_id("draft", published_only=True) is None
    assert service.get_by_id("draft").id == "draft"
    assert {p.id for p in service.list_all()} == {"pub", "draft"}


def test_end_to_end_create_then_resolve_by_slug():
    service = make_service()
    created = service.create(PostCreate(title="Hello, World! 2024", content="hi"), author="a")

    assert service.get_by_slug("hello-world-2024").id == created.id


def test_update_ignores_nulls_on_required_fields():
    service = make_service(make_post_doc("p-1", "Keep me"))

    updated = service.update(
        "p-1",
        PostUpdate.model_validate({"title": None, "status": None, "tags": None}),
        author="a",
    )

    assert updated.title == "Keep me"
    assert updated.status == "published"
    stored = service.repo.db.docs["p-1"]
    assert stored["title"] == "Keep me"
    assert stored["status"] == "published"
    assert [p.id for p in service.list_all()] == ["p-1"]


def test_update_rejects_blank_title_without_writing():
    service = make_service(make_post_doc("p-1", "Keep me"))

    with pytest.raises(InvalidPostError):
        service.update("p-1", PostUpdate(title="   "), author="a")

    assert service.repo.db.docs["p-1"]["title"] == "Keep me"


def test_update_rejects_invalid_merged_post_without_writing():
    service = make_service(make_post_doc("p-1", "Keep me"))
    service.repo.db.docs["p-1"]["createdAt"] = {"not": "a string"}

    with pytest.raises(InvalidPostError):
        service.update("p-1", PostUpdate(excerpt="new"), author="a")

    assert service.repo.db.docs["p-1"]["excerpt"] == ""


def test_update_featured_true_clears_other_flags():
    service = make_service(
        make_post_doc("a", "First", featured=True),
        make_post_doc("b", "Second"),
    )

    updated = service.update("b", PostUpdate(featured=True), author="a")

    assert updated.featured is True
    docs = service.repo.db.docs
    assert docs["a"]["featured"] is False
    assert docs["b"]["featured"] is True


def test_update_featured_true_on_draft_is_not_flagged():
    service = make_service(
        make_post_doc("a", "First", featured=True),
        make_post_doc("d", "Draft", status="draft"),
    )

    updated = service.update("d", PostUpdate(featured=True), author="a")

    assert updated.featured is False
    assert service.repo.db.docs["a"]["featured"] is True


def test_update_featured_false_unflags():
    service = make_service(make_post_doc("a", "First", featured=True))

    assert service.update("a", PostUpdate(featured=False), author="a").featured is False
