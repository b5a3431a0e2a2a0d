from app.repos.users_repo import CouchUsersRepo
from tests.conftest import FakeCouchDB


def test_get_missing_user_returns_none():
    assert CouchUsersRepo(FakeCouchDB()).get("nobody") is None


def test_create_then_get_and_touch_last_login():
    repo = CouchUsersRepo(FakeCouchDB())

    created = repo.create("admin", "hashed", role="admin")
    assert created["_id"] == "admin"
    assert created["lastLogin"] is None

    user = repo.get("admin")
    assert user["password"] == "hashed"

    repo.touch_last_login(user, "2024-05-01T10:00:00+00:00")
    assert repo.get("admin")["lastLogin"] == "2024-05-01T10:00:00+00:00"
