from typing import Optional

import pycouchdb


class CouchUsersRepo:
    """Credential store, one document per user keyed by username."""

    def __init__(self, couch_db):
        self.db = couch_db

    def get(self, username: str) -> Optional[dict]:
        try:
            return self.db.get(username)
        except pycouchdb.exceptions.NotFound:
            return None

    def create(self, username: str, password_hash: str, role: str = "admin") -> dict:
        return self.db.save(
            {
                "_id": username,
                "username": username,
                "password": password_hash,
                "role": role,
                "lastLogin": None,
            }
        )

    def touch_last_login(self, user: dict, when: str) -> dict:
        return self.db.save({**user, "lastLogin": when})
