import logging
import threading

import pycouchdb
from fastapi import Request

from app.settings import Settings

logger = logging.getLogger(__name__)


class CouchConnection:
    """
    Lazily opened CouchDB handles, created once per process in the app lifespan.
    Nothing touches the network until a database is first requested.
    """

    def __init__(self, current_settings: Settings):
        self.settings = current_settings
        self._server = None
        self._databases: dict[str, object] = {}
        self._lock = threading.Lock()

    @property
    def posts_db(self):
        return self._database(self.settings.COUCHDB_POSTS_DATABASE)

    @property
    def users_db(self):
        return self._database(self.settings.COUCHDB_USERS_DATABASE)

    def _database(self, name: str):
        with self._lock:
            if name not in self._databases:
                if self._server is None:
                    self._server = pycouchdb.Server(self.settings.couchdb_url)
                self._databases[name] = _open_or_create(self._server, name)
            return self._databases[name]


def _open_or_create(server, name: str):
    try:
        return server.database(name)
    except pycouchdb.exceptions.NotFound:
        logger.info(f"CouchDB database '{name}' missing, creating it")
        return server.create(name)


def get_couch(request: Request) -> CouchConnection:
    return request.app.state.couch
