import logging

from app.db.couchdb import CouchConnection
from app.repos.posts_repo import CouchPostsRepo
from app.services.default_posts import seed_default_posts
from app.settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    couch = CouchConnection(settings)
    try:
        created = seed_default_posts(CouchPostsRepo(couch.posts_db))
        logger.info(f"Seeding completed, {created} post(s) created.")
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        raise SystemExit(1)
