import logging
from datetime import datetime, timedelta, timezone
from typing import List

from app.utils import generate_post_id

logger = logging.getLogger(__name__)

WELCOME_CONTENT = (
    "Welcome to Solera Cask Stories, where we share the rich heritage and exceptional "
    "craftsmanship behind our premium sherry barrels. From our historic solera systems in "
    "Jerez de la Frontera to the modern craft distilleries and breweries worldwide, each "
    "barrel tells a story of tradition, quality, and transformation.\n\n"
    "Here you'll find updates on our latest partnerships, educational content about sherry "
    "barrel aging, tasting notes from exceptional spirits and beers, and stories from the "
    "passionate makers who trust Solera Cask for their most important expressions.\n\n"
    "Our journey begins in the heart of Andalusia, where the ancient art of sherry making has "
    "been perfected over centuries. Each barrel we source carries with it the wisdom of "
    "generations of bodega masters, the terroir of Jerez de la Frontera, and the unique "
    "characteristics that only authentic Spanish sherry casks can provide."
)

SHERRY_TYPES_CONTENT = (
    "Understanding the different sherry types is crucial for selecting the right barrel for "
    "your aging program. Each of the six main sherry types brings distinct flavor profiles "
    "and characteristics to spirits and beer.\n\n"
    "## Fino and Manzanilla\n"
    "Fino and Manzanilla, aged under flor, contribute bright, mineral, and saline notes "
    "perfect for lighter spirits. These sherries develop under a layer of yeast called flor, "
    "which protects the wine from oxidation and creates unique aldehydic compounds.\n\n"
    "## Amontillado\n"
    "Amontillado offers balanced complexity with nutty and oxidative characteristics. "
    "Starting life under flor like Fino, these sherries later undergo oxidative aging.\n\n"
    "## Oloroso\n"
    "Oloroso provides rich, robust flavors ideal for whisky and dark beer styles. These "
    "sherries undergo full oxidative aging from the beginning.\n\n"
    "## Pedro Ximénez\n"
    "Pedro Ximénez delivers intense sweetness and rich fruit character for dessert-style "
    "expressions."
)


def build_default_posts(now: datetime | None = None) -> List[dict]:
    now = now or datetime.now(timezone.utc)
    yesterday = now - timedelta(days=1)
    now_ms = int(now.timestamp() * 1000)

    welcome_title = "Welcome to Solera Cask Stories"
    sherry_title = "Understanding Sherry Types for Aging"
    return [
        {
            "id": generate_post_id(welcome_title, now_ms),
            "title": welcome_title,
            "type": "News",
            "date": now.date().isoformat(),
            "excerpt": (
                "Discover the heritage, craftsmanship, and stories behind our premium "
                "sherry barrels from Jerez de la Frontera."
            ),
            "content": WELCOME_CONTENT,
            "link": "",
            "tags": ["welcome", "heritage", "craftsmanship", "solera", "jerez"],
            "status": "published",
            "featured": False,
            "createdAt": now.isoformat(),
            "updatedAt": now.isoformat(),
        },
        {
            "id": generate_post_id(sherry_title, now_ms),
            "title": sherry_title,
            "type": "Education",
            "date": yesterday.date().isoformat(),
            "excerpt": (
                "A comprehensive guide to the six sherry types and how each imparts "
                "unique characteristics to spirits and beer."
            ),
            "content": SHERRY_TYPES_CONTENT,
            "link": "",
            "tags": ["education", "sherry-types", "aging", "flavor-profiles"],
            "status": "published",
            "featured": False,
            "createdAt": yesterday.isoformat(),
            "updatedAt": yesterday.isoformat(),
        },
    ]


def seed_default_posts(repo) -> int:
    """Insert the welcome stories when the posts collection is empty."""
    if repo.list_all():
        return 0
    created = repo.create_many(build_default_posts())
    logger.info(f"Seeded {len(created)} default posts")
    return len(created)
