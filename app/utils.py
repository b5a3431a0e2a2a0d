import math
import re
import time

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(title: str | None) -> str:
    """Derive the URL slug of a post title. Never stored, recomputed on lookup."""
    if not title:
        return ""
    slug = _DISALLOWED_CHARS.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def generate_post_id(title: str, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{slugify(title)}-{now_ms}"


def calculate_reading_time(text: str | None) -> int:
    words = (text or "").split()
    return math.ceil(len(words) / 200) or 1
