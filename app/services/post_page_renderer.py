import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from app.services.content_formatter import format_content, safe_url
from app.settings import settings
from app.utils import calculate_reading_time, slugify

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
DESCRIPTION_LENGTH = 160
_DESCRIPTION_NOISE = re.compile(r"[#*`_\[\]()]")

templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_post_page(post: Dict[str, Any], *, base_url: Optional[str] = None) -> str:
    """Render the full HTML document for a published post."""
    context = build_page_context(post, base_url=base_url)
    return templates.get_template("post.html").render(**context)


def render_not_found_page(slug: Optional[str] = None) -> str:
    return templates.get_template("not_found.html").render(
        slug=slug, site_name=settings.SITE_NAME
    )


def render_error_page() -> str:
    return templates.get_template("error.html").render(site_name=settings.SITE_NAME)


def build_page_context(post: Dict[str, Any], *, base_url: Optional[str] = None) -> dict:
    base_url = (base_url or settings.SITE_BASE_URL).rstrip("/")
    site_name = settings.SITE_NAME
    page_url = f"{base_url}/post/{slugify(post.get('title'))}"

    title = post.get("title") or ""
    tags = post.get("tags") or []
    seo_title = post.get("seoTitle") or f"{title} - {site_name}"
    seo_description = derive_description(post)
    seo_keywords = (
        post.get("seoKeywords") or ", ".join(tags) or settings.SITE_DEFAULT_KEYWORDS
    )
    image = post.get("seoImage") or post.get("featuredImage") or settings.SITE_DEFAULT_IMAGE
    image_url = absolute_url(image, base_url)
    author = post.get("author") or site_name
    published_time = to_iso_timestamp(post.get("date") or post.get("createdAt"))
    content_html = post.get("contentHtml") or format_content(post.get("content"))

    structured_data = {
        "@context": "https://schema.org",
        "@type": "Article",
        "headline": title,
        "description": seo_description,
        "author": {"@type": "Organization", "name": author, "url": base_url},
        "publisher": {
            "@type": "Organization",
            "name": site_name,
            "url": base_url,
            "logo": {
                "@type": "ImageObject",
                "url": absolute_url(settings.SITE_DEFAULT_IMAGE, base_url),
            },
        },
        "datePublished": published_time,
        "mainEntityOfPage": page_url,
        "image": image_url,
        "keywords": seo_keywords,
        "articleSection": post.get("type"),
        "inLanguage": "en-US",
    }

    return {
        "post": post,
        "title": title,
        "site_name": site_name,
        "twitter_handle": settings.SITE_TWITTER_HANDLE,
        "seo_title": seo_title,
        "seo_description": seo_description,
        "seo_keywords": seo_keywords,
        "robots": "noindex, nofollow" if post.get("noIndex") else "index, follow",
        "page_url": page_url,
        "canonical_url": post.get("canonicalUrl") or page_url,
        "image_url": image_url,
        "featured_image": image if image != settings.SITE_DEFAULT_IMAGE else None,
        "author": author,
        "show_author": author != site_name,
        "published_time": published_time,
        "display_date": format_display_date(post.get("date")),
        "reading_time": calculate_reading_time(post.get("content")),
        "tags": tags,
        "link": safe_url(post["link"]) if post.get("link") else None,
        # Admin-authored HTML and formatter output are already safe markup.
        "content_html": Markup(content_html),
        "is_html_content": bool(post.get("contentHtml")),
        "structured_data": structured_data,
    }


def derive_description(post: Dict[str, Any]) -> str:
    if post.get("seoDescription"):
        return post["seoDescription"]
    if post.get("excerpt"):
        return post["excerpt"]
    content = post.get("content")
    if content:
        snippet = _DESCRIPTION_NOISE.sub("", content[:DESCRIPTION_LENGTH]).strip()
        return f"{snippet}..."
    return settings.SITE_DEFAULT_DESCRIPTION


def absolute_url(path: str, base_url: str) -> str:
    if path.startswith("http"):
        return path
    return f"{base_url}{path}"


def to_iso_timestamp(value: Optional[str]) -> Optional[str]:
    parsed = _parse_date(value)
    return parsed.isoformat() if parsed else None


def format_display_date(value: Optional[str]) -> str:
    parsed = _parse_date(value)
    if not parsed:
        return "Unknown date"
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def _parse_date(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparseable post date: {value}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
