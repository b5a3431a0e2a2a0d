import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from app import dependencies as deps
from app.services.post_page_renderer import (
    render_error_page,
    render_not_found_page,
    render_post_page,
)
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/post/{slug}", response_class=HTMLResponse)
def post_page(slug: str, service: PostsService = Depends(deps.get_posts_service)):
    """Server-rendered story page with SEO metadata."""
    try:
        post = service.get_by_slug(slug)
        if not post:
            logger.warning(f"No published post for slug '{slug}'")
            return HTMLResponse(render_not_found_page(slug), status_code=404)
        html = render_post_page(post.model_dump())
    except Exception as e:
        logger.error(f"Failed to render post page {slug}: {e}", exc_info=True)
        return HTMLResponse(render_error_page(), status_code=500)

    return HTMLResponse(html, headers={"Cache-Control": "public, max-age=300"})
