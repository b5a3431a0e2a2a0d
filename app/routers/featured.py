import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from app import dependencies as deps
from app.schemas.auth import CurrentUser
from app.schemas.blog import FeaturedPostRequest, FeaturedPostResponse, Post
from app.security import get_current_user
from app.services.posts_service import PostsService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/featured-post", response_model=Post)
def get_featured_post(
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Flagged post, else the latest published one. 404 means keep default content."""
    response.headers["Cache-Control"] = "public, max-age=300"
    try:
        post = service.get_featured()
        if not post:
            raise HTTPException(
                status_code=404,
                detail="No featured post found",
                headers={"Cache-Control": "public, max-age=300"},
            )
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving featured post: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve featured post")


@router.post("/featured-post", response_model=FeaturedPostResponse)
def set_featured_post(
    body: FeaturedPostRequest,
    user: CurrentUser = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.set_featured(body.postId)
        if not body.postId:
            return FeaturedPostResponse(message="Featured post cleared successfully")
        if not post:
            raise HTTPException(status_code=404, detail="Post not found or not published")
        return FeaturedPostResponse(message="Featured post updated successfully", post=post)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error setting featured post: {e}")
        raise HTTPException(status_code=500, detail="Failed to update featured post")
