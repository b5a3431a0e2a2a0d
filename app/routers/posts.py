import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from starlette.status import HTTP_201_CREATED

from app import dependencies as deps
from app.schemas.auth import CurrentUser
from app.schemas.blog import MessageResponse, Post, PostCreate, PostUpdate
from app.security import get_current_user, get_settings
from app.services.default_posts import seed_default_posts
from app.services.posts_service import InvalidPostError, PostsService
from app.settings import Settings

logger = logging.getLogger(__name__)

PUBLIC_CACHE_CONTROL = "public, max-age=300"

router = APIRouter()
public_router = APIRouter()


# --- Public (published posts only) ---


@public_router.get("/posts-public", response_model=Union[Post, List[Post]])
def list_public_posts(
    response: Response,
    featured: bool = False,
    slug: Optional[str] = None,
    post_id: Optional[str] = Query(None, alias="id"),
    service: PostsService = Depends(deps.get_posts_service),
    current_settings: Settings = Depends(get_settings),
):
    """Published posts, or a single one when `slug` or `id` is given."""
    try:
        if slug:
            post = service.get_by_slug(slug)
        elif post_id:
            post = service.get_by_id(post_id, published_only=True)
        else:
            posts = service.list_published(featured_only=featured)
            if not posts and not featured and current_settings.SEED_DEFAULT_POSTS:
                seed_default_posts(service.repo)
                posts = service.list_published()
            response.headers["Cache-Control"] = PUBLIC_CACHE_CONTROL
            return posts

        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        response.headers["Cache-Control"] = PUBLIC_CACHE_CONTROL
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error reading public posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@public_router.get("/posts-public/{post_id}", response_model=Post)
def get_public_post(
    post_id: str,
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.get_by_id(post_id, published_only=True)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        response.headers["Cache-Control"] = PUBLIC_CACHE_CONTROL
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving public post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


# --- Admin (any status) ---


@router.get("/posts", response_model=List[Post])
def list_posts(
    user: CurrentUser = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get all posts, drafts included."""
    try:
        return service.list_all()
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{post_id}", response_model=Post)
def get_post(
    post_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.get_by_id(post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")


@router.post("/posts", response_model=Post, status_code=HTTP_201_CREATED)
def create_post(
    draft: PostCreate,
    user: CurrentUser = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        return service.create(draft, author=user.username)
    except InvalidPostError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error creating post: {e}")
        raise HTTPException(status_code=500, detail="Failed to create post")


@router.put("/posts/{post_id}", response_model=Post)
def update_post(
    post_id: str,
    patch: PostUpdate,
    user: CurrentUser = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        post = service.update(post_id, patch, author=user.username)
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")
        return post
    except HTTPException:
        raise
    except InvalidPostError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error updating post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update post")


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: PostsService = Depends(deps.get_posts_service),
):
    try:
        if not service.delete(post_id):
            raise HTTPException(status_code=404, detail="Post not found")
        return MessageResponse(message="Post deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Unexpected error deleting post {post_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete post")
