from fastapi import Depends, Request

from app.db.couchdb import get_couch
from app.repos.posts_repo import CouchPostsRepo
from app.repos.users_repo import CouchUsersRepo
from app.security import get_settings
from app.services.auth_service import AuthService
from app.services.image_service import CloudinaryImageStorage, InlineImageStorage
from app.services.login_limiter import LoginRateLimiter
from app.services.posts_service import PostsService


def get_posts_repo(couch=Depends(get_couch)):
    return CouchPostsRepo(couch.posts_db)


def get_users_repo(couch=Depends(get_couch)):
    return CouchUsersRepo(couch.users_db)


def get_posts_service(repo=Depends(get_posts_repo)):
    return PostsService(repo=repo)


def get_login_limiter(request: Request) -> LoginRateLimiter:
    return request.app.state.login_limiter


def get_auth_service(
    users_repo=Depends(get_users_repo),
    limiter=Depends(get_login_limiter),
    current_settings=Depends(get_settings),
):
    return AuthService(users_repo=users_repo, limiter=limiter, current_settings=current_settings)


def get_inline_storage(current_settings=Depends(get_settings)):
    return InlineImageStorage(max_bytes=current_settings.INLINE_UPLOAD_MAX_BYTES)


def get_cloudinary_storage(current_settings=Depends(get_settings)):
    storage = CloudinaryImageStorage.from_settings(current_settings)
    try:
        yield storage
    finally:
        storage.close()
