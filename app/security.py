import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from starlette.status import HTTP_401_UNAUTHORIZED

from app.schemas.auth import CurrentUser
from app.settings import Settings, settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# pbkdf2 for new hashes; bcrypt hashes from the previous store still verify.
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unknown or malformed hash
        return False


def create_access_token(
    user: CurrentUser,
    current_settings: Settings,
    now: Optional[datetime] = None,
) -> str:
    if not current_settings.JWT_SECRET:
        raise ValueError("JWT_SECRET is not configured")
    issued = now or datetime.now(timezone.utc)
    claims = {
        **user.model_dump(),
        "iat": issued,
        "exp": issued + timedelta(hours=current_settings.JWT_EXPIRES_HOURS),
    }
    return jwt.encode(claims, current_settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str, current_settings: Settings) -> CurrentUser:
    payload = jwt.decode(token, current_settings.JWT_SECRET, algorithms=[ALGORITHM])
    return CurrentUser(**payload)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    current_settings: Settings = Depends(get_settings),
) -> CurrentUser:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized()
    try:
        return decode_access_token(credentials.credentials, current_settings)
    except (JWTError, ValueError) as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise _unauthorized()


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
        headers={"WWW-Authenticate": "Bearer"},
    )
