import logging
from datetime import datetime, timezone

from app.schemas.auth import CurrentUser, LoginResponse, UserInfo
from app.security import create_access_token, hash_password, verify_password
from app.services.login_limiter import LoginRateLimiter
from app.settings import Settings

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    pass


class TooManyAttemptsError(Exception):
    pass


class AuthService:
    def __init__(self, users_repo, limiter: LoginRateLimiter, current_settings: Settings):
        self.users_repo = users_repo
        self.limiter = limiter
        self.settings = current_settings

    def login(self, username: str, password: str) -> LoginResponse:
        if not self.limiter.is_allowed(username):
            logger.warning(f"Login locked out for {username}")
            raise TooManyAttemptsError(username)

        user = self.users_repo.get(username)
        if user is None:
            user = self._bootstrap_admin(username)

        if not user or not verify_password(password, user.get("password", "")):
            self.limiter.record(username, success=False)
            logger.warning(f"Invalid credentials for {username}")
            raise InvalidCredentialsError(username)

        self.limiter.record(username, success=True)
        self.users_repo.touch_last_login(user, datetime.now(timezone.utc).isoformat())

        identity = CurrentUser(
            username=user["username"],
            id=user.get("_id", user["username"]),
            role=user.get("role", "admin"),
        )
        token = create_access_token(identity, self.settings)
        logger.info(f"User {username} logged in")
        return LoginResponse(
            token=token,
            user=UserInfo(username=identity.username, role=identity.role),
            expiresIn=f"{self.settings.JWT_EXPIRES_HOURS}h",
        )

    def _bootstrap_admin(self, username: str):
        """Create the configured admin account the first time it logs in."""
        if not self.settings.ADMIN_USERNAME or username != self.settings.ADMIN_USERNAME:
            return None
        if not self.settings.ADMIN_PASSWORD:
            return None
        logger.info(f"Creating admin user {username}")
        return self.users_repo.create(
            username, hash_password(self.settings.ADMIN_PASSWORD), role="admin"
        )
