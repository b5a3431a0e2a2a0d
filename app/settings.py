from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # CouchDB
    COUCHDB_HOST: str = "localhost"
    COUCHDB_PORT: int = 5984
    COUCHDB_USERNAME: str = "admin"
    COUCHDB_PASSWORD: str = ""
    COUCHDB_POSTS_DATABASE: str = "posts"
    COUCHDB_USERS_DATABASE: str = "users"

    # Auth
    JWT_SECRET: str = ""
    JWT_EXPIRES_HOURS: int = 8
    ADMIN_USERNAME: str = ""
    ADMIN_PASSWORD: str = ""
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_LOCKOUT_SECONDS: int = 15 * 60

    # Site
    SITE_BASE_URL: str = "https://soleracask.netlify.app"
    SITE_NAME: str = "Solera Cask"
    SITE_DEFAULT_DESCRIPTION: str = (
        "Premium sherry barrels from Jerez de la Frontera, Spain"
    )
    SITE_DEFAULT_KEYWORDS: str = (
        "sherry barrels, whisky aging, rum finishing, Jerez, Spain"
    )
    SITE_DEFAULT_IMAGE: str = "/images/logos/Solera-Cask-Logo.png"
    SITE_TWITTER_HANDLE: str = "@soleracask"
    SEED_DEFAULT_POSTS: bool = False

    # Uploads
    INLINE_UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024
    CLOUDINARY_UPLOAD_MAX_BYTES: int = 10 * 1024 * 1024
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_FOLDER: str = "solera-cask"

    # Runtime
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    @property
    def couchdb_url(self) -> str:
        return f"http://{self.COUCHDB_USERNAME}:{self.COUCHDB_PASSWORD}@{self.COUCHDB_HOST}:{self.COUCHDB_PORT}"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
