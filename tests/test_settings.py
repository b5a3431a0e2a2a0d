from pathlib import Path

from app.settings import Settings, choose_env_file


def test_couchdb_url_uses_environment():
    s = Settings(
        COUCHDB_USERNAME="u",
        COUCHDB_PASSWORD="p",
        COUCHDB_HOST="h",
        COUCHDB_PORT=1234,
    )
    assert s.couchdb_url == "http://u:p@h:1234"


def test_upload_limits_default_to_five_and_ten_megabytes():
    s = Settings()
    assert s.INLINE_UPLOAD_MAX_BYTES == 5 * 1024 * 1024
    assert s.CLOUDINARY_UPLOAD_MAX_BYTES == 10 * 1024 * 1024


def test_is_production_is_case_insensitive():
    assert Settings(ENVIRONMENT="Production").is_production is True
    assert Settings(ENVIRONMENT="development").is_production is False


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
