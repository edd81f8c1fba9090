"""
Configuration tests: .env discovery precedence and settings validation.
"""

import os

import pytest
from pydantic import ValidationError

from docintro.core import config
from docintro.core.config import DatabaseSettings, Settings, VideoSettings


@pytest.fixture
def fresh_settings(monkeypatch):
    """Reset the cached settings instance around a test."""
    monkeypatch.setattr(config, "_settings", None)
    yield
    config._settings = None


@pytest.fixture
def isolated_environ(monkeypatch):
    """Give load_dotenv a throwaway os.environ to write into."""
    monkeypatch.setattr(os, "environ", dict(os.environ))


def test_env_file_found_in_parent_directory(monkeypatch, tmp_path, fresh_settings, isolated_environ):
    monkeypatch.delenv("MONGO_URI", raising=False)
    monkeypatch.delenv("MONGO_DB_NAME", raising=False)
    (tmp_path / ".env").write_text("MONGO_URI=mongodb://from-env-file:27017/test\nMONGO_DB_NAME=from_env\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    settings = config.get_settings()

    assert settings.database.uri == "mongodb://from-env-file:27017/test"
    assert settings.database.db_name == "from_env"


def test_already_set_env_vars_take_precedence(monkeypatch, tmp_path, isolated_environ):
    monkeypatch.setenv("MONGO_URI", "mongodb://already-set:27017/test")
    (tmp_path / ".env").write_text("MONGO_URI=mongodb://from-env-file:27017/test\n")
    monkeypatch.chdir(tmp_path)

    config._load_env_file_if_available()

    assert os.getenv("MONGO_URI") == "mongodb://already-set:27017/test"


def test_no_env_file_does_not_crash(monkeypatch, tmp_path, isolated_environ):
    monkeypatch.chdir(tmp_path)

    config._load_env_file_if_available()


def test_mongo_uri_is_required(monkeypatch):
    monkeypatch.delenv("MONGO_URI", raising=False)

    with pytest.raises(ValidationError):
        DatabaseSettings()


def test_mongo_uri_scheme_is_validated():
    with pytest.raises(ValidationError):
        DatabaseSettings(uri="postgres://localhost")


def test_video_settings_from_environment(monkeypatch):
    monkeypatch.setenv("VIDEO_STORAGE_MODE", "AZURE")
    monkeypatch.setenv("VIDEO_CHUNK_EXTENSION", "WEBM")
    monkeypatch.setenv("VIDEO_CAPTION_OVERLAY", "true")

    video = VideoSettings()

    assert video.storage_mode == "azure"
    assert video.chunk_extension == ".webm"
    assert video.caption_overlay is True


def test_unknown_storage_mode_rejected():
    with pytest.raises(ValidationError):
        VideoSettings(storage_mode="ftp")


def test_allowed_origins_always_include_frontend(monkeypatch):
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://admin.test, http://localhost:3000/")

    settings = Settings(
        front_end_url="http://localhost:3000/",
        database=DatabaseSettings(uri="mongodb://localhost:27017"),
    )

    assert settings.front_end_url == "http://localhost:3000"
    assert settings.allowed_origins == ["http://localhost:3000", "https://admin.test"]
