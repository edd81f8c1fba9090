"""
Configuration management for DocIntro application.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import Annotated, List, Optional

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(default="", description="MongoDB connection URI")
    db_name: str = Field(default="docintro", description="MongoDB database name")

    @field_validator("uri")
    @classmethod
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if not v:
            raise ValueError("MongoDB URI is required. Please set MONGO_URI environment variable.")
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Extra allowed CORS origins (the frontend URL is always allowed)",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string format
            if v.startswith("[") and v.endswith("]"):
                import json

                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [o.strip() for o in v.split(",") if o.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class VideoSettings(BaseSettings):
    """Recorded video storage and processing settings."""

    model_config = SettingsConfigDict(env_prefix="VIDEO_")

    storage_dir: str = Field(default="./videos", description="Root directory for chunk and final video files")
    storage_mode: str = Field(default="local", description="Where finalized videos live (local or azure)")
    chunk_extension: str = Field(default=".webm", description="Extension of recorded chunk files")
    final_filename: str = Field(default="final_video.webm", description="Name of the merged video inside its directory")
    max_chunk_size_mb: int = Field(default=50, description="Maximum size of a single uploaded chunk in MB")
    caption_overlay: bool = Field(default=False, description="Burn the doctor's name into remote videos with ffmpeg")
    ffmpeg_path: str = Field(default="ffmpeg", description="ffmpeg executable used for the caption overlay")

    @field_validator("storage_mode")
    @classmethod
    def validate_storage_mode(cls, v: str) -> str:
        """Validate storage mode."""
        valid_modes = ["local", "azure"]
        if v.lower() not in valid_modes:
            raise ValueError(f"Video storage mode must be one of: {valid_modes}")
        return v.lower()

    @field_validator("chunk_extension")
    @classmethod
    def validate_chunk_extension(cls, v: str) -> str:
        v = v.strip().lower()
        if not v.startswith("."):
            v = f".{v}"
        return v

    @field_validator("max_chunk_size_mb")
    @classmethod
    def validate_max_chunk_size(cls, v: int) -> int:
        """Validate max chunk size."""
        if v <= 0 or v > 500:
            raise ValueError("Max chunk size must be between 1 and 500 MB")
        return v


class AzureBlobSettings(BaseSettings):
    """Azure Blob Storage configuration settings."""

    model_config = SettingsConfigDict(env_prefix="AZURE_BLOB_")

    account_name: str = Field(default="", description="Azure Storage Account Name")
    account_key: str = Field(default="", description="Azure Storage Account Key")
    connection_string: str = Field(default="", description="Azure Storage Connection String")
    container_name: str = Field(default="doctor-videos", description="Blob container name")
    use_signed_urls: bool = Field(default=False, description="Return SAS URLs instead of plain blob URLs")
    default_expiry_hours: int = Field(default=24 * 365, description="Default expiry for signed URLs in hours")

    @field_validator("connection_string")
    @classmethod
    def validate_connection_string(cls, v: str) -> str:
        """Validate Azure Storage connection string."""
        if v and not v.startswith("DefaultEndpointsProtocol="):
            raise ValueError("Invalid Azure Storage connection string format")
        return v


class SendGridSettings(BaseSettings):
    """SendGrid email delivery settings."""

    model_config = SettingsConfigDict(env_prefix="SENDGRID_")

    api_key: str = Field(default="", description="SendGrid API key (empty disables email delivery)")
    from_email: str = Field(default="noreply@docintro.local", description="Sender address for invite emails")


class NotificationSettings(BaseSettings):
    """Recording invite delivery settings."""

    model_config = SettingsConfigDict(env_prefix="NOTIFY_")

    max_attempts: int = Field(default=3, description="Delivery attempts before an invite is marked failed")
    retry_base_delay: float = Field(default=1.0, description="Base delay in seconds for exponential backoff")

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        if not 1 <= v <= 10:
            raise ValueError("max_attempts must be between 1 and 10")
        return v


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="DocIntro", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=5001, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Public URLs
    front_end_url: str = Field(
        default="http://localhost:3000",
        description="Frontend base URL used for recording links and CORS",
    )
    back_end_url: str = Field(
        default="http://localhost:5001",
        description="Backend base URL used to build servable video URLs",
    )

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    video: VideoSettings = Field(default_factory=VideoSettings)
    azure_blob: AzureBlobSettings = Field(default_factory=AzureBlobSettings)
    sendgrid: SendGridSettings = Field(default_factory=SendGridSettings)
    notification: NotificationSettings = Field(default_factory=NotificationSettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("front_end_url", "back_end_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def allowed_origins(self) -> List[str]:
        """Browser origins allowed by CORS: the frontend plus any extras."""
        origins = [self.front_end_url, *self.cors.allowed_origins]
        return list(dict.fromkeys(o.rstrip("/") for o in origins if o))

    @property
    def video_root(self) -> Path:
        return Path(self.video.storage_dir).resolve()


# Global settings instance (loaded after attempting to read .env)
_settings: Optional[Settings] = None


def _load_env_file_if_available() -> None:
    """Best-effort load of .env by searching current and parent directories.

    This helps in environments where the working directory isn't the backend folder
    and pydantic's env_file doesn't get resolved as expected.
    """
    from dotenv import load_dotenv

    cwd = Path(os.getcwd()).resolve()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / ".env"
        if candidate.exists():
            # Do not override already-set environment variables
            load_dotenv(dotenv_path=str(candidate), override=False)
            break


def get_settings() -> Settings:
    """Get application settings instance (lazy-init with .env discovery)."""
    global _settings
    if _settings is None:
        _load_env_file_if_available()
        _settings = Settings()
    return _settings
