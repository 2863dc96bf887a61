# This file defines runtime settings for the API layer in one place.
# It exists so routing prefixes, auth, CORS, and upload limits can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# It also validates prefixes and size limits so misconfiguration fails at startup.

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "gif", "webp"]


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Clinic Website API"
    api_prefix: str = "/api"
    app_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8000
    environment: str = "local"
    database_url: str
    allowed_origins: list[str] = Field(default_factory=list)
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 480
    media_root: str = "."
    upload_dir: str = "uploads"
    max_upload_size: int = 5 * 1024 * 1024
    allowed_image_extensions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IMAGE_EXTENSIONS)
    )

    @field_validator("api_prefix")
    @classmethod
    def validate_api_prefix(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("api_prefix must start with '/'.")
        return value.rstrip("/")

    @field_validator("access_token_expire_minutes", "max_upload_size")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("jwt_secret_key must not be empty.")
        return value

    @field_validator("allowed_image_extensions")
    @classmethod
    def normalize_extensions(cls, value: list[str]) -> list[str]:
        return [item.strip().lower().lstrip(".") for item in value if item.strip()]


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Clinic Website API"),
        "api_prefix": os.getenv("API_PREFIX", "/api"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8000),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "jwt_secret_key": os.getenv("JWT_SECRET_KEY", ""),
        "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
        "access_token_expire_minutes": _env_int("API_ACCESS_TOKEN_EXPIRE_MINUTES", 480),
        "media_root": os.getenv("API_MEDIA_ROOT", "."),
        "upload_dir": os.getenv("API_UPLOAD_DIR", "uploads"),
        "max_upload_size": _env_int("API_MAX_UPLOAD_SIZE", 5 * 1024 * 1024),
        "allowed_image_extensions": _env_list(
            "API_ALLOWED_IMAGE_EXTENSIONS", DEFAULT_IMAGE_EXTENSIONS
        ),
    }
    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")
    if not config_values["jwt_secret_key"]:
        raise RuntimeError("JWT_SECRET_KEY is required for API startup.")

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
