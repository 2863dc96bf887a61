# This file stores and removes uploaded image files for the API.
# It exists so testimonial avatars follow one naming, size, and extension policy.
# Saved files are referenced by a path relative to the media root so the database stays portable.
# Removal is best-effort: failures are logged and never abort the surrounding request.

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from clinic_site.api.api_config import ApiConfig
from clinic_site.api.error_handlers import BadRequestError

LOGGER = logging.getLogger("uploads")

AVATAR_SUBFOLDER = "images/testifier_avatar"
AVATAR_PREFIX = "testifier-avatar"


def _extension(filename: str | None) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def validate_image(file: UploadFile, *, config: ApiConfig) -> str:
    """Return the normalized extension or raise a 400 for a non-image upload."""

    ext = _extension(file.filename)
    if ext not in config.allowed_image_extensions:
        allowed = ", ".join(config.allowed_image_extensions)
        raise BadRequestError(f"Only image files are allowed ({allowed}).")
    return ext


def save_image(
    file: UploadFile,
    *,
    config: ApiConfig,
    subfolder: str = AVATAR_SUBFOLDER,
    prefix: str = AVATAR_PREFIX,
) -> str:
    """Write an uploaded image under the upload dir and return its relative path."""

    ext = validate_image(file, config=config)
    content = file.file.read()
    if len(content) > config.max_upload_size:
        limit_mb = config.max_upload_size / (1024 * 1024)
        raise BadRequestError(f"File exceeds the {limit_mb:g} MB upload limit.")

    relative = Path(config.upload_dir) / subfolder / f"{prefix}-{uuid.uuid4().hex}.{ext}"
    target = Path(config.media_root) / relative
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
    LOGGER.info("Stored upload %s (%d bytes)", relative.as_posix(), len(content))
    return relative.as_posix()


def resolve_media_path(relative_path: str, *, config: ApiConfig) -> Path:
    return Path(config.media_root) / relative_path.lstrip("/")


def remove_file(relative_path: str | None, *, config: ApiConfig) -> bool:
    """Delete a stored upload; returns False when nothing was removed."""

    if not relative_path:
        return False
    target = resolve_media_path(relative_path, config=config)
    try:
        target.unlink()
    except FileNotFoundError:
        LOGGER.warning("Upload already missing: %s", target)
        return False
    except OSError:
        LOGGER.warning("Failed to remove upload %s", target, exc_info=True)
        return False
    return True
