"""Image upload helpers for avatars and restaurant photos."""

import logging
import os
from typing import Optional
from uuid import uuid4

import requests
from django.conf import settings
from django.core.files.storage import default_storage

from core.exceptions import AppError

logger = logging.getLogger(__name__)

SAFE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def _safe_ext(filename: str) -> str:
    ext = os.path.splitext(filename or "")[1].lower()
    return ext if ext in SAFE_EXTS else ".jpg"


def _upload_to_imgur(file, client_id: str) -> str:
    """POST the raw bytes to Imgur and return the hosted image link."""
    file.seek(0)
    r = requests.post(
        settings.IMGUR_UPLOAD_URL,
        headers={"Authorization": f"Client-ID {client_id}"},
        files={"image": (file.name, file.read())},
        timeout=15,
    )
    r.raise_for_status()
    link = ((r.json() or {}).get("data") or {}).get("link")
    if not link:
        raise ValueError("Imgur response has no image link")
    return link


def _save_to_storage(file, storage=None, subdir: str = "uploads") -> str:
    """Save to the default storage (local in dev, S3 in prod) and return its URL."""
    storage = storage or default_storage
    name = storage.save(f"{subdir}/{uuid4().hex}{_safe_ext(file.name)}", file)
    return storage.url(name)


def image_file_handler(file, storage=None) -> Optional[str]:
    """
    Store an uploaded image and return where it can be served from.

    Returns None when no file was sent, so callers can keep the previous image.
    Uses Imgur when IMGUR_CLIENT_ID is configured, the media storage otherwise.
    """
    if not file:
        return None

    client_id = getattr(settings, "IMGUR_CLIENT_ID", None)
    try:
        if client_id:
            return _upload_to_imgur(file, client_id)
        return _save_to_storage(file, storage=storage)
    except (requests.RequestException, ValueError, OSError) as exc:
        logger.warning("Image upload failed: %s", exc)
        raise AppError("Image upload failed!") from exc
