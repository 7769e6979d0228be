"""Local storage for uploaded recipe and meal images."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional
from uuid import uuid4

from mealplan.config import Settings, get_settings

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: Optional[str]) -> str:
    """Strip directories and unsafe characters from an uploaded filename."""

    base = Path(filename or "").name
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "image"


def store_image(filename: Optional[str], content: bytes, settings: Settings | None = None) -> str:
    """Write ``content`` under a random prefix and return its public URL."""

    settings = settings or get_settings()
    settings.image_dir.mkdir(parents=True, exist_ok=True)
    stored_name = f"{uuid4().hex}{safe_filename(filename)}"
    (settings.image_dir / stored_name).write_bytes(content)
    logger.info("Stored image %s (%s bytes)", stored_name, len(content))
    return f"{settings.image_base_url.rstrip('/')}/{stored_name}"


def resolve_image(name: str, settings: Settings | None = None) -> Optional[Path]:
    """Return the stored file for ``name`` or ``None`` when it is unknown."""

    settings = settings or get_settings()
    if safe_filename(name) != name:
        return None
    path = settings.image_dir / name
    return path if path.is_file() else None


__all__ = ["safe_filename", "store_image", "resolve_image"]
