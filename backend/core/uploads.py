"""Local filesystem storage for uploaded cocktail images.

Layout:
    <upload_dir>/<sanitized stem>-<epoch ms><ext>

Stored files are served back under ``UPLOAD_URL_PREFIX`` so a record's image
reference can be told apart from an external URL by its prefix.
"""

import logging
import re
import time
from pathlib import Path
from typing import Optional

from core.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"
ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
}
# client suffixes kept as sent; anything else is replaced by the content type's own
KNOWN_SUFFIXES = {
    "image/jpeg": {".jpg", ".jpeg"},
    "image/png": {".png"},
}
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def size_limit_message(max_bytes: int) -> str:
    return f"File too large. Maximum size is {max_bytes // (1024 * 1024)}MB"


def check_image(content_type: Optional[str], size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """Raise ValidationError unless the image may be stored."""
    if (content_type or "").strip().lower() not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Only JPEG and PNG images are allowed")
    if size > max_bytes:
        raise ValidationError(size_limit_message(max_bytes))


def _sanitise(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_-]", "_", name) or "image"


def is_uploaded_reference(reference: Optional[str]) -> bool:
    return bool(reference) and reference.startswith(UPLOAD_URL_PREFIX)


class LocalImageStorage:
    """Writes each accepted upload to a new, uniquely named file."""

    def __init__(self, upload_dir: str, max_bytes: int = MAX_UPLOAD_BYTES):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def store(self, data: bytes, filename: Optional[str], content_type: Optional[str]) -> str:
        """Validate and store an image, returning its ``/uploads/...`` reference."""
        check_image(content_type, len(data), self.max_bytes)

        content_type = content_type.strip().lower()
        original = Path(filename or "")
        stem = _sanitise(original.stem)
        suffix = original.suffix.lower()
        if suffix not in KNOWN_SUFFIXES[content_type]:
            suffix = ALLOWED_CONTENT_TYPES[content_type]

        stamp = int(time.time() * 1000)
        while True:
            stored_name = f"{stem}-{stamp}{suffix}"
            dest_path = self.upload_dir / stored_name
            try:
                with open(dest_path, "xb") as fh:
                    fh.write(data)
                break
            except FileExistsError:
                stamp += 1
            except OSError as e:
                raise StorageError(f"Error storing image: {e}") from e

        logger.info("Stored upload %s (%d bytes)", dest_path, len(data))
        return UPLOAD_URL_PREFIX + stored_name
