"""Ingestion — screen model files and hand their text to the rule engine."""

from __future__ import annotations

import logging
from pathlib import Path

from aecqa.config import ALLOWED_EXTENSIONS, MAX_FILE_SIZE_BYTES, TEXT_ENCODING

logger = logging.getLogger(__name__)


class IngestionError(ValueError):
    """A file was rejected before validation."""

    def __init__(self, path: str | Path, code: str, message: str) -> None:
        super().__init__(f"{Path(path).name}: {message}")
        self.file = Path(path).name
        self.code = code


def screen_file(
    path: str | Path,
    *,
    max_size: int = MAX_FILE_SIZE_BYTES,
    extensions: tuple[str, ...] = ALLOWED_EXTENSIONS,
) -> Path:
    """Check that *path* is an existing model file within the size limit."""
    path = Path(path)
    if not path.is_file():
        raise IngestionError(path, "file-not-found", "file not found")
    if path.suffix.lower() not in extensions:
        raise IngestionError(
            path, "file-invalid-type", f"expected one of {', '.join(extensions)}"
        )
    size = path.stat().st_size
    if size > max_size:
        raise IngestionError(
            path, "file-too-large", f"{size} bytes exceeds the {max_size} byte limit"
        )
    return path


def load_model_text(path: str | Path, *, max_size: int = MAX_FILE_SIZE_BYTES) -> str:
    """Screen *path* and return its text; undecodable bytes are replaced."""
    path = screen_file(path, max_size=max_size)
    text = path.read_text(encoding=TEXT_ENCODING, errors="replace")
    logger.debug("Loaded %s (%d characters)", path.name, len(text))
    return text
