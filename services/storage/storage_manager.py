"""
Storage Manager - Orchestrates Gist and Local storage.
Implements fallback strategy: Gist (primary) → Local (cache).

The whole document is read and written at once. Two sessions editing
the same document overwrite each other (last write wins); the app is
meant for a single operator.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..document_adapter import normalize_document, validate_document
from ..utils import get_document_path
from .gist_storage import GistError, GistStorage
from .local_storage import LocalStorage

logger = logging.getLogger(__name__)


class StorageManager:
    """Coordinates Gist and Local storage with fallback logic."""

    def __init__(
        self,
        local_path: Optional[Path] = None,
        gist: Optional[GistStorage] = None,
    ):
        """
        Initialize storage manager.

        Args:
            local_path: Path to local document file. If None, uses default.
            gist: Gist mirror. If None, one is built from settings.
        """
        self.local_path = local_path or get_document_path()
        self.gist = gist if gist is not None else GistStorage()
        self.local = LocalStorage(self.local_path)
        self._last_warning: Optional[str] = None

    def get_last_warning(self) -> Optional[str]:
        """Get last warning message (for UI display)."""
        return self._last_warning

    def _set_warning(self, message: str) -> None:
        logger.warning(message)
        self._last_warning = message

    def load(self) -> Dict[str, Any]:
        """
        Load the document with Gist-first fallback strategy.

        Strategy:
        1. Try Gist (primary source)
        2. On success: cache to local and return
        3. On failure: fall back to local cache

        Returns:
            Normalized document
        """
        # STEP 1: Try Gist first
        if self.gist.is_available():
            try:
                data = normalize_document(self.gist.load())
                self.local.save(data)
                self._last_warning = None
                return data
            except GistError as e:
                self.gist.disable()
                self._set_warning(f"Cloud storage unavailable: {e}. Using local cache.")

        # STEP 2: Fall back to local cache (created with defaults if missing)
        return normalize_document(self.local.load())

    def save(self, data: Dict[str, Any]) -> Path:
        """
        Overwrite the stored document.

        Strategy:
        1. Validate the document
        2. Save to Gist (primary), warn and continue if it fails
        3. Always save to Local (cache)

        Args:
            data: Full document

        Returns:
            Path to local file

        Raises:
            DocumentError: If the document is structurally invalid
        """
        validate_document(data)

        if self.gist.is_available():
            try:
                self.gist.save(data)
                self._last_warning = None
            except GistError as e:
                self.gist.disable()
                self._set_warning(f"Cloud storage sync failed: {e}. Data saved locally only.")

        local_path = self.local.save(data)
        logger.info("Document saved to %s", local_path)
        return local_path

    def get_path(self) -> Path:
        """Get path to local document file."""
        return self.local_path

    def get_mtime(self) -> str:
        """Get last modification time of local document."""
        return self.local.get_mtime()
