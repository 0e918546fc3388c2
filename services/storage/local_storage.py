"""
Local file storage implementation.
Handles document persistence to a local JSON file.
"""

from __future__ import annotations
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from pricing.models import default_document

from ..errors import DocumentError

logger = logging.getLogger(__name__)


class LocalStorage:
    """Handles local file operations for the pricing document."""

    def __init__(self, file_path: Path):
        """
        Initialize local storage.

        Args:
            file_path: Path to the document JSON file
        """
        self.file_path = file_path

    def exists(self) -> bool:
        """Check if the document file exists."""
        return self.file_path.exists()

    def load(self) -> Dict[str, Any]:
        """
        Load the document from the local file.

        A missing file is created with the default document.

        Returns:
            Parsed document

        Raises:
            DocumentError: If the file exists but is not valid JSON
        """
        if not self.file_path.exists():
            logger.info("Data file %s not found, creating a new one", self.file_path)
            data = default_document()
            self.save(data)
            return data

        try:
            with self.file_path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise DocumentError(f"Error reading data file {self.file_path}: {e}") from e

    def save(self, data: Dict[str, Any]) -> Path:
        """
        Save the document with an atomic write.

        Args:
            data: Full document

        Returns:
            Path to saved file
        """
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        # Write to a temp file first, then swap it in
        tmp_path = self.file_path.with_suffix(".json.tmp")

        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, self.file_path)
        return self.file_path

    def get_mtime(self) -> str:
        """
        Get last modification time as formatted string.

        Returns:
            Formatted timestamp or '(not created yet)'
        """
        if not self.file_path.exists():
            return "(not created yet)"

        timestamp = datetime.fromtimestamp(self.file_path.stat().st_mtime)
        return timestamp.strftime("%Y-%m-%d %H:%M:%S")
