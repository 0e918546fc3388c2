"""
GitHub Gist storage implementation.
Mirrors the pricing document to a gist file via the Gist API.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional

import requests

from pricing.models import default_document

from ..errors import PricingAppError
from ..utils import get_secret, is_flag_set
from ..utils.settings import DEFAULT_DATA_FILENAME

logger = logging.getLogger(__name__)

GIST_API_URL = "https://api.github.com/gists"


class GistError(PricingAppError):
    """Raised when Gist operations fail."""


class GistStorage:
    """Handles GitHub Gist API operations."""

    def __init__(
        self,
        gist_id: Optional[str] = None,
        token: Optional[str] = None,
        filename: Optional[str] = None,
        timeout: float = 15,
    ):
        self.gist_id = gist_id or get_secret("GITHUB_GIST_ID")
        self.token = token or get_secret("GITHUB_TOKEN")
        self.filename = filename or get_secret("GITHUB_GIST_FILENAME") or DEFAULT_DATA_FILENAME
        self.timeout = timeout
        self._disabled = False

    def is_available(self) -> bool:
        """Check if Gist storage is configured and not disabled."""
        if is_flag_set("DISABLE_GIST"):
            return False
        return bool(self.gist_id and self.token) and not self._disabled

    def disable(self) -> None:
        """Disable Gist for the rest of this session (after an error)."""
        self._disabled = True

    def _headers(self) -> Dict[str, str]:
        """Build headers for Gist API requests."""
        headers = {
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def _url(self) -> str:
        if not self.gist_id:
            raise GistError("Missing GIST_ID")
        return f"{GIST_API_URL}/{self.gist_id}"

    def load(self) -> Dict[str, Any]:
        """
        Load the document from the gist.

        Returns:
            Parsed document; the default document if the gist file is
            missing or empty

        Raises:
            GistError: If the fetch fails or the content is not JSON
        """
        url = self._url()

        try:
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)

            if response.status_code in (401, 403, 404):
                raise GistError(
                    f"Gist fetch unauthorized/unavailable (HTTP {response.status_code})"
                )

            response.raise_for_status()
            payload = response.json()

        except requests.RequestException as e:
            raise GistError(f"Gist fetch error: {e}") from e
        except ValueError as e:
            raise GistError(f"Gist response is not JSON: {e}") from e

        if not isinstance(payload, dict):
            raise GistError(f"Unexpected Gist response: {type(payload).__name__}")

        files = payload.get("files") or {}
        entry = files.get(self.filename) if isinstance(files, dict) else None
        content = entry.get("content") if isinstance(entry, dict) else None
        if not isinstance(content, str) or not content.strip():
            return default_document()

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise GistError(f"Gist file {self.filename} is not valid JSON: {e}") from e

    def save(self, data: Dict[str, Any]) -> None:
        """
        Overwrite the gist file with the document.

        Raises:
            GistError: If save fails
        """
        url = self._url()

        body = {
            "files": {
                self.filename: {
                    "content": json.dumps(data, ensure_ascii=False, indent=2)
                }
            }
        }

        try:
            response = requests.patch(
                url,
                headers=self._headers(),
                data=json.dumps(body),
                timeout=self.timeout,
            )

            if response.status_code in (401, 403):
                raise GistError(
                    f"Gist save unauthorized (HTTP {response.status_code})"
                )

            response.raise_for_status()

        except requests.RequestException as e:
            raise GistError(f"Gist save error: {e}") from e

        logger.debug("Document mirrored to gist %s/%s", self.gist_id, self.filename)
