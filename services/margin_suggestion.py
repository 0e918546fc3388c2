"""
Margin suggestion collaborator.

Given a product cost, an external service proposes a starting profit
margin in [5, 100]. The service is a black box reached over HTTP:

    POST {MARGIN_SUGGESTION_URL}
    {"productCost": 42.5}
    -> {"suggestedProfitMarginPercentage": 35}

Callers go through get_smart_suggestion(), which never raises.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .errors import SuggestionError
from .utils import get_secret, parse_number

logger = logging.getLogger(__name__)

MIN_SUGGESTED_MARGIN = 5.0
MAX_SUGGESTED_MARGIN = 100.0

ERROR_NON_POSITIVE_COST = "Ürün maliyeti pozitif olmalıdır."
ERROR_SERVICE = "AI önerisi alınamadı. Lütfen tekrar deneyin."
ERROR_NOT_CONFIGURED = "Marj öneri servisi yapılandırılmamış."


@dataclass
class SuggestionResult:
    success: bool
    suggestion: Optional[float] = None
    error: Optional[str] = None


class MarginSuggestionClient:
    """HTTP client for the margin-suggestion service."""

    def __init__(self, url: Optional[str] = None, token: Optional[str] = None, timeout: float = 20):
        self.url = url or get_secret("MARGIN_SUGGESTION_URL")
        self.token = token or get_secret("MARGIN_SUGGESTION_TOKEN")
        self.timeout = timeout

    def is_available(self) -> bool:
        return bool(self.url)

    def _headers(self):
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def suggest(self, cost: float) -> float:
        """
        Ask the service for a margin percentage.

        Returns:
            Suggested margin, clamped to [5, 100]

        Raises:
            SuggestionError: if the service is unset, unreachable or answers
                without a numeric suggestion
        """
        if not self.url:
            raise SuggestionError("MARGIN_SUGGESTION_URL is not set")

        try:
            response = requests.post(
                self.url,
                json={"productCost": cost},
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            raise SuggestionError(f"Margin suggestion request failed: {e}") from e

        if not isinstance(payload, dict):
            raise SuggestionError(f"Unexpected response: {payload!r}")
        value = parse_number(payload.get("suggestedProfitMarginPercentage"))
        if value is None:
            raise SuggestionError(f"No margin suggestion in response: {payload!r}")
        return min(MAX_SUGGESTED_MARGIN, max(MIN_SUGGESTED_MARGIN, value))


def get_smart_suggestion(cost: float, client: Optional[MarginSuggestionClient] = None) -> SuggestionResult:
    """
    Suggest a margin for a cost without ever raising.

    Non-positive (or non-numeric) cost is rejected before the service is
    called.
    """
    value = parse_number(cost)
    if value is None or value <= 0:
        return SuggestionResult(success=False, error=ERROR_NON_POSITIVE_COST)

    client = client or MarginSuggestionClient()
    if not client.is_available():
        return SuggestionResult(success=False, error=ERROR_NOT_CONFIGURED)

    try:
        suggestion = client.suggest(value)
    except SuggestionError:
        logger.exception("Error getting smart suggestion for cost %s", value)
        return SuggestionResult(success=False, error=ERROR_SERVICE)
    return SuggestionResult(success=True, suggestion=suggestion)
