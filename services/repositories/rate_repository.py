"""Rate settings - the only place rates are validated before storage."""

from __future__ import annotations
from typing import Any, Dict, Optional

from pricing.models import RateConfig

from ..errors import InvalidRateError
from ..utils import parse_number
from .helpers import clone

COMMISSION_KEYS = ("platformCommissionRate", "bankCommissionRate")
RATE_LABELS = {
    "platformCommissionRate": "Platform commission",
    "bankCommissionRate": "Bank commission",
    "kdvRate": "KDV",
}


class RateRepository:
    """Reads and updates the document-level commission and KDV rates."""

    @staticmethod
    def get(document: Dict[str, Any]) -> RateConfig:
        return RateConfig.from_dict(document)

    @staticmethod
    def validate(key: str, raw_value: Any) -> float:
        """
        Check one rate.

        Commission rates must be in [0, 100); KDV must be >= 0 with no
        upper bound.

        Raises:
            InvalidRateError: on a blank, non-numeric or out-of-range value
        """
        label = RATE_LABELS.get(key, key)
        value = parse_number(raw_value)
        if value is None:
            raise InvalidRateError(f"{label} rate must be a number.")
        if value < 0:
            raise InvalidRateError(f"{label} rate cannot be negative.")
        if key in COMMISSION_KEYS and value >= 100:
            raise InvalidRateError(f"{label} rate must be below 100.")
        return value

    @staticmethod
    def update(
        document: Dict[str, Any],
        platform_commission_rate: Optional[Any] = None,
        bank_commission_rate: Optional[Any] = None,
        kdv_rate: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """
        Update any subset of the rates.

        All given values are validated before any is written, so a bad
        value leaves the document untouched.
        """
        requested = {
            "platformCommissionRate": platform_commission_rate,
            "bankCommissionRate": bank_commission_rate,
            "kdvRate": kdv_rate,
        }
        validated = {
            key: RateRepository.validate(key, raw)
            for key, raw in requested.items()
            if raw is not None
        }
        updated = clone(document)
        updated.update(validated)
        return updated
