"""Exception types shared by the storage, repository and pricing layers."""

from __future__ import annotations


class PricingAppError(Exception):
    """Base class for errors the UI reports to the user."""


class DocumentError(PricingAppError):
    """Raised when the data document cannot be read or fails validation."""


class ValidationError(PricingAppError, ValueError):
    """Raised when user input cannot be stored."""


class InvalidRateError(ValidationError):
    """Raised when a commission or VAT rate would make a price undefined."""


class SuggestionError(PricingAppError):
    """Raised when the margin-suggestion service call fails."""
