from __future__ import annotations

from typing import Dict, Optional


class StockroomError(Exception):
    """Base class for errors raised by the application layer."""


class ProductValidationError(StockroomError):
    """Create-product input failed validation.

    `field_errors` maps each offending form field to a human readable message,
    so the UI can show them next to the inputs.
    """

    def __init__(self, field_errors: Dict[str, str], message: str = "Validation failed") -> None:
        super().__init__(message)
        self.field_errors = field_errors


class MutationFailure(StockroomError):
    """A write to the product store failed after validation passed."""

    def __init__(self, message: str, product_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.product_id = product_id


class AuthenticationError(StockroomError):
    """No current user could be resolved for the request."""
