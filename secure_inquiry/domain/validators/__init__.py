"""Domain validators: pure functions that raise domain exceptions on rule violations."""

from secure_inquiry.domain.validators.inquiry_validator import validate_inquiry

__all__ = ["validate_inquiry"]
