"""Inquiry shape validation. Raises domain exceptions only."""

from typing import Any, Mapping

from secure_inquiry.domain.exceptions import DomainValidationError

REQUIRED_TEXT_FIELDS = ("userId", "message")
INVALID_INQUIRY_MESSAGE = "Invalid input. userId and message are required strings."


def validate_inquiry(payload: Any) -> None:
    """Payload must be an object; userId and message must be strings that are non-empty after trimming."""
    if not isinstance(payload, Mapping):
        raise DomainValidationError(INVALID_INQUIRY_MESSAGE)
    for field in REQUIRED_TEXT_FIELDS:
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            raise DomainValidationError(INVALID_INQUIRY_MESSAGE)
