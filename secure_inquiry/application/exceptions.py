"""Application-layer exceptions. Do not reuse domain exceptions."""

from typing import Optional


class ApplicationError(Exception):
    """Base for all application-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ExternalServiceError(ApplicationError):
    """Raised by an AI client when the external service call fails."""


class DependencyFailureError(ApplicationError):
    """Raised when the guarded external call failed or timed out. Audit entry is already written."""

    def __init__(self, message: str, audit_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.audit_id = audit_id
