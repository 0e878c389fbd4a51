"""Governance-layer exceptions. Typed, no HTTP."""


class GovernanceError(Exception):
    """Base for all governance-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuditEntryNotFoundError(GovernanceError):
    """Raised when no audit entry exists for the requested id."""


class AuditPersistenceError(GovernanceError):
    """Raised when the audit collection cannot be read or written. Stored entries are left untouched."""
