"""Scalability-layer exceptions. Typed, no HTTP."""


class ScalabilityError(Exception):
    """Base for all scalability-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CircuitStatePersistenceError(ScalabilityError):
    """Raised by a state store when breaker state cannot be read, parsed or written."""
