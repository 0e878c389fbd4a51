"""Security-layer exceptions. Typed, no HTTP."""


class SecurityError(Exception):
    """Base for all security-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AuthorizationError(SecurityError):
    """Raised when role does not have permission for the action."""


class EncryptionError(SecurityError):
    """Raised when the key is missing/malformed or encryption fails."""


class DecryptionError(EncryptionError):
    """Raised when ciphertext does not authenticate (tampered, corrupt, or wrong key)."""


class RedactionConfigError(SecurityError):
    """Raised when a matcher set could re-match redaction markers."""
