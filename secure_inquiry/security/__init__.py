"""Security: PII redaction, authenticated encryption, RBAC. No FastAPI."""

from secure_inquiry.security.encryption import EncryptedPayload, EncryptionService
from secure_inquiry.security.rbac import RBACService, Role
from secure_inquiry.security.redaction import (
    DEFAULT_MATCHERS,
    RedactionMatcher,
    Redactor,
    matchers_from_config,
    redact,
)

__all__ = [
    "DEFAULT_MATCHERS",
    "EncryptedPayload",
    "EncryptionService",
    "RBACService",
    "RedactionMatcher",
    "Redactor",
    "Role",
    "matchers_from_config",
    "redact",
]
