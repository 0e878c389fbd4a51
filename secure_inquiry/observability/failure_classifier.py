"""Failure categorization for metrics and audit. Maps exceptions to taxonomy."""

import asyncio
from enum import Enum

from secure_inquiry.application.exceptions import (
    ApplicationError,
    DependencyFailureError,
    ExternalServiceError,
)
from secure_inquiry.domain.exceptions import DomainError, DomainValidationError
from secure_inquiry.governance.exceptions import (
    AuditEntryNotFoundError,
    AuditPersistenceError,
)
from secure_inquiry.scalability.exceptions import CircuitStatePersistenceError
from secure_inquiry.security.exceptions import (
    AuthorizationError,
    DecryptionError,
    EncryptionError,
    RedactionConfigError,
)


class FailureCategory(str, Enum):
    """Taxonomy for failure classification."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
    DECRYPTION_ERROR = "DECRYPTION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_DEGRADATION = "PERSISTENCE_DEGRADATION"
    POLICY_VIOLATION = "POLICY_VIOLATION"
    DEFECT = "DEFECT"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class FailureClassifier:
    """
    Classifies exceptions into FailureCategory. Integrates with MetricsCollector
    via caller (caller increments metrics).
    """

    @staticmethod
    def classify(exception: BaseException) -> FailureCategory:
        """Map exception to FailureCategory. Unknown -> UNEXPECTED_ERROR."""
        if isinstance(exception, DomainValidationError):
            return FailureCategory.VALIDATION_ERROR
        if isinstance(exception, (DependencyFailureError, ExternalServiceError, asyncio.TimeoutError)):
            return FailureCategory.DEPENDENCY_FAILURE
        if isinstance(exception, DecryptionError):
            return FailureCategory.DECRYPTION_ERROR
        if isinstance(exception, AuditEntryNotFoundError):
            return FailureCategory.NOT_FOUND
        if isinstance(exception, (AuditPersistenceError, CircuitStatePersistenceError)):
            return FailureCategory.PERSISTENCE_DEGRADATION
        if isinstance(exception, AuthorizationError):
            return FailureCategory.POLICY_VIOLATION
        # Encryption or redaction config failures mean a broken deployment, not bad input.
        if isinstance(exception, (EncryptionError, RedactionConfigError)):
            return FailureCategory.DEFECT
        if isinstance(exception, ApplicationError):
            return FailureCategory.DEPENDENCY_FAILURE
        if isinstance(exception, DomainError):
            return FailureCategory.VALIDATION_ERROR
        return FailureCategory.UNEXPECTED_ERROR
