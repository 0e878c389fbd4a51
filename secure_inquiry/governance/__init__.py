"""Governance: encrypted audit entries, repository protocol, audit store. No FastAPI."""

from secure_inquiry.governance.audit_models import AuditEntry, AuditOutcome, OutcomeStatus
from secure_inquiry.governance.audit_repository import AuditRepository
from secure_inquiry.governance.audit_store import AuditStore

__all__ = [
    "AuditEntry",
    "AuditOutcome",
    "AuditRepository",
    "AuditStore",
    "OutcomeStatus",
]
