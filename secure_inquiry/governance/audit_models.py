"""Immutable audit entry model. Domain-level immutability."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from secure_inquiry.security.encryption import EncryptedPayload


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    FALLBACK = "fallback"
    FAILURE = "failure"


@dataclass(frozen=True)
class AuditOutcome:
    """Result of the guarded call: a result string, or an error description on failure."""

    status: OutcomeStatus
    result: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "result": self.result, "error": self.error}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditOutcome":
        return cls(
            status=OutcomeStatus(data["status"]),
            result=data.get("result"),
            error=data.get("error"),
        )


def _parse_timestamp(raw: str) -> datetime:
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class AuditEntry:
    """
    Immutable audit entry: redacted content in plaintext, original content only as
    AES-GCM ciphertext. Created once per inquiry; never updated or deleted.
    """

    entry_id: str
    timestamp: datetime
    redacted_content: Any
    encrypted_original: EncryptedPayload
    outcome: Optional[AuditOutcome] = None

    def to_dict(self) -> Dict[str, Any]:
        """Stored representation. Field names are part of the on-disk format."""
        return {
            "uuid": self.entry_id,
            "timestamp": self.timestamp.isoformat(),
            "redacted-content": self.redacted_content,
            "original-content": self.encrypted_original.to_dict(),
            "outcome": self.outcome.to_dict() if self.outcome else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuditEntry":
        outcome = data.get("outcome")
        return cls(
            entry_id=data["uuid"],
            timestamp=_parse_timestamp(data["timestamp"]),
            redacted_content=data.get("redacted-content"),
            encrypted_original=EncryptedPayload.from_dict(data["original-content"]),
            outcome=AuditOutcome.from_dict(outcome) if outcome else None,
        )
