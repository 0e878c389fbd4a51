"""Domain model for inquiry outcomes. Pure business semantics, no infrastructure."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from secure_inquiry.scalability.circuit_state_store import CircuitState


class InquiryStatus(str, Enum):
    """How an inquiry was answered. Dependency failures are raised, not returned."""

    SUCCESS = "success"
    CIRCUIT_OPEN = "circuit_open"


@dataclass(frozen=True)
class InquiryResult:
    status: InquiryStatus
    result: str
    redacted_content: Any
    circuit_state: CircuitState
    audit_id: Optional[str] = None
