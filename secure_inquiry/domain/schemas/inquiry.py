"""Pydantic schemas for the inquiry API. Strict validation, no DB or infrastructure."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from secure_inquiry.domain.models.inquiry import InquiryStatus
from secure_inquiry.scalability.circuit_state_store import CircuitState


# ---------------------------------------------------------------------------
# Request schema
# ---------------------------------------------------------------------------

class InquiryRequest(BaseModel):
    """Inbound inquiry. Extra fields are kept and redacted like the required ones."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_id: str = Field(..., alias="userId", description="Caller identifier; must not be blank")
    message: str = Field(..., description="Free text; may contain PII")

    @field_validator("user_id", "message", mode="before")
    @classmethod
    def must_be_non_blank_string(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("userId and message are required strings")
        return v

    def to_payload(self) -> dict[str, Any]:
        """Body as received (original key names), including extra fields."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Response schema
# ---------------------------------------------------------------------------

class InquiryResponse(BaseModel):
    status: InquiryStatus
    result: str
    circuit_state: CircuitState
    audit_id: Optional[str] = None
    redacted_content: Any = None
