"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from secure_inquiry.domain.exceptions import DomainError, DomainValidationError
from secure_inquiry.domain.models import InquiryResult, InquiryStatus
from secure_inquiry.domain.schemas import InquiryRequest, InquiryResponse
from secure_inquiry.domain.validators import validate_inquiry

__all__ = [
    "DomainError",
    "DomainValidationError",
    "InquiryRequest",
    "InquiryResponse",
    "InquiryResult",
    "InquiryStatus",
    "validate_inquiry",
]
