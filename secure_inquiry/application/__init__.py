# Application layer: services that orchestrate domain, security and infrastructure.

from secure_inquiry.application.ai_client import AIClient
from secure_inquiry.application.exceptions import (
    ApplicationError,
    DependencyFailureError,
    ExternalServiceError,
)
from secure_inquiry.application.inquiry_service import InquiryService

__all__ = [
    "AIClient",
    "ApplicationError",
    "DependencyFailureError",
    "ExternalServiceError",
    "InquiryService",
]
