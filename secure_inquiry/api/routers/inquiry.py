"""Inquiry API router: POST /secure-inquiry."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from secure_inquiry.api.dependencies import get_correlation_id, get_inquiry_service
from secure_inquiry.application.exceptions import DependencyFailureError
from secure_inquiry.application.inquiry_service import InquiryService
from secure_inquiry.domain.models.inquiry import InquiryStatus
from secure_inquiry.domain.schemas.inquiry import InquiryRequest, InquiryResponse

router = APIRouter()


@router.post("/secure-inquiry", response_model=InquiryResponse, status_code=201)
async def submit_inquiry(
    body: InquiryRequest,
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    inquiry_service: Annotated[InquiryService, Depends(get_inquiry_service)],
):
    """Redact, call the AI service through the circuit breaker, audit. Circuit open -> 503 with fallback."""
    try:
        result = await inquiry_service.submit(body.to_payload(), correlation_id)
    except DependencyFailureError as e:
        return JSONResponse(
            status_code=502,
            content={"detail": e.message, "audit_id": e.audit_id},
        )
    response = InquiryResponse(
        status=result.status,
        result=result.result,
        circuit_state=result.circuit_state,
        audit_id=result.audit_id,
        redacted_content=result.redacted_content,
    )
    if result.status is InquiryStatus.CIRCUIT_OPEN:
        retry_after = max(1, math.ceil(inquiry_service.circuit_breaker.cooldown_seconds))
        return JSONResponse(
            status_code=503,
            content=response.model_dump(mode="json"),
            headers={"Retry-After": str(retry_after)},
        )
    return response
