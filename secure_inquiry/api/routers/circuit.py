"""Circuit router: POST /circuit/reset forces the live AI service breaker closed (RBAC-checked)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from secure_inquiry.api.dependencies import get_circuit_breaker, get_correlation_id, get_role
from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.security.rbac import RBACService, Role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/circuit")


@router.post("/reset")
async def reset_circuit(
    role: Annotated[Role, Depends(get_role)],
    correlation_id: Annotated[str, Depends(get_correlation_id)],
    circuit_breaker: Annotated[CircuitBreaker, Depends(get_circuit_breaker)],
):
    """Reset the in-process breaker so the running service and its state store agree."""
    RBACService().check_permission(role, "reset_circuit")
    before = await circuit_breaker.load()
    await circuit_breaker.reset()
    logger.warning(
        "circuit_reset_requested",
        extra={
            "correlation_id": correlation_id,
            "breaker": circuit_breaker.name,
            "role": role.value,
            "previous_state": before.status.value,
        },
    )
    return {
        "breaker": circuit_breaker.name,
        "previous": before.to_dict(),
        "current": circuit_breaker.snapshot().to_dict(),
    }
