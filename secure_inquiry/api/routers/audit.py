"""Audit router: GET /audit/{entry_id} returns the redacted view of one entry (RBAC-checked)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from secure_inquiry.api.dependencies import get_audit_store, get_role
from secure_inquiry.governance.audit_store import AuditStore
from secure_inquiry.security.rbac import Role

router = APIRouter(prefix="/audit")


@router.get("/{entry_id}")
async def get_audit_entry(
    entry_id: str,
    role: Annotated[Role, Depends(get_role)],
    audit_store: Annotated[AuditStore, Depends(get_audit_store)],
):
    """Stored entry without its ciphertext. Decrypting the original is an offline operator action."""
    return await audit_store.view_entry(entry_id, role=role)
