"""Audit repository protocol. Governance layer depends on this; infrastructure implements it."""

from typing import List, Optional, Protocol

from secure_inquiry.governance.audit_models import AuditEntry


class AuditRepository(Protocol):
    """
    Protocol for the ordered, append-only audit collection.
    Implementations serialize concurrent appends and raise AuditPersistenceError on I/O failure.
    """

    async def append(self, entry: AuditEntry) -> None:
        """Append one entry. All-or-nothing: previously stored entries are never corrupted."""
        ...

    async def list_entries(self) -> List[AuditEntry]:
        """Return all entries in append order."""
        ...

    async def get(self, entry_id: str) -> Optional[AuditEntry]:
        """Return the entry with the given id, or None if not found."""
        ...
