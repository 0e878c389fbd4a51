"""Encrypted append-only audit store for regulated traceability. No FastAPI."""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from secure_inquiry.governance.audit_models import AuditEntry, AuditOutcome
from secure_inquiry.governance.audit_repository import AuditRepository
from secure_inquiry.governance.exceptions import AuditEntryNotFoundError
from secure_inquiry.security.encryption import EncryptionService
from secure_inquiry.security.exceptions import EncryptionError
from secure_inquiry.security.rbac import RBACService, Role

logger = logging.getLogger(__name__)


def _canonical_json(content: Any) -> str:
    try:
        return json.dumps(content, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncryptionError(f"Original content is not JSON-serializable: {e}") from e


class AuditStore:
    """
    Writes immutable audit entries via repository.
    The original content is encrypted before it leaves this class; it is never logged,
    and decryption happens only on the explicit privileged read paths.
    """

    def __init__(
        self,
        repository: AuditRepository,
        encryption: EncryptionService,
        rbac: Optional[RBACService] = None,
        metrics_callback: Any = None,
    ) -> None:
        self._repository = repository
        self._encryption = encryption
        self._rbac = rbac or RBACService()
        self._metrics = metrics_callback

    async def append(
        self,
        redacted_content: Any,
        original_content: Any,
        outcome: Optional[AuditOutcome] = None,
    ) -> str:
        """Encrypt original, build entry with fresh id and UTC timestamp, append. Returns entry id."""
        encrypted = self._encryption.encrypt(_canonical_json(original_content))
        entry = AuditEntry(
            entry_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            redacted_content=redacted_content,
            encrypted_original=encrypted,
            outcome=outcome,
        )
        await self._repository.append(entry)
        if self._metrics and hasattr(self._metrics, "increment"):
            self._metrics.increment("audit_entries_appended", 1)
        logger.info(
            "audit_entry_appended",
            extra={
                "entry_id": entry.entry_id,
                "outcome": outcome.status.value if outcome else None,
            },
        )
        return entry.entry_id

    async def get_entry(self, entry_id: str) -> AuditEntry:
        """Return entry by id. Raises AuditEntryNotFoundError if absent."""
        entry = await self._repository.get(entry_id)
        if entry is None:
            raise AuditEntryNotFoundError(f"Audit entry {entry_id} not found")
        return entry

    async def list_entries(self) -> List[AuditEntry]:
        """All entries in append order. Original content stays encrypted."""
        return await self._repository.list_entries()

    async def view_entry(self, entry_id: str, *, role: Role) -> Dict[str, Any]:
        """Redacted view of one entry for a role with view_redacted. The ciphertext is left out."""
        self._rbac.check_permission(role, "view_redacted")
        view = (await self.get_entry(entry_id)).to_dict()
        del view["original-content"]
        return view

    def retrieve_original(self, entry: AuditEntry) -> Any:
        """Decrypt the original content of an entry. Raises DecryptionError if it does not authenticate."""
        return json.loads(self._encryption.decrypt(entry.encrypted_original))

    async def reveal_original(self, entry_id: str, *, role: Role) -> Any:
        """
        Privileged read: check RBAC, load the entry, decrypt it.
        AuthorizationError, AuditEntryNotFoundError and DecryptionError stay distinct.
        """
        self._rbac.check_permission(role, "decrypt_original")
        entry = await self.get_entry(entry_id)
        original = self.retrieve_original(entry)
        logger.warning(
            "audit_original_revealed",
            extra={"entry_id": entry_id, "role": role.value},
        )
        return original
