"""DB-backed audit repository. One row per entry in the audit_entries table."""

from datetime import timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from secure_inquiry.governance.audit_models import AuditEntry, AuditOutcome
from secure_inquiry.governance.exceptions import AuditPersistenceError
from secure_inquiry.infrastructure.database.models import AuditEntryRecord
from secure_inquiry.security.encryption import EncryptedPayload


def _to_entry(orm: AuditEntryRecord) -> AuditEntry:
    timestamp = orm.timestamp
    # SQLite drops tzinfo; timestamps are always written in UTC.
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return AuditEntry(
        entry_id=orm.entry_uuid,
        timestamp=timestamp,
        redacted_content=orm.redacted_content,
        encrypted_original=EncryptedPayload(
            ciphertext=orm.ciphertext,
            iv=orm.iv,
            tag=orm.tag,
        ),
        outcome=AuditOutcome.from_dict(orm.outcome) if orm.outcome else None,
    )


class DbAuditRepository:
    """Persists audit entries in a transactional store. Implements AuditRepository protocol."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, entry: AuditEntry) -> None:
        """Insert one row and commit. A failed commit leaves earlier rows untouched."""
        orm = AuditEntryRecord(
            entry_uuid=entry.entry_id,
            timestamp=entry.timestamp,
            redacted_content=entry.redacted_content,
            ciphertext=entry.encrypted_original.ciphertext,
            iv=entry.encrypted_original.iv,
            tag=entry.encrypted_original.tag,
            outcome=entry.outcome.to_dict() if entry.outcome else None,
        )
        try:
            async with self._session_factory() as session:
                session.add(orm)
                await session.commit()
        except SQLAlchemyError as e:
            raise AuditPersistenceError(f"Cannot insert audit entry: {e}") from e

    async def list_entries(self) -> List[AuditEntry]:
        stmt = select(AuditEntryRecord).order_by(AuditEntryRecord.seq)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise AuditPersistenceError(f"Cannot read audit entries: {e}") from e
        return [_to_entry(orm) for orm in rows]

    async def get(self, entry_id: str) -> Optional[AuditEntry]:
        stmt = select(AuditEntryRecord).where(AuditEntryRecord.entry_uuid == entry_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                orm = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise AuditPersistenceError(f"Cannot read audit entry {entry_id}: {e}") from e
        if orm is None:
            return None
        return _to_entry(orm)

    async def health(self) -> dict:
        try:
            async with self._session_factory() as session:
                await session.execute(select(1))
        except SQLAlchemyError as e:
            return {"status": "error", "backend": "database", "error": str(e)}
        return {"status": "ok", "backend": "database"}
