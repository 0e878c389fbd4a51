# secure_inquiry/infrastructure/database/models.py

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

from secure_inquiry.infrastructure.database.session import Base


class AuditEntryRecord(Base):
    """ORM model for one audit entry. Rows are inserted once and never updated."""

    __tablename__ = "audit_entries"

    # Insertion order = append completion order.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    entry_uuid = Column("uuid", String(36), nullable=False, unique=True, index=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    redacted_content = Column(JSON, nullable=True)
    ciphertext = Column(Text, nullable=False)
    iv = Column(String(32), nullable=False)
    tag = Column(String(32), nullable=False)
    outcome = Column(JSON, nullable=True)
