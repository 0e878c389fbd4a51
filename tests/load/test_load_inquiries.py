"""
Load test inquiry pipeline: asyncio concurrency against the file-backed audit log.
Asserts: every inquiry audited exactly once, no lost appends, each original decrypts to its own input.
"""

import asyncio
import logging
import time
from unittest.mock import AsyncMock

import pytest

from secure_inquiry.application.inquiry_service import InquiryService
from secure_inquiry.domain.models.inquiry import InquiryStatus
from secure_inquiry.governance.audit_store import AuditStore
from secure_inquiry.infrastructure.storage.audit_repository_file import JsonFileAuditRepository
from secure_inquiry.infrastructure.storage.circuit_state_store_file import JsonFileCircuitStateStore
from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.security.encryption import EncryptionService
from secure_inquiry.security.redaction import Redactor

N_INQUIRIES = 200


@pytest.mark.asyncio
async def test_concurrent_inquiries_are_all_audited(tmp_path, aes_key, metrics):
    ai_client = AsyncMock()
    ai_client.call = AsyncMock(return_value="Generated Answer")
    breaker = CircuitBreaker(JsonFileCircuitStateStore(tmp_path / "state.json"), name="ai_service")
    audit_store = AuditStore(
        JsonFileAuditRepository(tmp_path / "audit-log.json"),
        EncryptionService(key=aes_key),
    )
    service = InquiryService(
        redactor=Redactor(),
        circuit_breaker=breaker,
        audit_store=audit_store,
        ai_client=ai_client,
        logger=logging.getLogger("load.inquiry"),
        metrics=metrics,
    )
    inquiries = [
        {"userId": f"user-{i}", "message": f"mail user{i}@example.com about order {i}"}
        for i in range(N_INQUIRIES)
    ]

    start = time.perf_counter()
    results = await asyncio.gather(*(service.submit(inq) for inq in inquiries))
    elapsed = time.perf_counter() - start

    assert all(r.status == InquiryStatus.SUCCESS for r in results)
    assert elapsed < 60
    entries = await audit_store.list_entries()
    assert len(entries) == N_INQUIRIES
    assert len({e.entry_id for e in entries}) == N_INQUIRIES

    by_id = {e.entry_id: e for e in entries}
    for inquiry, result in zip(inquiries, results):
        entry = by_id[result.audit_id]
        assert audit_store.retrieve_original(entry) == inquiry
        assert "@example.com" not in entry.redacted_content["message"]
    assert metrics.counter_value("inquiries", category="success") == N_INQUIRIES
    await breaker.aclose()
