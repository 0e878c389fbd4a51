"""Fixtures for API unit tests: mocked AI client, in-memory breaker state, temp audit log, AsyncClient."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from secure_inquiry.governance.audit_store import AuditStore
from secure_inquiry.infrastructure.storage.audit_repository_file import JsonFileAuditRepository
from secure_inquiry.main import app
from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.scalability.circuit_state_store import InMemoryCircuitStateStore
from secure_inquiry.security.encryption import EncryptionService


@pytest.fixture
def ai_client():
    """Mock AI client so tests neither sleep nor fail at random."""
    client = AsyncMock()
    client.call = AsyncMock(return_value="Generated Answer")
    return client


@pytest.fixture
async def breaker():
    cb = CircuitBreaker(
        InMemoryCircuitStateStore(),
        failure_threshold=3,
        cooldown_seconds=10.0,
        name="ai_service",
    )
    yield cb
    await cb.aclose()


@pytest.fixture
def audit_repository(tmp_path):
    return JsonFileAuditRepository(tmp_path / "audit-log.json")


@pytest.fixture
def audit_store(audit_repository, aes_key):
    return AuditStore(audit_repository, EncryptionService(key=aes_key))


@pytest.fixture
def app_with_overrides(ai_client, breaker, audit_repository, audit_store):
    """App with AI client, breaker and audit storage overridden for testing."""
    from secure_inquiry.api import dependencies

    app.dependency_overrides[dependencies.get_ai_client] = lambda: ai_client
    app.dependency_overrides[dependencies.get_circuit_breaker] = lambda: breaker
    app.dependency_overrides[dependencies.get_audit_repository] = lambda: audit_repository
    app.dependency_overrides[dependencies.get_audit_store] = lambda: audit_store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
