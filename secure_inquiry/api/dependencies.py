"""FastAPI dependency injection: stores, circuit breaker, audit store, AI client, InquiryService."""

import logging
from pathlib import Path
from typing import Annotated, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine

from secure_inquiry.application.ai_client import AIClient
from secure_inquiry.application.inquiry_service import InquiryService
from secure_inquiry.config.settings import AppSettings, get_settings
from secure_inquiry.governance.audit_repository import AuditRepository
from secure_inquiry.governance.audit_store import AuditStore
from secure_inquiry.infrastructure.ai.simulated_ai_client import SimulatedAIClient
from secure_inquiry.infrastructure.cache.audit_repository_redis import RedisAuditRepository
from secure_inquiry.infrastructure.cache.circuit_state_store_redis import RedisCircuitStateStore
from secure_inquiry.infrastructure.cache.redis_client import RedisClient
from secure_inquiry.infrastructure.database.audit_repository_db import DbAuditRepository
from secure_inquiry.infrastructure.database.session import (
    create_engine,
    create_schema,
    create_session_factory,
)
from secure_inquiry.infrastructure.storage.audit_repository_file import JsonFileAuditRepository
from secure_inquiry.infrastructure.storage.circuit_state_store_file import JsonFileCircuitStateStore
from secure_inquiry.observability.metrics import MetricsCollector
from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.scalability.circuit_state_store import (
    CircuitStateStore,
    InMemoryCircuitStateStore,
)
from secure_inquiry.scalability.health_monitor import HealthMonitor
from secure_inquiry.security.encryption import EncryptionService
from secure_inquiry.security.exceptions import AuthorizationError
from secure_inquiry.security.rbac import Role
from secure_inquiry.security.redaction import Redactor, matchers_from_config

AI_SERVICE_BREAKER = "ai_service"

_metrics: MetricsCollector | None = None
_redis_client: RedisClient | None = None
_db_engine: AsyncEngine | None = None
_redactor: Redactor | None = None
_encryption: EncryptionService | None = None
_audit_repository: AuditRepository | None = None
_audit_store: AuditStore | None = None
_circuit_breaker: CircuitBreaker | None = None
_ai_client: AIClient | None = None


def get_metrics() -> MetricsCollector:
    """Return singleton metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_redis_client() -> RedisClient:
    """Return singleton Redis client."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient(get_settings().redis_url)
    return _redis_client


def get_redactor() -> Redactor:
    """Return singleton Redactor with built-in plus configured matchers."""
    global _redactor
    if _redactor is None:
        _redactor = Redactor(matchers_from_config(get_settings().redaction_extra_patterns))
    return _redactor


def get_encryption_service() -> EncryptionService:
    """Return singleton EncryptionService keyed from settings."""
    global _encryption
    if _encryption is None:
        _encryption = EncryptionService(key=get_settings().aes_secret_key.get_secret_value())
    return _encryption


def _build_db_repository(settings: AppSettings) -> DbAuditRepository:
    global _db_engine
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    _db_engine = create_engine(settings.database_url, echo=settings.debug)
    return DbAuditRepository(create_session_factory(_db_engine))


def get_audit_repository() -> AuditRepository:
    """Return singleton audit repository for the configured backend."""
    global _audit_repository
    if _audit_repository is None:
        settings = get_settings()
        if settings.audit_backend == "redis":
            _audit_repository = RedisAuditRepository(get_redis_client(), key=settings.audit_redis_key)
        elif settings.audit_backend == "database":
            _audit_repository = _build_db_repository(settings)
        else:
            _audit_repository = JsonFileAuditRepository(settings.audit_log_path)
    return _audit_repository


def get_audit_store() -> AuditStore:
    """Return singleton AuditStore."""
    global _audit_store
    if _audit_store is None:
        _audit_store = AuditStore(
            repository=get_audit_repository(),
            encryption=get_encryption_service(),
            metrics_callback=get_metrics(),
        )
    return _audit_store


def _build_state_store(settings: AppSettings) -> CircuitStateStore:
    if settings.circuit_state_backend == "redis":
        return RedisCircuitStateStore(get_redis_client(), key=settings.circuit_redis_key)
    if settings.circuit_state_backend == "memory":
        return InMemoryCircuitStateStore()
    return JsonFileCircuitStateStore(settings.circuit_state_path)


def get_circuit_breaker() -> CircuitBreaker:
    """Return singleton breaker guarding the AI service."""
    global _circuit_breaker
    if _circuit_breaker is None:
        settings = get_settings()
        _circuit_breaker = CircuitBreaker(
            state_store=_build_state_store(settings),
            failure_threshold=settings.circuit_failure_threshold,
            cooldown_seconds=settings.circuit_cooldown_seconds,
            call_timeout_seconds=settings.external_call_timeout_seconds,
            name=AI_SERVICE_BREAKER,
            metrics_callback=get_metrics(),
        )
    return _circuit_breaker


def get_ai_client() -> AIClient:
    """Return singleton AI client."""
    global _ai_client
    if _ai_client is None:
        settings = get_settings()
        _ai_client = SimulatedAIClient(
            failure_rate=settings.ai_failure_rate,
            latency_seconds=settings.ai_latency_seconds,
        )
    return _ai_client


async def get_inquiry_service(
    redactor: Annotated[Redactor, Depends(get_redactor)],
    circuit_breaker: Annotated[CircuitBreaker, Depends(get_circuit_breaker)],
    audit_store: Annotated[AuditStore, Depends(get_audit_store)],
    ai_client: Annotated[AIClient, Depends(get_ai_client)],
    metrics: Annotated[MetricsCollector, Depends(get_metrics)],
) -> InquiryService:
    """Build InquiryService with injected redactor, breaker, audit store, AI client, logger."""
    return InquiryService(
        redactor=redactor,
        circuit_breaker=circuit_breaker,
        audit_store=audit_store,
        ai_client=ai_client,
        logger=logging.getLogger("secure_inquiry.inquiry"),
        metrics=metrics,
        fallback_message=get_settings().fallback_message,
    )


async def get_health_monitor(
    circuit_breaker: Annotated[CircuitBreaker, Depends(get_circuit_breaker)],
    audit_repository: Annotated[AuditRepository, Depends(get_audit_repository)],
) -> HealthMonitor:
    storage_checks = {}
    health = getattr(audit_repository, "health", None)
    if health is not None:
        storage_checks["audit_log"] = health
    return HealthMonitor(
        circuit_breakers={circuit_breaker.name: circuit_breaker},
        storage_checks=storage_checks,
    )


def get_correlation_id(request: Request) -> str:
    """Extract correlation_id from request.state (set by middleware)."""
    return getattr(request.state, "correlation_id", "") or ""


def get_role(x_role: Annotated[Optional[str], Header(alias="X-Role")] = None) -> Role:
    """Caller role from the X-Role header. Missing or unknown roles are not authorized."""
    if not x_role:
        raise AuthorizationError("X-Role header is required")
    try:
        return Role(x_role.strip().upper())
    except ValueError as e:
        raise AuthorizationError(f"Unknown role '{x_role}'") from e


async def init_resources() -> None:
    """
    Build every singleton up front (sync providers otherwise run in the threadpool and could race),
    fail fast on a bad key or matcher set, and create the audit schema for the database backend.
    """
    get_metrics()
    get_encryption_service()
    get_redactor()
    get_audit_store()
    get_circuit_breaker()
    get_ai_client()
    if isinstance(get_audit_repository(), DbAuditRepository) and _db_engine is not None:
        await create_schema(_db_engine)


async def close_resources() -> None:
    """Stop the cool-down timer and release connections."""
    global _circuit_breaker, _redis_client, _db_engine, _audit_repository, _audit_store
    if _circuit_breaker is not None:
        await _circuit_breaker.aclose()
        _circuit_breaker = None
    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None
    if _db_engine is not None:
        await _db_engine.dispose()
        _db_engine = None
    _audit_repository = None
    _audit_store = None
