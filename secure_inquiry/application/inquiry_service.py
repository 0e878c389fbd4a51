"""Inquiry application service. Orchestrates redact, guarded AI call, audit."""

import asyncio
import copy
import logging
import time
from typing import Any, Mapping, Optional

from secure_inquiry.application.ai_client import AIClient
from secure_inquiry.application.exceptions import DependencyFailureError
from secure_inquiry.domain.models.inquiry import InquiryResult, InquiryStatus
from secure_inquiry.domain.validators.inquiry_validator import validate_inquiry
from secure_inquiry.governance.audit_models import AuditOutcome, OutcomeStatus
from secure_inquiry.governance.audit_store import AuditStore
from secure_inquiry.governance.exceptions import AuditPersistenceError
from secure_inquiry.observability import failure_classifier
from secure_inquiry.observability.metrics import MetricsCollector
from secure_inquiry.scalability.circuit_breaker import CircuitBreaker
from secure_inquiry.scalability.circuit_state_store import CircuitState
from secure_inquiry.security.redaction import Redactor

DEFAULT_FALLBACK = "The assistant is temporarily unavailable. Please try again shortly."


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


class InquiryService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI.
    Order per inquiry: validate, redact, call AI through the breaker, audit, respond.
    The audit write happens on every path; an audit persistence failure is logged and
    counted but never replaces the primary outcome.
    """

    def __init__(
        self,
        redactor: Redactor,
        circuit_breaker: CircuitBreaker,
        audit_store: AuditStore,
        ai_client: AIClient,
        logger: logging.Logger,
        metrics: Optional[MetricsCollector] = None,
        fallback_message: str = DEFAULT_FALLBACK,
    ) -> None:
        self._redactor = redactor
        self._breaker = circuit_breaker
        self._audit = audit_store
        self._ai_client = ai_client
        self._logger = logger
        self._metrics = metrics
        self._fallback = fallback_message

    @property
    def circuit_breaker(self) -> CircuitBreaker:
        return self._breaker

    def _count(self, name: str, category: Optional[str] = None) -> None:
        if self._metrics is not None:
            self._metrics.increment(name, 1, category=category)

    async def _record_audit(
        self,
        redacted: Any,
        original: Any,
        outcome: AuditOutcome,
        correlation_id: str,
    ) -> Optional[str]:
        try:
            return await self._audit.append(redacted, original, outcome)
        except AuditPersistenceError as e:
            self._count("audit_write_failures")
            self._logger.error(
                "audit_write_failed",
                extra={
                    "correlation_id": correlation_id,
                    "outcome": outcome.status.value,
                    "error": e.message,
                },
            )
            return None

    async def submit(self, inquiry: Mapping[str, Any], correlation_id: str = "") -> InquiryResult:
        """
        Handle one inquiry. Returns InquiryResult for success and circuit-open fallback.
        Raises DomainValidationError for a malformed inquiry (nothing is audited) and
        DependencyFailureError when the AI call fails (after the audit entry is written).
        """
        validate_inquiry(inquiry)

        # Step 1: Redact; the original stays in memory only until it is encrypted.
        original = copy.deepcopy(dict(inquiry))
        redacted = self._redactor.redact(original)
        self._logger.info(
            "inquiry_redacted",
            extra={"correlation_id": correlation_id, "fields": len(redacted)},
        )

        # Step 2: Guarded external call with redacted text only
        started = time.perf_counter()
        try:
            guarded = await self._breaker.execute(
                self._ai_client.call,
                self._fallback,
                redacted["message"],
            )
        except asyncio.CancelledError:
            # Step 3 (cancelled): the caller went away mid-call; the attempt is still audited
            audit_id = await self._record_audit(
                redacted,
                original,
                AuditOutcome(OutcomeStatus.FAILURE, error="cancelled"),
                correlation_id,
            )
            self._logger.warning(
                "inquiry_cancelled",
                extra={"correlation_id": correlation_id, "audit_id": audit_id},
            )
            raise
        except Exception as e:
            # Step 3 (failure path): audit, then surface the dependency failure
            audit_id = await self._record_audit(
                redacted,
                original,
                AuditOutcome(OutcomeStatus.FAILURE, error=_describe(e)),
                correlation_id,
            )
            category = failure_classifier.FailureClassifier.classify(e)
            self._count("inquiry_failures", category=category.value)
            self._logger.error(
                "inquiry_dependency_failed",
                extra={
                    "correlation_id": correlation_id,
                    "audit_id": audit_id,
                    "error": _describe(e),
                    "category": category.value,
                    "circuit_state": self._breaker.state.value,
                },
            )
            raise DependencyFailureError(
                f"External service call failed: {_describe(e)}", audit_id=audit_id
            ) from e
        finally:
            if self._metrics is not None:
                self._metrics.observe_latency(
                    "ai_call_latency_ms", (time.perf_counter() - started) * 1000
                )

        # Step 3: Audit
        if guarded.status is CircuitState.OPEN:
            status = InquiryStatus.CIRCUIT_OPEN
            outcome = AuditOutcome(OutcomeStatus.FALLBACK, result=guarded.result)
        else:
            status = InquiryStatus.SUCCESS
            outcome = AuditOutcome(OutcomeStatus.SUCCESS, result=guarded.result)
        audit_id = await self._record_audit(redacted, original, outcome, correlation_id)

        # Step 4: Respond
        self._count("inquiries", category=status.value)
        self._logger.info(
            "inquiry_completed",
            extra={
                "correlation_id": correlation_id,
                "audit_id": audit_id,
                "status": status.value,
                "circuit_state": guarded.status.value,
            },
        )
        return InquiryResult(
            status=status,
            result=guarded.result,
            redacted_content=redacted,
            circuit_state=guarded.status,
            audit_id=audit_id,
        )
