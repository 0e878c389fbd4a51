# secure_inquiry/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from secure_inquiry.api import dependencies
from secure_inquiry.api.middleware import (
    CorrelationIdMiddleware,
    JsonContentTypeMiddleware,
    RequestAuditMiddleware,
)
from secure_inquiry.api.routers import audit, circuit, health, inquiry
from secure_inquiry.application.exceptions import ApplicationError, DependencyFailureError
from secure_inquiry.config.logging import configure_logging
from secure_inquiry.config.settings import get_settings
from secure_inquiry.domain.exceptions import DomainError, DomainValidationError
from secure_inquiry.domain.validators.inquiry_validator import INVALID_INQUIRY_MESSAGE
from secure_inquiry.governance.exceptions import AuditEntryNotFoundError
from secure_inquiry.observability.failure_classifier import FailureClassifier
from secure_inquiry.security.exceptions import AuthorizationError

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await dependencies.init_resources()
    # Re-arm the cool-down timer if the process restarted while the circuit was open.
    await dependencies.get_circuit_breaker().load()
    yield
    await dependencies.close_resources()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> JsonContentType -> RequestAudit.
app.add_middleware(RequestAuditMiddleware)
app.add_middleware(JsonContentTypeMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc: RequestValidationError):
    # Validation errors echo the input; never return them, the body may hold PII.
    return JSONResponse(status_code=400, content={"detail": INVALID_INQUIRY_MESSAGE})


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(DependencyFailureError)
async def dependency_failure_error_handler(request, exc: DependencyFailureError):
    return JSONResponse(
        status_code=502,
        content={"detail": exc.message, "audit_id": exc.audit_id},
    )


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(AuditEntryNotFoundError)
async def audit_entry_not_found_handler(request, exc: AuditEntryNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.error(
        "unhandled_exception",
        extra={
            "category": FailureClassifier.classify(exc).value,
            "path": request.url.path,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /secure-inquiry, /circuit/reset, /audit/{entry_id}
app.include_router(health.router)
app.include_router(inquiry.router)
app.include_router(circuit.router)
app.include_router(audit.router)
