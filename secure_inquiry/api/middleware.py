"""API middleware: correlation ID, JSON content type, request audit log."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from secure_inquiry.core.context import correlation_id_ctx

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        token = correlation_id_ctx.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_ctx.reset(token)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class JsonContentTypeMiddleware(BaseHTTPMiddleware):
    """Reject request bodies that are not application/json with 415."""

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method in BODY_METHODS:
            content_type = request.headers.get("content-type", "")
            if content_type.split(";")[0].strip().lower() != "application/json":
                return JSONResponse(
                    status_code=415,
                    content={"detail": "Content-Type must be application/json"},
                )
        return await call_next(request)


class RequestAuditMiddleware(BaseHTTPMiddleware):
    """After response: log structured request event (correlation_id, path, method, status_code). Never bodies."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response
