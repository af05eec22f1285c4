"""
Diario de Classe API — Request Logging Middleware
==================================================

What:  One access log line per HTTP request with method, path, status and duration.
Why:   Operator visibility into traffic and failures without logging bodies.
How:   Times the downstream app, then emits a record whose level follows the
       response status class. A request that crashes past every exception
       handler is still logged, as a 500, before the error propagates.
When:  Runs inside RequestIDMiddleware, so the request id is already set.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, client IP, request ID
    ❌ Don't log: request bodies (post content), query strings (search terms)
"""

import logging
import time
from typing import Any, Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from diario_api.middleware.request_id import request_id_var

logger = logging.getLogger("diario_api.access")

# Why: container probes hit /health every few seconds
SKIPPED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, everything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _access_fields(request: Request, status: int, started: float) -> Dict[str, Any]:
    return {
        "request_id": request_id_var.get(""),
        "method": request.method,
        "path": request.url.path,
        "status": status,
        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
        # Why: request.client is None under some test transports
        "client_ip": request.client.host if request.client else "unknown",
    }


def _log_access(fields: Dict[str, Any]) -> None:
    logger.log(
        level_for_status(fields["status"]),
        "%(method)s %(path)s %(status)d %(duration_ms).1fms [%(request_id)s] from %(client_ip)s",
        fields,
        extra=fields,
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log for every route except SKIPPED_PATHS."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in SKIPPED_PATHS:
            return await call_next(request)

        # Why perf_counter: monotonic, unaffected by wall-clock adjustments
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 body is rendered by the outermost handler; record it here
            _log_access(_access_fields(request, 500, started))
            raise

        _log_access(_access_fields(request, response.status_code, started))
        return response
