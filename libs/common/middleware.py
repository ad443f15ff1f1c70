"""Request tracing middleware for the reports service.

Every request gets an ``X-Request-ID`` (taken from the caller or generated)
bound to the logging context, and an ``X-Response-Time-ms`` header. Report
requests log their scope and period so slow or rejected reports can be
traced back to the parameters that produced them.
"""
import time
from typing import Callable, Iterable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from libs.common.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time-ms"

# Query parameters worth echoing into request logs.
_LOGGED_PARAMS = ("scope", "period", "month", "quarter", "year", "ministry")


class RequestContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, quiet_paths: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.quiet_paths = frozenset(quiet_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = set_request_context(
            request_id=request.headers.get(REQUEST_ID_HEADER),
            path=request.url.path,
            method=request.method,
        )
        quiet = request.url.path in self.quiet_paths
        started = time.perf_counter()

        if not quiet:
            params = {
                k: request.query_params[k]
                for k in _LOGGED_PARAMS
                if k in request.query_params
            }
            logger.info("Request started", extra={"extra_fields": params})

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error while serving request",
                extra={"extra_fields": {"duration_ms": _elapsed_ms(started)}},
            )
            raise
        finally:
            clear_request_context()

        duration_ms = _elapsed_ms(started)
        if not quiet:
            # Context is already cleared; carry the id explicitly.
            fields = {
                "request_id": request_id,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            }
            if response.status_code >= 400:
                logger.warning("Request rejected", extra={"extra_fields": fields})
            else:
                logger.info("Request completed", extra={"extra_fields": fields})

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[RESPONSE_TIME_HEADER] = str(duration_ms)
        return response


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def add_observability_middleware(app: FastAPI) -> None:
    """Configure logging, then trace every request through the app."""
    configure_logging()
    app.add_middleware(RequestContextMiddleware)
