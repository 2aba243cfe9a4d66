"""
Request logging middleware.

Every request gets a short request id. Generation endpoints reuse it as the
run id, so the ``X-Request-ID`` response header names the run's output and
log directories.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from mcpgen.config import Settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Requests that render projects are logged at INFO, everything else at DEBUG
GENERATION_PATHS = ("/api/v1/generate", "/api/v1/resolve", "/api/v1/templates/")


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def get_request_id(request: Request) -> str:
    """Request id assigned by the middleware, or a fresh one outside it."""
    return getattr(request.state, "request_id", None) or new_request_id()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration under the request id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = new_request_id()
        request.state.request_id = request_id
        path = request.url.path
        level = logging.INFO if path.startswith(GENERATION_PATHS) else logging.DEBUG
        start_time = time.time()

        logger.log(level, f"→ [{request_id}] {request.method} {path}")

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = round((time.time() - start_time) * 1000, 2)
            logger.exception(f"✗ [{request_id}] {request.method} {path} failed after {duration_ms}ms")
            raise

        duration_ms = round((time.time() - start_time) * 1000, 2)
        logger.log(
            logging.WARNING if response.status_code >= 500 else level,
            f"← [{request_id}] {request.method} {path} {response.status_code} - {duration_ms}ms"
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_logging_middleware(app: FastAPI, settings: Settings) -> None:
    """Setup logging middleware for the FastAPI application."""
    app.add_middleware(LoggingMiddleware)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Suppress verbose third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
