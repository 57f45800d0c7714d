import logging
import time
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import Receive, Scope, Send

logger = logging.getLogger(__name__)


class AllowListCORSMiddleware(CORSMiddleware):
    """CORS that refuses foreign origins outright instead of omitting headers.

    Requests without an Origin header are not cross-origin and pass through.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin")
            if origin is not None and not self.is_allowed_origin(origin):
                logger.warning("Rejected request from origin %s", origin)
                response = JSONResponse({"error": "CORS Error"}, status_code=403)
                await response(scope, receive, send)
                return
        await super().__call__(scope, receive, send)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path, status and elapsed time."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.exception(
                "%s %s failed after %.2f ms",
                request.method,
                request.url.path,
                duration_ms,
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "%s %s %s %.2f ms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


def setup_middleware(app: FastAPI, allowed_origin: str) -> None:
    # Added last runs first: CORS is evaluated before logging.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        AllowListCORSMiddleware,
        allow_origins=[allowed_origin],
        allow_methods=["*"],
        allow_headers=["*"],
    )
