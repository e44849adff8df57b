"""
Consolidated middleware for the FoodPlanner API
"""

import time
import logging
import ipaddress
from datetime import datetime
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from limits import parse
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.config import settings
from app.exceptions import ServiceError

logger = logging.getLogger("foodplanner.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    elif isinstance(obj, Exception):
        return str(obj)
    return obj


def error_response(status_code: int, code: str, message, details=None) -> JSONResponse:
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = make_serializable(details)
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started %s %s",
            request.method,
            request.url.path,
            extra={
                "request_id": request_id,
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "Request completed %s %s -> %d (%.4fs)",
                request.method,
                request.url.path,
                response.status_code,
                process_time,
                extra={"request_id": request_id},
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed %s %s: %s",
                request.method,
                request.url.path,
                exc,
                extra={"request_id": request_id, "process_time": f"{process_time:.4f}s"},
                exc_info=True,
            )
            raise


# ============================================================================
# Rate Limiting Middleware
# ============================================================================

AI_PATH_PREFIXES = ("/ai/", "/shopping/optimize")
EXEMPT_PATHS = {"/health"}

_storage = MemoryStorage()
_limiter = MovingWindowRateLimiter(_storage)


def reset_rate_limits():
    """Forget all recorded hits (used between tests)."""
    _storage.reset()


def is_local_client(host) -> bool:
    if not host:
        return False
    if host == "localhost":
        return True
    try:
        return ipaddress.ip_address(host).is_loopback
    except ValueError:
        return False


def route_path(path: str) -> str:
    """Request path without the configured API prefix."""
    if settings.api_prefix and path.startswith(settings.api_prefix):
        return path[len(settings.api_prefix):]
    return path


def is_ai_path(path: str) -> bool:
    return route_path(path).startswith(AI_PATH_PREFIXES)


def is_exempt_path(path: str) -> bool:
    return route_path(path).rstrip("/") in EXEMPT_PATHS


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-IP moving-window limits.

    AI routes and general routes are counted in separate buckets. Loopback
    clients and the health check are never limited.
    """

    def __init__(self, app, general: str = None, ai: str = None, enabled: bool = True):
        super().__init__(app)
        self.general = parse(general or settings.rate_limit_general)
        self.ai = parse(ai or settings.rate_limit_ai)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next):
        host = request.client.host if request.client else None
        path = request.url.path
        if (
            not self.enabled
            or request.method == "OPTIONS"
            or is_exempt_path(path)
            or is_local_client(host)
        ):
            return await call_next(request)

        bucket, limit = ("ai", self.ai) if is_ai_path(path) else ("general", self.general)
        if not _limiter.hit(limit, bucket, host or "unknown"):
            logger.warning("Rate limit exceeded for %s on %s (%s)", host, path, bucket)
            reset_at, _ = _limiter.get_window_stats(limit, bucket, host or "unknown")
            response = error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                "RATE_LIMIT_EXCEEDED",
                "Too many requests, please try again later.",
                details={"limit": str(limit), "scope": bucket},
            )
            response.headers["Retry-After"] = str(max(int(reset_at - time.time()), 1))
            return response

        return await call_next(request)


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Request validation failed",
        details=exc.errors(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return error_response(exc.status_code, f"HTTP_{exc.status_code}", exc.detail)


async def service_exception_handler(request: Request, exc: ServiceError):
    """Handle errors raised by the service layer (validation, not found, conflict, AI)"""
    if exc.http_status >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url}: {exc.message}")
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.url}: {exc.message}")

    return error_response(exc.http_status, exc.code, exc.message, details=exc.details)


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors; the driver message is passed through"""
    logger.exception(f"Database error on {request.url}: {exc}")

    message = str(getattr(exc, "orig", None) or exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "DATABASE_ERROR", message
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )
