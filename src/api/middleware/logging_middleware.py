"""Logging middleware for the profiling API.

Logs each request and its response status with timing. Sensitive headers are
masked; bodies are never logged since they carry candidate answers.
"""

import time
from typing import Callable, Dict, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.utils.logger import get_api_logger, log_api_response

logger = get_api_logger()

MASKED_VALUE = "***MASKED***"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses."""

    def __init__(
        self,
        app: ASGIApp,
        exclude_paths: Optional[List[str]] = None,
        mask_fields: Optional[List[str]] = None
    ):
        """Initialize logging middleware.

        Args:
            app: The ASGI application
            exclude_paths: Path prefixes that are not logged
            mask_fields: Header name fragments whose values are masked
        """
        super().__init__(app)
        self.exclude_paths = exclude_paths or ["/metrics", "/docs", "/redoc", "/openapi.json"]
        self.mask_fields = mask_fields or ["authorization", "cookie", "token", "api-key"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        start_time = time.time()

        logger.info(
            f"Request: {request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_host": request.client.host if request.client else None,
                "headers": self.mask_headers(dict(request.headers)),
            }
        )

        response = await call_next(request)

        duration_ms = round((time.time() - start_time) * 1000, 2)
        log_api_response(
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            logger=logger,
        )
        response.headers["X-Process-Time-Ms"] = str(duration_ms)
        return response

    def mask_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Mask sensitive header values.

        Args:
            headers: Request headers

        Returns:
            Dict[str, str]: Headers with sensitive values masked
        """
        return {
            key: MASKED_VALUE if any(field in key.lower() for field in self.mask_fields) else value
            for key, value in headers.items()
        }


__all__ = ["LoggingMiddleware"]
