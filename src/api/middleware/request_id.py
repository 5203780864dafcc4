"""Request ID middleware.

Assigns every request an id, exposes it to log records through a context
variable and echoes it back in the ``X-Request-ID`` response header.
"""

import contextvars
import re
from typing import Callable, Optional
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"

request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id",
    default=None
)

_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._\-]{8,128}$")


def is_valid_request_id(request_id: Optional[str]) -> bool:
    """Accept client-supplied ids made of safe characters only."""
    return bool(request_id) and bool(_REQUEST_ID_PATTERN.match(request_id))


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to generate and propagate request IDs."""

    def __init__(
        self,
        app: ASGIApp,
        header_name: str = REQUEST_ID_HEADER,
        generate_request_id: Optional[Callable[[], str]] = None
    ):
        super().__init__(app)
        self.header_name = header_name
        self.generate_request_id = generate_request_id or (lambda: str(uuid4()))

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name)
        if not is_valid_request_id(request_id):
            request_id = self.generate_request_id()

        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
            response.headers[self.header_name] = request_id
            return response
        finally:
            request_id_var.reset(token)


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id_var.get()


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestIDMiddleware",
    "get_request_id",
    "is_valid_request_id",
    "request_id_var",
]
