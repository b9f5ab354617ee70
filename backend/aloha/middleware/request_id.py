"""
Request ID middleware for correlation tracking.

This middleware ensures every request has a correlation ID:
- Reads the X-Request-ID header from the client (if provided)
- Generates a UUID if the header is missing
- Stores it in request.state for the logging middleware and routes
- Echoes it in the response headers

Every log line written while serving a request can then be tied back
to the call that produced it.
"""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a correlation ID to every request and response.

    Flow:
    1. Check for X-Request-ID header in incoming request
    2. If present, use it; otherwise generate new UUID
    3. Store in request.state.request_id
    4. Add to response headers as X-Request-ID

    Example:
        app.add_middleware(RequestIDMiddleware)

    Usage in routes:
        @router.get("/example")
        async def example(request: Request):
            logger.info("Listing", extra={"request_id": request.state.request_id})
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        """
        Process request and add request ID.

        Args:
            request: Incoming request
            call_next: Next middleware/route handler in chain

        Returns:
            Response with X-Request-ID header
        """
        # Client-supplied ID wins; an empty header counts as missing
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        # Store in request state for access by routes and other middleware
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
