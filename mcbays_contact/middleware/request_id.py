"""
Request ID middleware.

Generates a unique request_id for each incoming request. The request_id is:
- Added to the request state
- Added to response headers (X-Request-ID)
- Set in context variables so every log line of the request carries it
"""

import uuid
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from mcbays_contact.core.logging_config import set_request_id, clear_request_id
from mcbays_contact.core.sentry import clear_sentry_request_id, set_sentry_request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Adds a UUID4 request_id to each request and to its log context."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())

        request.state.request_id = request_id

        set_request_id(request_id)
        set_sentry_request_id(request_id)

        try:
            logger.info(f"{request.method} {request.url.path} - Request started")

            response: Response = await call_next(request)

            response.headers["X-Request-ID"] = request_id

            logger.info(
                f"{request.method} {request.url.path} - Request completed with status {response.status_code}"
            )

            return response

        except Exception as e:
            logger.error(f"{request.method} {request.url.path} - Request failed: {e}")
            raise
        finally:
            clear_request_id()
            clear_sentry_request_id()
