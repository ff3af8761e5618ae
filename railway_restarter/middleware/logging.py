"""
Request logging middleware for the restarter's HTTP surface.

Logs every request and its response status with timing. Health checks are
logged at debug level so platform probes do not flood the output.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    def __init__(self, app, quiet_paths: tuple = ("/health",)):
        """
        Initialize the logging middleware.

        Args:
            app: FastAPI application instance
            quiet_paths: Paths logged at debug instead of info level
        """
        super().__init__(app)
        self.quiet_paths = set(quiet_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        log = logger.debug if request.url.path in self.quiet_paths else logger.info
        client_ip = request.client.host if request.client else None

        log(f"📥 {request.method} {request.url.path} - {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"💥 {request.method} {request.url.path} - ERROR - {process_time:.3f}s - {str(e)}"
            )
            raise

        process_time = time.time() - start_time
        log(
            f"📤 {request.method} {request.url.path} - {response.status_code} - "
            f"{process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response
