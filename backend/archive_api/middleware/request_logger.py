# backend/archive_api/middleware/request_logger.py
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from archive_api.logger import get_logger

log = get_logger(__name__)


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """One access line per request; 5xx answers are logged as warnings."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            ms = int((time.perf_counter() - start) * 1000)
            status = getattr(response, "status_code", 500)
            target = request.url.path
            if request.url.query:
                target = f"{target}?{request.url.query}"
            level = logging.WARNING if status >= 500 else logging.INFO
            log.log(level, "%s %s -> %s %dms", request.method, target, status, ms)
