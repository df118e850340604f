import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("saju_fortune.access")


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs one record per request: method, path, status and duration.

    Responses with status >= 400 are logged at WARNING. Exceptions are
    logged and re-raised for FastAPI's own handling.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        log_fields = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": client_ip,
        }

        try:
            response = await call_next(request)
        except Exception:
            log_fields["duration"] = f"{time.perf_counter() - start_time:.4f}s"
            logger.error("SYSTEM_CRITICAL_ERROR", extra=log_fields, exc_info=True)
            raise

        log_fields["status"] = response.status_code
        log_fields["duration"] = f"{time.perf_counter() - start_time:.4f}s"
        request_id = response.headers.get("X-Request-ID")
        if request_id:
            log_fields["request_id"] = request_id

        if response.status_code >= 400:
            logger.warning("HTTP_ERROR", extra=log_fields)
        else:
            logger.info("SUCCESS", extra=log_fields)
        return response
