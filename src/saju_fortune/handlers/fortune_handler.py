"""HTTP handlers for fortune operations.

Handlers convert between DTOs (API contracts) and service calls.
They own the HTTP concerns: request ids, status codes, headers and the
translation of raw failures into Korean user-facing messages.
"""

import logging
import uuid
from collections.abc import Callable

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from saju_fortune.classification import is_rate_limit_error, to_user_friendly_gemini_error
from saju_fortune.config import get_gemini_api_key, settings
from saju_fortune.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    FortuneRequest,
    FortuneResponse,
    HealthCheckResponse,
)
from saju_fortune.errors import (
    INVALID_BODY_MESSAGE,
    ClientInputError,
    ConfigurationError,
    FortuneError,
    UpstreamExhaustedError,
    UpstreamRateLimitError,
)
from saju_fortune.normalization import build_birth_profile
from saju_fortune.services import FortuneService

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    return str(uuid.uuid4())


class FortuneHandler:
    """HTTP handlers for the fortune endpoint and cache administration.

    Example:
        ```python
        from saju_fortune.handlers import FortuneHandler
        from saju_fortune.services import FortuneService

        handler = FortuneHandler(fortune_service=FortuneService.create())

        @app.post("/api/saju")
        async def create_fortune(request: Request):
            return await handler.create_fortune(request)
        ```
    """

    def __init__(
        self,
        fortune_service: FortuneService,
        api_key_provider: Callable[[], str | None] = get_gemini_api_key,
        retry_after_seconds: int | None = None,
    ) -> None:
        """Initialize the fortune handler.

        Args:
            fortune_service: The fortune service for business logic (required).
            api_key_provider: Returns the Gemini credential; called per request.
            retry_after_seconds: Hint for 429 responses not raised by the
                service. Defaults to settings.retry_after_seconds.
        """
        self._fortunes = fortune_service
        self._api_key_provider = api_key_provider
        self._retry_after_seconds = (
            settings.retry_after_seconds if retry_after_seconds is None else retry_after_seconds
        )

    async def create_fortune(self, request: Request) -> JSONResponse:
        """Handle POST /api/saju requests.

        The credential is checked before the body is even parsed, then
        the input is validated before any upstream call is made.

        Returns:
            JSONResponse with a FortuneResponse (200) or an ErrorResponse
            (400, 429, 500)
        """
        request_id = new_request_id()
        try:
            api_key = self._api_key_provider()
            if not api_key:
                raise ConfigurationError(details="GEMINI_API_KEY is not set")

            body = await self._parse_body(request)
            profile = build_birth_profile(body.name, body.birth_date, body.birth_time)
            result = await self._fortunes.get_fortune(profile, api_key=api_key, request_id=request_id)

        except ClientInputError as e:
            logger.info(
                f"Rejected fortune request: {e.message}",
                extra={"request_id": request_id, "received": e.received},
            )
            return self._error_response(e, request_id)

        except Exception as e:
            logger.error(
                f"Fortune request failed: {e}",
                extra={"request_id": request_id, "error_type": type(e).__name__},
            )
            return self._error_response(self._translate(e), request_id)

        response = FortuneResponse(result=result.text, request_id=request_id, cached=result.cached)
        return JSONResponse(
            content=response.model_dump(by_alias=True),
            headers={REQUEST_ID_HEADER: request_id},
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /cache/stats requests."""
        stats = self._fortunes.cache.get_stats()
        return CacheStatsResponse(
            backend=stats.get("backend", "unknown"),
            total_entries=stats.get("total_entries", 0),
            max_entries=stats.get("max_entries", 1),
            ttl_seconds=stats.get("ttl", 0),
        )

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /cache requests."""
        count = self._fortunes.cache.clear()
        logger.info(f"Cache cleared ({count} entries)")
        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message="Cache cleared successfully",
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        cache_healthy = self._fortunes.cache.is_healthy()
        api_key_configured = bool(self._api_key_provider())
        return HealthCheckResponse(
            status="healthy" if cache_healthy and api_key_configured else "unhealthy",
            cache_healthy=cache_healthy,
            api_key_configured=api_key_configured,
        )

    @staticmethod
    async def _parse_body(request: Request) -> FortuneRequest:
        try:
            payload = await request.json()
        except ValueError as e:
            raise ClientInputError(INVALID_BODY_MESSAGE) from e

        if not isinstance(payload, dict):
            raise ClientInputError(INVALID_BODY_MESSAGE)

        try:
            return FortuneRequest.model_validate(payload)
        except ValidationError as e:
            raise ClientInputError(INVALID_BODY_MESSAGE) from e

    def _translate(self, error: Exception) -> FortuneError:
        """Turn any server-side failure into the error that is sent back."""
        if isinstance(error, (ConfigurationError, UpstreamRateLimitError)):
            return error

        message = str(error) or "Unknown error"
        if is_rate_limit_error(error, message):
            return UpstreamRateLimitError(details=message, retry_after_seconds=self._retry_after_seconds)

        if isinstance(error, UpstreamExhaustedError):
            error.message = to_user_friendly_gemini_error(message)
            return error

        return FortuneError(to_user_friendly_gemini_error(message), details=message)

    @staticmethod
    def _error_response(error: FortuneError, request_id: str) -> JSONResponse:
        headers = {REQUEST_ID_HEADER: request_id}
        headers.update(error.headers() or {})
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_payload(request_id),
            headers=headers,
        )
