"""Exception taxonomy for the fortune endpoint.

Every error carries the HTTP status it maps to and a Korean message that is
safe to show to the user. ``details`` holds the raw upstream text and is
returned to the caller as-is.
"""

from typing import Any

from saju_fortune.entities import ModelAttemptEntity

RATE_LIMIT_MESSAGE = (
    "Gemini API 호출 한도(Quota/Rate limit)에 걸렸습니다. "
    "잠시 후 다시 시도하거나 플랜/쿼터를 확인해주세요."
)
MISSING_API_KEY_MESSAGE = "서버 환경변수 GEMINI_API_KEY가 설정되어 있지 않습니다."
MISSING_NAME_MESSAGE = "이름을 입력해주세요."
INVALID_DATE_MESSAGE = "생년월일은 YYYY-MM-DD 형식으로 입력해주세요."
INVALID_TIME_MESSAGE = "태어난 시간은 HH:MM(24시간) 형식으로 입력해주세요."
INVALID_BODY_MESSAGE = "요청 본문은 JSON 객체여야 합니다."

# Cap on model:phase labels embedded in the exhaustion message.
MAX_REPORTED_ATTEMPTS = 6


class FortuneError(Exception):
    """Base class for errors that map to a JSON error response."""

    status_code: int = 500

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self, request_id: str) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message, "requestId": request_id}
        if self.details is not None:
            payload["details"] = self.details
        return payload

    def headers(self) -> dict[str, str] | None:
        return None


class ClientInputError(FortuneError):
    """Malformed name, date or time. Fixable by resubmitting."""

    status_code = 400

    def __init__(self, message: str, received: str | None = None) -> None:
        super().__init__(message)
        self.received = received

    def to_payload(self, request_id: str) -> dict[str, Any]:
        payload = super().to_payload(request_id)
        if self.received is not None:
            payload["received"] = self.received
        return payload


class ConfigurationError(FortuneError):
    """Server is missing the Gemini credential."""

    status_code = 500

    def __init__(self, message: str = MISSING_API_KEY_MESSAGE, details: str | None = None) -> None:
        super().__init__(message, details)


class UpstreamRateLimitError(FortuneError):
    """Gemini reported a rate limit or quota condition; no further attempts are made."""

    status_code = 429

    def __init__(self, details: str, retry_after_seconds: int = 20) -> None:
        super().__init__(RATE_LIMIT_MESSAGE, details)
        self.retry_after_seconds = retry_after_seconds

    def to_payload(self, request_id: str) -> dict[str, Any]:
        payload = super().to_payload(request_id)
        payload["retryAfterSeconds"] = self.retry_after_seconds
        return payload

    def headers(self) -> dict[str, str] | None:
        return {"Retry-After": str(self.retry_after_seconds)}


class UpstreamExhaustedError(FortuneError):
    """Every candidate model failed in both phases for non-rate-limit reasons.

    ``str(error)`` is the diagnostic message; ``message`` is set by the
    handler to the user-facing translation.
    """

    status_code = 500

    def __init__(self, attempts: list[ModelAttemptEntity]) -> None:
        self.attempts = list(attempts)
        last = self.attempts[-1].message if self.attempts else "Unknown error"
        labels = ",".join(a.label for a in self.attempts[:MAX_REPORTED_ATTEMPTS])
        diagnostic = f"All Gemini model attempts failed. last={last} attempts={labels}"
        super().__init__(diagnostic, details=diagnostic)

    @property
    def last_message(self) -> str | None:
        return self.attempts[-1].message if self.attempts else None
