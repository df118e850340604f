"""Classify upstream failures by their message text.

Two independent passes run over the same failure:

* ``is_rate_limit_error`` decides whether to stop trying and answer 429.
* ``to_user_friendly_gemini_error`` picks the Korean message shown to the
  user, from an ordered table where the first matching row wins.

Neither looks at exception types, only at the message (and, for rate
limits, a numeric status code found on the exception).
"""

from collections.abc import Callable
from enum import Enum

from saju_fortune.errors import RATE_LIMIT_MESSAGE


class ErrorCategory(str, Enum):
    QUOTA = "quota"
    INVALID_API_KEY = "invalid_api_key"
    PERMISSION = "permission"
    MODEL_UNAVAILABLE = "model_unavailable"
    NETWORK = "network"
    UNKNOWN = "unknown"


def _contains_any(message: str, *needles: str) -> bool:
    return any(needle in message for needle in needles)


def _is_quota(message: str) -> bool:
    return _contains_any(message, "429", "resource exhausted", "quota", "rate")


def _is_invalid_api_key(message: str) -> bool:
    return "api key" in message and _contains_any(message, "invalid", "not valid")


def _is_permission(message: str) -> bool:
    return _contains_any(message, "permission", "unauthorized", "forbidden", "403")


def _is_model_unavailable(message: str) -> bool:
    return _contains_any(message, "not found", "404", "model")


def _is_network(message: str) -> bool:
    return _contains_any(message, "fetch failed", "enotfound", "econn", "timeout", "timed out", "connection")


# Evaluated top to bottom against the lower-cased message.
ERROR_CATEGORIES: list[tuple[ErrorCategory, Callable[[str], bool], str]] = [
    (ErrorCategory.QUOTA, _is_quota, RATE_LIMIT_MESSAGE),
    (
        ErrorCategory.INVALID_API_KEY,
        _is_invalid_api_key,
        "Gemini API 키가 유효하지 않습니다. 서버 환경변수 GEMINI_API_KEY를 다시 확인해주세요.",
    ),
    (
        ErrorCategory.PERMISSION,
        _is_permission,
        "Gemini API 권한 오류가 발생했습니다. API 키 권한/결제/프로젝트 설정을 확인해주세요.",
    ),
    (
        ErrorCategory.MODEL_UNAVAILABLE,
        _is_model_unavailable,
        "Gemini 모델 호출에 실패했습니다(모델/리전/권한). 잠시 후 다시 시도하거나 설정을 확인해주세요.",
    ),
    (
        ErrorCategory.NETWORK,
        _is_network,
        "외부 AI 서버 통신에 실패했습니다(네트워크/타임아웃). 잠시 후 다시 시도해주세요.",
    ),
]

GENERIC_ERROR_MESSAGE = "사주 분석 요청 중 오류가 발생했습니다."


def extract_status_code(error: object) -> int | None:
    """Find an HTTP-like status code on an exception.

    Looks at ``status``, ``status_code``, ``code`` and then the same fields on
    ``error.response``. Integers and all-digit strings count; anything else
    (gRPC enums, None) is skipped.
    """
    response = getattr(error, "response", None)
    candidates = [
        getattr(error, "status", None),
        getattr(error, "status_code", None),
        getattr(error, "code", None),
        getattr(response, "status", None),
        getattr(response, "status_code", None),
    ]
    for candidate in candidates:
        if isinstance(candidate, bool):
            continue
        if isinstance(candidate, int):
            return int(candidate)
        if isinstance(candidate, str) and candidate.isascii() and candidate.isdigit():
            return int(candidate)
    return None


def is_rate_limit_error(error: object, message: str | None = None) -> bool:
    """Return True if the failure signals a rate limit or exhausted quota.

    Args:
        error: The raised exception (or any object carrying a status code).
        message: Message to inspect; defaults to ``str(error)``.
    """
    text = (message if message is not None else str(error)).lower()
    return extract_status_code(error) == 429 or _is_quota(text)


def classify_gemini_error(message: str) -> ErrorCategory:
    lowered = message.lower()
    for category, predicate, _ in ERROR_CATEGORIES:
        if predicate(lowered):
            return category
    return ErrorCategory.UNKNOWN


def to_user_friendly_gemini_error(message: str) -> str:
    """Map a raw upstream message to the Korean message shown to the user."""
    lowered = message.lower()
    for _, predicate, user_message in ERROR_CATEGORIES:
        if predicate(lowered):
            return user_message
    return GENERIC_ERROR_MESSAGE
