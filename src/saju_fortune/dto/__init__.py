"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import FortuneRequest
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    ErrorResponse,
    FortuneResponse,
    HealthCheckResponse,
)

__all__ = [
    "FortuneRequest",
    "FortuneResponse",
    "ErrorResponse",
    "CacheStatsResponse",
    "CacheClearResponse",
    "HealthCheckResponse",
]
