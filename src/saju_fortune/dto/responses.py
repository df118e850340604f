"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class FortuneResponse(BaseModel):
    """Response DTO for a successful fortune reading."""

    model_config = ConfigDict(populate_by_name=True)

    result: str = Field(..., description="Generated fortune text")
    request_id: str = Field(..., alias="requestId", description="Correlation id for logs")
    cached: bool = Field(False, description="True when served from cache without calling Gemini")


class ErrorResponse(BaseModel):
    """Response DTO shared by every error status."""

    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(..., description="Korean, user-facing message")
    request_id: str = Field(..., alias="requestId", description="Correlation id for logs")
    details: str | None = Field(None, description="Raw upstream or diagnostic message")
    received: str | None = Field(None, description="Normalized value that failed validation")
    retry_after_seconds: int | None = Field(
        None,
        alias="retryAfterSeconds",
        description="Seconds to wait before retrying (429 only)",
        ge=0,
    )


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Cache backend name")
    total_entries: int = Field(..., description="Entries currently held", ge=0)
    max_entries: int = Field(..., description="Capacity before FIFO eviction", ge=1)
    ttl_seconds: int = Field(..., description="Time-to-live for entries in seconds", ge=1)


class CacheClearResponse(BaseModel):
    success: bool
    deleted_count: int = Field(..., ge=0)
    message: str


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is usable")
    api_key_configured: bool = Field(..., description="Whether GEMINI_API_KEY is set")
