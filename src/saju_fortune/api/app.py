from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from saju_fortune.api.dependencies import HandlerDep, lifespan
from saju_fortune.api.middleware import AccessLogMiddleware
from saju_fortune.config import settings
from saju_fortune.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    ErrorResponse,
    FortuneRequest,
    FortuneResponse,
    HealthCheckResponse,
)
from saju_fortune.logger import setup_logging

API_VERSION = "0.1.0"

setup_logging(level=settings.log_level, log_dir=settings.log_dir)

app = FastAPI(
    title="Saju Fortune API",
    description="사주 풀이 API: 이름과 생년월일시를 Gemini에 전달해 운세를 생성합니다",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Retry-After", "X-Request-ID"],
)
app.add_middleware(AccessLogMiddleware)  # type: ignore[arg-type]


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Saju Fortune API",
        "version": API_VERSION,
        "endpoints": {
            "fortune": "/api/saju",
            "cache_stats": "/cache/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post(
    "/api/saju",
    response_model=FortuneResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing name or malformed date/time"},
        429: {"model": ErrorResponse, "description": "Gemini rate limit or quota reached"},
        500: {"model": ErrorResponse, "description": "Missing API key or every model failed"},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": FortuneRequest.model_json_schema(by_alias=True)}},
        }
    },
)
async def create_fortune(request: Request, handler: HandlerDep) -> JSONResponse:
    """
    Generate (or serve from cache) a saju reading.

    The body is parsed by the handler rather than by FastAPI, so a missing
    API key is reported before any input validation happens.
    """
    return await handler.create_fortune(request)


@app.get("/cache/stats", response_model=CacheStatsResponse)
async def get_cache_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache statistics."""
    return await handler.get_stats()


@app.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Clear all cached fortunes."""
    return await handler.clear_cache()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "saju_fortune.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
