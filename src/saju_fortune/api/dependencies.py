"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Tests swap the handler through app.dependency_overrides
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from saju_fortune.config import settings
from saju_fortune.handlers import FortuneHandler
from saju_fortune.repositories import GeminiTextGenerator, InMemoryCacheRepository
from saju_fortune.services import CacheService, FortuneService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> FortuneHandler:
    """Dependency injection for FortuneHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "fortune_handler", None)
    if handler is None:
        raise RuntimeError("FortuneHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Repository (in-process cache) - created explicitly
    2. Services (cache + fortune orchestration) - app.state.fortune_service
    3. Handler (HTTP endpoints) - app.state.fortune_handler

    The Gemini client is not built here: the API key is read per request,
    and FortuneService builds a client from it through the factory.
    """
    repository = InMemoryCacheRepository.create(max_entries=settings.cache_max_entries)
    cache_service = CacheService.create(repository=repository, ttl=settings.cache_ttl)
    fortune_service = FortuneService(
        cache_service=cache_service,
        generator_factory=GeminiTextGenerator.create,
        candidate_models=settings.gemini_models,
    )
    fortune_handler = FortuneHandler(fortune_service=fortune_service)

    app.state.cache_service = cache_service
    app.state.fortune_service = fortune_service
    app.state.fortune_handler = fortune_handler

    logger.info(
        "Fortune service initialized",
        extra={
            "models": list(fortune_service.candidate_models),
            "cache_ttl": cache_service.ttl,
            "cache_max_entries": repository.max_entries,
        },
    )

    yield

    del app.state.fortune_handler
    del app.state.fortune_service
    del app.state.cache_service
    logger.info("Fortune service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[FortuneHandler, Depends(get_handler)]
