"""Saju Fortune - Gemini-backed saju (사주) reading service.

This package provides a layered architecture for one endpoint:

Layers:
    - protocols: Interface contracts (FortuneCacheStore, TextGenerator)
    - repositories: In-memory cache store and Gemini client
    - services: Business logic (cache, model fallback orchestration)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from saju_fortune.normalization import build_birth_profile
    from saju_fortune.services import FortuneService

    service = FortuneService.create()
    profile = build_birth_profile("홍길동", "1997. 3. 21.", "오전 9:35")
    result = await service.get_fortune(profile, api_key="...")
    ```

For HTTP API:
    ```python
    from saju_fortune.api.app import app
    ```
"""

from saju_fortune.config import get_gemini_api_key, settings
from saju_fortune.dto import FortuneRequest, FortuneResponse
from saju_fortune.entities import BirthProfileEntity, CacheEntryEntity, FortuneResultEntity
from saju_fortune.errors import (
    ClientInputError,
    ConfigurationError,
    FortuneError,
    UpstreamExhaustedError,
    UpstreamRateLimitError,
)
from saju_fortune.handlers import FortuneHandler
from saju_fortune.protocols import FortuneCacheStore, TextGenerator
from saju_fortune.repositories import GeminiTextGenerator, InMemoryCacheRepository
from saju_fortune.services import CacheService, FortuneService

__all__ = [
    # Configuration
    "settings",
    "get_gemini_api_key",
    # Protocols (interfaces)
    "FortuneCacheStore",
    "TextGenerator",
    # Services (business logic)
    "CacheService",
    "FortuneService",
    # Handlers (HTTP)
    "FortuneHandler",
    # Repositories
    "InMemoryCacheRepository",
    "GeminiTextGenerator",
    # Entities (domain models)
    "BirthProfileEntity",
    "CacheEntryEntity",
    "FortuneResultEntity",
    # DTOs (API contracts)
    "FortuneRequest",
    "FortuneResponse",
    # Errors
    "FortuneError",
    "ClientInputError",
    "ConfigurationError",
    "UpstreamRateLimitError",
    "UpstreamExhaustedError",
]
