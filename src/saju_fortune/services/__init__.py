"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable with fakes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Cache / Gemini)

Usage:
    ```python
    from saju_fortune.services import CacheService, FortuneService

    cache = CacheService.create()
    fortunes = FortuneService.create(cache_service=cache)
    ```
"""

from .cache_service import CacheService
from .fortune_service import FortuneService

__all__ = [
    "CacheService",
    "FortuneService",
]
