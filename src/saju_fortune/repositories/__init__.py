"""Repository layer for data access.

This layer hides external dependencies (the cache backend, the Gemini API)
behind protocol-based interfaces so services can be exercised with fakes.
"""

from saju_fortune.protocols import FortuneCacheStore, TextGenerator

from .gemini_text_generator import GeminiTextGenerator
from .memory_repository import InMemoryCacheRepository

__all__ = [
    "FortuneCacheStore",
    "TextGenerator",
    "GeminiTextGenerator",
    "InMemoryCacheRepository",
]
