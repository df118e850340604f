"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the cache backend or the text-generation client
- Unit testing with fake implementations

Usage:
    ```python
    from saju_fortune.protocols import FortuneCacheStore, TextGenerator

    store: FortuneCacheStore = InMemoryCacheRepository()
    generator: TextGenerator = GeminiTextGenerator(api_key="...")
    ```
"""

from .cache_store import FortuneCacheStore
from .text_generator import TextGenerator, TextGeneratorFactory

__all__ = [
    "FortuneCacheStore",
    "TextGenerator",
    "TextGeneratorFactory",
]
