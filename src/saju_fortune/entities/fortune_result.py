"""Fortune result domain entity."""

from dataclasses import dataclass

from .generation import GenerationPhase


@dataclass(frozen=True)
class FortuneResultEntity:
    """Text handed back to the handler, either fresh or from cache.

    ``model`` and ``phase`` are only set for fresh generations.
    """

    text: str
    cached: bool
    model: str | None = None
    phase: GenerationPhase | None = None
