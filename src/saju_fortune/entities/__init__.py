"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .birth_profile import BirthProfileEntity
from .cache_entry import CacheEntryEntity
from .fortune_result import FortuneResultEntity
from .generation import (
    AttemptOutcome,
    FatalFailure,
    GenerationPhase,
    ModelAttemptEntity,
    RetryableFailure,
    Success,
)

__all__ = [
    "AttemptOutcome",
    "BirthProfileEntity",
    "CacheEntryEntity",
    "FatalFailure",
    "FortuneResultEntity",
    "GenerationPhase",
    "ModelAttemptEntity",
    "RetryableFailure",
    "Success",
]
