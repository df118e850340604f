"""Entities describing single generation attempts and their outcomes."""

from dataclasses import dataclass
from enum import Enum


class GenerationPhase(str, Enum):
    """Prompt construction strategy, in the order they are tried."""

    SYSTEM_INSTRUCTION = "systemInstruction"
    INLINE_PROMPT = "inlinePrompt"


@dataclass(frozen=True)
class ModelAttemptEntity:
    """A failed attempt, kept for diagnostics only.

    Attributes:
        model: Candidate model identifier
        phase: Which prompting strategy was used
        message: Raw error message from the upstream call
    """

    model: str
    phase: GenerationPhase
    message: str

    @property
    def label(self) -> str:
        return f"{self.model}:{self.phase.value}"


@dataclass(frozen=True)
class Success:
    text: str
    model: str
    phase: GenerationPhase


@dataclass(frozen=True)
class RetryableFailure:
    attempt: ModelAttemptEntity


@dataclass(frozen=True)
class FatalFailure:
    """Failure that must stop all further attempts (rate limit / quota)."""

    error: BaseException
    attempt: ModelAttemptEntity


AttemptOutcome = Success | RetryableFailure | FatalFailure
