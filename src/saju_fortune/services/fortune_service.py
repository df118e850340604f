"""Fortune generation service.

Serves a cached fortune when one is fresh; otherwise walks the candidate
models in two phases until one of them produces text:

1. ``systemInstruction``: the persona is bound to the model and only the
   user data is sent.
2. ``inlinePrompt``: only if phase 1 produced nothing; persona and user data
   are sent together as a single prompt.

Attempts run one at a time, in list order. A rate-limit or quota failure
stops everything at once, since every further call would spend more of the
same quota. Any other failure is recorded and the next candidate is tried.
"""

import logging
from collections.abc import Sequence

from saju_fortune.classification import is_rate_limit_error
from saju_fortune.config import settings
from saju_fortune.entities import (
    AttemptOutcome,
    BirthProfileEntity,
    FatalFailure,
    FortuneResultEntity,
    GenerationPhase,
    ModelAttemptEntity,
    RetryableFailure,
    Success,
)
from saju_fortune.errors import UpstreamExhaustedError, UpstreamRateLimitError
from saju_fortune.prompts import SYSTEM_PROMPT, build_inline_prompt, build_user_prompt
from saju_fortune.protocols import TextGenerator, TextGeneratorFactory

from .cache_service import CacheService

logger = logging.getLogger(__name__)

PHASES = (GenerationPhase.SYSTEM_INSTRUCTION, GenerationPhase.INLINE_PROMPT)


class FortuneService:
    """Orchestrates cache lookup and the model fallback sequence.

    Example:
        ```python
        from saju_fortune.repositories import GeminiTextGenerator
        from saju_fortune.services import CacheService, FortuneService

        service = FortuneService(
            cache_service=CacheService.create(),
            generator_factory=GeminiTextGenerator.create,
        )
        result = await service.get_fortune(profile, api_key="...")
        ```
    """

    def __init__(
        self,
        cache_service: CacheService,
        generator_factory: TextGeneratorFactory,
        candidate_models: Sequence[str] | None = None,
        system_prompt: str = SYSTEM_PROMPT,
        retry_after_seconds: int | None = None,
    ) -> None:
        """Initialize the fortune service.

        Args:
            cache_service: Cache for generated texts (required).
            generator_factory: Builds a TextGenerator for an API key (required).
            candidate_models: Model identifiers in preference order.
                Defaults to settings.gemini_models.
            system_prompt: Persona instruction.
            retry_after_seconds: Hint attached to rate-limit errors.
                Defaults to settings.retry_after_seconds.
        """
        self._cache = cache_service
        self._generator_factory = generator_factory
        self._candidate_models = tuple(candidate_models or settings.gemini_models)
        self._system_prompt = system_prompt
        self._retry_after_seconds = (
            settings.retry_after_seconds if retry_after_seconds is None else retry_after_seconds
        )

    @classmethod
    def create(
        cls,
        cache_service: CacheService | None = None,
        generator_factory: TextGeneratorFactory | None = None,
        candidate_models: Sequence[str] | None = None,
    ) -> "FortuneService":
        """Factory method wiring the in-memory cache and the Gemini client by default."""
        if generator_factory is None:
            from saju_fortune.repositories import GeminiTextGenerator

            generator_factory = GeminiTextGenerator.create
        return cls(
            cache_service=cache_service or CacheService.create(),
            generator_factory=generator_factory,
            candidate_models=candidate_models,
        )

    async def get_fortune(
        self,
        profile: BirthProfileEntity,
        api_key: str,
        request_id: str | None = None,
    ) -> FortuneResultEntity:
        """Return the fortune for a profile, from cache or freshly generated.

        Args:
            profile: Validated birth profile
            api_key: Gemini credential for this request
            request_id: Correlation id used in log records

        Returns:
            FortuneResultEntity; ``cached`` is True when no upstream call was made

        Raises:
            UpstreamRateLimitError: A rate-limit/quota failure aborted the sequence
            UpstreamExhaustedError: Every model failed in both phases
        """
        cached = self._cache.get(profile)
        if cached:
            logger.info("Fortune served from cache", extra={"request_id": request_id})
            return FortuneResultEntity(text=cached, cached=True)

        generator = self._generator_factory(api_key)
        success = await self._generate(generator, profile, request_id)

        self._cache.store(profile, success.text)
        logger.info(
            "Fortune generated",
            extra={"request_id": request_id, "model": success.model, "phase": success.phase.value},
        )
        return FortuneResultEntity(
            text=success.text,
            cached=False,
            model=success.model,
            phase=success.phase,
        )

    async def _generate(
        self,
        generator: TextGenerator,
        profile: BirthProfileEntity,
        request_id: str | None,
    ) -> Success:
        failures: list[ModelAttemptEntity] = []

        for phase in PHASES:
            for model_name in self._candidate_models:
                outcome = await self._attempt(generator, model_name, phase, profile)

                if isinstance(outcome, Success):
                    return outcome

                if isinstance(outcome, FatalFailure):
                    logger.warning(
                        "Rate limit reached, aborting remaining attempts",
                        extra={
                            "request_id": request_id,
                            "model": model_name,
                            "phase": phase.value,
                            "error_message": outcome.attempt.message,
                        },
                    )
                    raise UpstreamRateLimitError(
                        details=outcome.attempt.message,
                        retry_after_seconds=self._retry_after_seconds,
                    ) from outcome.error

                failures.append(outcome.attempt)
                logger.error(
                    f"generateContent failed ({phase.value})",
                    extra={
                        "request_id": request_id,
                        "model": model_name,
                        "phase": phase.value,
                        "error_message": outcome.attempt.message,
                    },
                )

        raise UpstreamExhaustedError(failures)

    async def _attempt(
        self,
        generator: TextGenerator,
        model_name: str,
        phase: GenerationPhase,
        profile: BirthProfileEntity,
    ) -> AttemptOutcome:
        """Run one model call and classify the result. Never raises for upstream errors."""
        try:
            if phase is GenerationPhase.SYSTEM_INSTRUCTION:
                text = await generator.generate(
                    model_name,
                    build_user_prompt(profile),
                    system_instruction=self._system_prompt,
                )
            else:
                text = await generator.generate(
                    model_name,
                    build_inline_prompt(profile, self._system_prompt),
                )
        except Exception as e:
            attempt = ModelAttemptEntity(model=model_name, phase=phase, message=str(e) or type(e).__name__)
            if is_rate_limit_error(e, attempt.message):
                return FatalFailure(error=e, attempt=attempt)
            return RetryableFailure(attempt=attempt)

        if not text:
            return RetryableFailure(
                attempt=ModelAttemptEntity(model=model_name, phase=phase, message="Empty response text"),
            )
        return Success(text=text, model=model_name, phase=phase)

    @property
    def candidate_models(self) -> tuple[str, ...]:
        return self._candidate_models

    @property
    def cache(self) -> CacheService:
        return self._cache
