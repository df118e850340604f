"""Shared fixtures and fakes for the fortune service tests."""

from collections.abc import Callable

import pytest

from saju_fortune.entities import BirthProfileEntity
from saju_fortune.repositories import InMemoryCacheRepository
from saju_fortune.services import CacheService, FortuneService

MODELS = ("model-a", "model-b", "model-c")


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTextGenerator:
    """TextGenerator whose behaviour is scripted per call.

    ``behavior(model_name, system_instruction)`` returns the text to
    produce, or an exception instance to raise.
    """

    def __init__(self, behavior: Callable[[str, str | None], object]) -> None:
        self._behavior = behavior
        self.calls: list[dict] = []

    async def generate(self, model_name: str, prompt: str, system_instruction: str | None = None) -> str:
        self.calls.append(
            {"model": model_name, "prompt": prompt, "system_instruction": system_instruction}
        )
        outcome = self._behavior(model_name, system_instruction)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def attempted(self) -> list[str]:
        """``model:phase`` labels in call order."""
        return [
            f"{c['model']}:{'systemInstruction' if c['system_instruction'] else 'inlinePrompt'}"
            for c in self.calls
        ]


class StatusError(Exception):
    """Upstream-style error carrying an HTTP status code."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


def always(result: object) -> Callable[[str, str | None], object]:
    return lambda model_name, system_instruction: result


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def profile() -> BirthProfileEntity:
    return BirthProfileEntity(name="홍길동", birth_date="1997-03-21", birth_time="09:35")


@pytest.fixture
def cache_service(clock) -> CacheService:
    return CacheService(repository=InMemoryCacheRepository(max_entries=200, clock=clock), ttl=1800)


@pytest.fixture
def make_service(cache_service):
    """Build a FortuneService around a FakeTextGenerator.

    Returns (service, generator, api_keys_seen).
    """

    def _make(behavior: Callable[[str, str | None], object], models: tuple[str, ...] = MODELS):
        generator = FakeTextGenerator(behavior)
        api_keys: list[str] = []

        def factory(api_key: str) -> FakeTextGenerator:
            api_keys.append(api_key)
            return generator

        service = FortuneService(
            cache_service=cache_service,
            generator_factory=factory,
            candidate_models=models,
            retry_after_seconds=20,
        )
        return service, generator, api_keys

    return _make
