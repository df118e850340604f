"""Gemini implementation of TextGenerator.

Wraps the ``google-generativeai`` SDK. One instance is bound to one API key;
the persona, when given, is passed as the model's ``system_instruction``.
"""

import logging

import google.generativeai as genai

from saju_fortune.config import settings

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    """Gemini-backed implementation of the TextGenerator protocol.

    This class satisfies the TextGenerator protocol through structural
    typing - no explicit inheritance needed.

    Exceptions from the SDK (``google.api_core.exceptions.*``, ``ValueError``
    for blocked responses, transport errors) are not caught here; callers
    classify them.

    Example:
        ```python
        generator = GeminiTextGenerator.create(api_key="...")
        text = await generator.generate(
            "gemini-1.5-flash",
            "사용자 이름: 홍길동",
            system_instruction="너는 사주명리학자야.",
        )
        ```
    """

    def __init__(self, api_key: str, timeout: float | None = None) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key.
            timeout: Per-call timeout in seconds, or None for the SDK default.
        """
        if not api_key:
            raise ValueError("Gemini API key is required")

        self._api_key = api_key
        self._timeout = timeout
        genai.configure(api_key=api_key)

    @classmethod
    def create(cls, api_key: str, timeout: float | None = None) -> "GeminiTextGenerator":
        """Factory method using settings.gemini_request_timeout when no timeout is given.

        Its signature matches TextGeneratorFactory, so it can be handed to
        FortuneService directly.
        """
        return cls(api_key=api_key, timeout=timeout or settings.gemini_request_timeout)

    async def generate(
        self,
        model_name: str,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        if system_instruction is not None:
            model = genai.GenerativeModel(model_name, system_instruction=system_instruction)
        else:
            model = genai.GenerativeModel(model_name)

        request_options = {"timeout": self._timeout} if self._timeout else None
        response = await model.generate_content_async(prompt, request_options=request_options)
        return response.text

    @property
    def timeout(self) -> float | None:
        return self._timeout
