"""Text generation protocol.

Defines the interface for a generative-language-model client that turns a
prompt into text using a named model.
"""

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextGenerator(Protocol):
    """Protocol for text generation clients."""

    async def generate(
        self,
        model_name: str,
        prompt: str,
        system_instruction: str | None = None,
    ) -> str:
        """Generate text for a prompt.

        Args:
            model_name: Upstream model identifier (e.g. "gemini-1.5-flash")
            prompt: The user-facing prompt
            system_instruction: Persona bound to the model, or None to send
                the prompt alone

        Returns:
            The generated text

        Raises:
            Exception: Any upstream failure, propagated as raised by the client
        """
        ...


# Builds a generator bound to an API credential.
TextGeneratorFactory = Callable[[str], TextGenerator]
