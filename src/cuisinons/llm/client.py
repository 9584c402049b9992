"""
Cuisinons - LLM Client.

Plain-text generation for the LLM extractor. The extractor parses the JSON
itself, so this client returns raw text rather than a structured model.
Any OpenAI-compatible endpoint works (OpenRouter via LLM_BASE_URL).
"""

import logging
from typing import Protocol

from openai import AsyncOpenAI

from cuisinons.config import settings
from cuisinons.llm.prompt_logger import log_prompt

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Text-generation capability: the LLM extractor's only dependency."""

    async def generate(
        self,
        system_prompt: str,
        user_message: str,
        *,
        max_tokens: int,
        temperature: float,
        timeout: float | None = None,
    ) -> str: ...


class OpenAITextGenerator:
    """TextGenerator backed by the OpenAI chat completions API."""

    def __init__(self, model: str | None = None, client: AsyncOpenAI | None = None) -> None:
        self.model = model or settings.llm_model
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        """Create the client on first use so a missing key only fails LLM calls."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=settings.require_openai_api_key(),
                base_url=settings.llm_base_url,
            )
        return self._client

    async def generate(
        self,
        system_prompt: str,
        user_message: str,
        *,
        max_tokens: int,
        temperature: float,
        timeout: float | None = None,
    ) -> str:
        """
        Run one chat completion and return the message text.

        Args:
            system_prompt: System message setting the extraction rules
            user_message: User message with the content to analyze
            max_tokens: Upper bound on generated tokens
            temperature: Sampling temperature
            timeout: Request timeout in seconds (client default if None)

        Returns:
            The model's reply, or an empty string if it returned no content
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ]

        api_kwargs = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if timeout is not None:
            api_kwargs["timeout"] = timeout

        try:
            response = await self.client.chat.completions.create(**api_kwargs)
        except Exception as e:
            log_prompt(
                source="llm",
                model=self.model,
                system_prompt=system_prompt,
                user_prompt=user_message,
                error=str(e),
                config={"max_tokens": max_tokens, "temperature": temperature},
            )
            raise

        text = response.choices[0].message.content or ""
        log_prompt(
            source="llm",
            model=self.model,
            system_prompt=system_prompt,
            user_prompt=user_message,
            response=text,
            config={"max_tokens": max_tokens, "temperature": temperature},
        )
        logger.debug(f"LLM returned {len(text)} characters")
        return text


# Singleton generator instance
_generator: OpenAITextGenerator | None = None


def get_generator() -> OpenAITextGenerator:
    """Get the shared text generator."""
    global _generator

    if _generator is None:
        _generator = OpenAITextGenerator()

    return _generator
