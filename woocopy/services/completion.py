"""
Text Generation Client
OpenAI-compatible chat completions (xAI Grok by default)
"""
import logging
from typing import Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from ..config import (
    GENERATOR_BASE_URL,
    GENERATOR_MODEL,
    GENERATOR_TIMEOUT,
    GENERATOR_TEMPERATURE,
    GENERATOR_MAX_TOKENS,
)
from .errors import CompletionError

logger = logging.getLogger(__name__)


class OpenAICompletionClient:
    """One chat completion per call, credential supplied by the caller"""

    def __init__(
        self,
        base_url: str = GENERATOR_BASE_URL,
        model: str = GENERATOR_MODEL,
        timeout: float = GENERATOR_TIMEOUT,
        temperature: float = GENERATOR_TEMPERATURE,
        max_tokens: int = GENERATOR_MAX_TOKENS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._transport = transport

    def _client(self, credential: str) -> AsyncOpenAI:
        # Retries are disabled: a failed item falls back to the template instead
        return AsyncOpenAI(
            api_key=credential,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0,
            http_client=httpx.AsyncClient(transport=self._transport) if self._transport else None,
        )

    async def complete(self, system_instruction: str, user_instruction: str, credential: Optional[str]) -> str:
        """
        Run one completion
        Args:
            system_instruction: System prompt
            user_instruction: User prompt with product and business data
            credential: API key for the generation service
        Returns:
            Raw text content of the first choice
        Raises:
            CompletionError: On missing credential, transport/HTTP failure or empty content
        """
        if not credential:
            raise CompletionError("No API key configured for text generation")

        client = self._client(credential)
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": user_instruction}
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.warning(f"Completion request failed: {e}")
            raise CompletionError(f"Completion request failed: {e}") from e
        finally:
            await client.close()

        if not response.choices:
            raise CompletionError("Completion returned no choices")

        content = response.choices[0].message.content
        if not content:
            raise CompletionError("Completion returned empty content")

        return content
