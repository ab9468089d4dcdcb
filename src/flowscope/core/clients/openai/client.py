"""
For OpenAI models, and the base for providers reached through OpenAI-compatible endpoints.
"""

from __future__ import annotations
from functools import cached_property
from flowscope.core.clients.client_base import Client
from flowscope.core.clients.openai.payload import OpenAIPayload
from flowscope.core.clients.provider import ProviderId
from flowscope.domain.exceptions.exceptions import ErrorCode
from typing import TYPE_CHECKING, override
import logging

if TYPE_CHECKING:
    from openai import AsyncOpenAI
    from flowscope.core.clients.payload_base import Payload

logger = logging.getLogger(__name__)


class OpenAIClient(Client):
    """
    Client implementation for OpenAI's chat completions API.
    Async only. SDK-level retries are disabled; Client.complete owns the retry loop.
    """

    provider = ProviderId.OPENAI
    env_var = "OPENAI_API_KEY"
    base_url: str | None = None

    @cached_property
    def async_client(self) -> AsyncOpenAI:
        from openai import AsyncOpenAI

        return AsyncOpenAI(
            api_key=self._api_key,
            base_url=self.base_url,
            timeout=self.provider_settings.timeout,
            max_retries=0,
        )

    @override
    def _convert_request(self, prompt: str) -> Payload:
        return OpenAIPayload(
            model=self.provider_settings.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.provider_settings.max_tokens,
            temperature=self.provider_settings.temperature,
        )

    @override
    async def _send(self, payload: Payload) -> str:
        import openai

        try:
            result = await self.async_client.chat.completions.create(
                **payload.model_dump(exclude_none=True)
            )
        except openai.APIStatusError as e:
            raise self._error(e.message, status_code=e.status_code) from e
        except openai.APITimeoutError as e:
            raise self._error(
                f"Request timed out after {self.provider_settings.timeout}s",
                code=ErrorCode.UNKNOWN,
            ) from e
        except openai.APIConnectionError as e:
            raise self._error(f"Connection error: {e}", code=ErrorCode.UNKNOWN) from e

        choices = getattr(result, "choices", None)
        if not choices or choices[0].message is None or choices[0].message.content is None:
            raise self._error(
                f"Invalid response format from {self.provider.value}: no message content",
                code=ErrorCode.UNKNOWN,
            )
        return choices[0].message.content
