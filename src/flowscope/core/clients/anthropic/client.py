from __future__ import annotations
from functools import cached_property
from flowscope.core.clients.client_base import Client
from flowscope.core.clients.anthropic.payload import AnthropicPayload
from flowscope.core.clients.provider import ProviderId
from flowscope.domain.exceptions.exceptions import ErrorCode
from typing import TYPE_CHECKING, override

if TYPE_CHECKING:
    from anthropic import AsyncAnthropic
    from flowscope.core.clients.payload_base import Payload


class AnthropicClient(Client):
    """
    Client implementation for Anthropic's Claude API.
    Async only. The SDK sets the anthropic-version header; its own retries are disabled.
    """

    provider = ProviderId.CLAUDE
    env_var = "ANTHROPIC_API_KEY"

    @cached_property
    def async_client(self) -> AsyncAnthropic:
        from anthropic import AsyncAnthropic

        return AsyncAnthropic(
            api_key=self._api_key,
            timeout=self.provider_settings.timeout,
            max_retries=0,
        )

    @override
    def _convert_request(self, prompt: str) -> Payload:
        """
        Anthropic requires max_tokens and takes no system role in messages.
        """
        return AnthropicPayload(
            model=self.provider_settings.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.provider_settings.max_tokens,
            temperature=self.provider_settings.temperature,
        )

    @override
    async def _send(self, payload: Payload) -> str:
        import anthropic

        try:
            result = await self.async_client.messages.create(
                **payload.model_dump(exclude_none=True)
            )
        except anthropic.APIStatusError as e:
            raise self._error(e.message, status_code=e.status_code) from e
        except anthropic.APITimeoutError as e:
            raise self._error(
                f"Request timed out after {self.provider_settings.timeout}s",
                code=ErrorCode.UNKNOWN,
            ) from e
        except anthropic.APIConnectionError as e:
            raise self._error(f"Connection error: {e}", code=ErrorCode.UNKNOWN) from e

        content = getattr(result, "content", None)
        if not content or getattr(content[0], "text", None) is None:
            raise self._error(
                "Invalid response format from claude: no text content",
                code=ErrorCode.UNKNOWN,
            )
        return content[0].text
