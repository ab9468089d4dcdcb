"""
For Google Gemini models.
"""

from __future__ import annotations
from flowscope.core.clients.openai.client import OpenAIClient
from flowscope.core.clients.google.payload import GooglePayload
from flowscope.core.clients.provider import ProviderId
from flowscope.domain.exceptions.exceptions import ErrorCode, ProviderError
from typing import TYPE_CHECKING, override

if TYPE_CHECKING:
    from flowscope.core.clients.payload_base import Payload

# Google AI Studio keys all carry this prefix
GEMINI_KEY_PREFIX = "AIza"


class GoogleClient(OpenAIClient):
    """
    Client implementation for Google's Gemini API using the OpenAI-compatible endpoint.
    Async only.
    """

    provider = ProviderId.GEMINI
    env_var = "GOOGLE_API_KEY"
    base_url = "https://generativelanguage.googleapis.com/v1beta/"

    @override
    def _get_api_key(self, credential: str | None) -> str:
        api_key = super()._get_api_key(credential)
        if not api_key.startswith(GEMINI_KEY_PREFIX):
            raise ProviderError(
                f'Invalid Gemini API key format. Key should start with "{GEMINI_KEY_PREFIX}". '
                "Get a valid key from Google AI Studio.",
                code=ErrorCode.AUTHENTICATION,
                provider=self.provider.value,
            )
        return api_key

    @override
    def _convert_request(self, prompt: str) -> Payload:
        return GooglePayload(
            model=self.provider_settings.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.provider_settings.max_tokens,
            temperature=self.provider_settings.temperature,
        )
