from __future__ import annotations
from flowscope.core.clients.openai.client import OpenAIClient
from flowscope.core.clients.mistral.payload import MistralPayload
from flowscope.core.clients.provider import ProviderId
from typing import TYPE_CHECKING, override

if TYPE_CHECKING:
    from flowscope.core.clients.payload_base import Payload


class MistralClient(OpenAIClient):
    """
    Client for Mistral AI API using the OpenAI-compatible endpoint.
    Async only.
    """

    provider = ProviderId.MISTRAL
    env_var = "MISTRAL_API_KEY"
    base_url = "https://api.mistral.ai/v1"

    @override
    def _convert_request(self, prompt: str) -> Payload:
        return MistralPayload(
            model=self.provider_settings.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=self.provider_settings.max_tokens,
            temperature=self.provider_settings.temperature,
        )
