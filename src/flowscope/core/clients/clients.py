"""
Provider dispatch. The set of providers is closed; an unknown id is a ValueError.
"""

from __future__ import annotations
from flowscope.core.clients.provider import ProviderId
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowscope.config import ProviderSettings
    from flowscope.core.clients.client_base import Client
    from flowscope.domain.config.analysis_options import RetryPolicy


def get_client(
    provider: ProviderId | str,
    credential: str | None = None,
    provider_settings: ProviderSettings | None = None,
    retry: RetryPolicy | None = None,
) -> Client:
    """
    Build the client for a provider. Raises ProviderError(AUTHENTICATION) when no usable
    credential is available.
    """
    provider = ProviderId.from_input(provider)
    match provider:
        case ProviderId.OPENAI:
            from flowscope.core.clients.openai.client import OpenAIClient

            client_class = OpenAIClient
        case ProviderId.CLAUDE:
            from flowscope.core.clients.anthropic.client import AnthropicClient

            client_class = AnthropicClient
        case ProviderId.MISTRAL:
            from flowscope.core.clients.mistral.client import MistralClient

            client_class = MistralClient
        case ProviderId.GEMINI:
            from flowscope.core.clients.google.client import GoogleClient

            client_class = GoogleClient
    return client_class(
        credential=credential, provider_settings=provider_settings, retry=retry
    )


async def complete(provider: ProviderId | str, credential: str | None, prompt: str) -> str:
    """
    One-off completion with default settings and retry policy.
    """
    client = get_client(provider, credential)
    return await client.complete(prompt)
