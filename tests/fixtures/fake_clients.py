from __future__ import annotations
from collections.abc import Callable, Iterable
from typing import override

from flowscope.config import ProviderSettings
from flowscope.core.clients.client_base import Client
from flowscope.core.clients.openai.payload import OpenAIPayload
from flowscope.core.clients.provider import ProviderId
from flowscope.domain.config.analysis_options import RetryPolicy
from flowscope.domain.exceptions.exceptions import ErrorCode, ProviderError

Responder = Callable[[str], str]


class ScriptedClient(Client):
    """
    Client whose _send() replays a script instead of calling a provider.
    Script items are response strings, exceptions to raise, or callables taking the prompt.
    When the script runs out, `fallback` answers (or the test fails loudly).
    The real Client.complete retry loop runs unchanged.
    """

    provider = ProviderId.OPENAI
    env_var = "OPENAI_API_KEY"

    def __init__(
        self,
        script: Iterable[str | Exception | Responder] = (),
        fallback: Responder | None = None,
        retry: RetryPolicy | None = None,
    ):
        super().__init__(
            credential="test-key",
            provider_settings=ProviderSettings(model="fake-model"),
            retry=retry or RetryPolicy(max_attempts=4, base_delay=0.0),
        )
        self.script = list(script)
        self.fallback = fallback
        self.prompts: list[str] = []

    @property
    def sends(self) -> int:
        return len(self.prompts)

    @override
    def _convert_request(self, prompt: str) -> OpenAIPayload:
        return OpenAIPayload(model=self.model, messages=[{"role": "user", "content": prompt}])

    @override
    async def _send(self, payload: OpenAIPayload) -> str:
        prompt = payload.messages[0]["content"]
        self.prompts.append(prompt)
        if self.script:
            item = self.script.pop(0)
        elif self.fallback is not None:
            item = self.fallback
        else:
            raise AssertionError(f"Unexpected provider call #{self.sends}")

        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(prompt)
        return item


def overload_error() -> ProviderError:
    return ProviderError("Overloaded", code=ErrorCode.OVERLOAD, provider="openai", status_code=529)


def always_overloaded(prompt: str) -> str:
    raise overload_error()


def overloaded_when(predicate: Callable[[str], bool], otherwise: Responder) -> Responder:
    """
    Overload for prompts matching predicate, otherwise delegate.
    """

    def respond(prompt: str) -> str:
        if predicate(prompt):
            raise overload_error()
        return otherwise(prompt)

    return respond
