"""
Base class for clients; openai, anthropic, etc. inherit from this class.

Subclasses convert a prompt into their own payload model and make exactly one SDK call in
_send(). The retry loop lives here so every provider gets the same overload handling:
only ErrorCode.OVERLOAD is retried, with bounded exponential backoff. Every other failure
is raised to the caller on the first attempt.
"""

from __future__ import annotations
from flowscope.config import settings
from flowscope.domain.config.analysis_options import RetryPolicy
from flowscope.domain.exceptions.exceptions import (
    ErrorCode,
    ProviderError,
    error_code_from_status,
)
from flowscope.domain.result.error import ErrorInfo
from flowscope.domain.result.provider_call import ProviderCall
from typing import TYPE_CHECKING, ClassVar, override
import asyncio
import logging
import os
import time

if TYPE_CHECKING:
    from flowscope.config import ProviderSettings
    from flowscope.core.clients.payload_base import Payload
    from flowscope.core.clients.provider import ProviderId


logger = logging.getLogger(__name__)


class Client:
    provider: ClassVar[ProviderId]
    env_var: ClassVar[str]

    def __init__(
        self,
        credential: str | None = None,
        provider_settings: ProviderSettings | None = None,
        retry: RetryPolicy | None = None,
    ):
        self.provider_settings: ProviderSettings = (
            provider_settings or settings.provider_settings(self.provider.value)
        )
        self.retry: RetryPolicy = retry or RetryPolicy()
        self._api_key: str = self._get_api_key(credential)
        self.calls: list[ProviderCall] = []

    @property
    def model(self) -> str:
        return self.provider_settings.model

    def _get_api_key(self, credential: str | None) -> str:
        """
        Explicit credential first, then the provider's environment variable.
        """
        api_key = credential or os.getenv(self.env_var)
        if not api_key:
            raise ProviderError(
                f"No credential supplied and {self.env_var} is not set.",
                code=ErrorCode.AUTHENTICATION,
                provider=self.provider.value,
            )
        return api_key

    def _convert_request(self, prompt: str) -> Payload:
        raise NotImplementedError("Should be implemented in subclass.")

    async def _send(self, payload: Payload) -> str:
        """
        One SDK call. Should raise ProviderError; complete() wraps anything else as UNKNOWN.
        """
        raise NotImplementedError("Should be implemented in subclass.")

    def _error(
        self, message: str, status_code: int | None = None, code: ErrorCode | None = None
    ) -> ProviderError:
        return ProviderError(
            message,
            code=code or error_code_from_status(status_code),
            provider=self.provider.value,
            status_code=status_code,
        )

    def _unexpected(self, context: str, exc: Exception) -> ProviderError:
        """
        Any failure that is not already a ProviderError (payload validation, SDK response
        validation, bugs in a responder) becomes UNKNOWN so callers can isolate it.
        """
        logger.error(f"{self.provider.value}: {context}: {type(exc).__name__}: {exc}")
        return self._error(f"{context}: {type(exc).__name__}: {exc}", code=ErrorCode.UNKNOWN)

    async def complete(self, prompt: str, label: str = "") -> str:
        """
        Send one prompt and return the response text.
        Overloaded providers are retried up to retry.max_attempts total attempts.
        """
        start_time = time.time()
        try:
            payload = self._convert_request(prompt)
        except Exception as e:
            error = self._unexpected("Could not build request", e)
            self._record(label, prompt, "", 1, start_time, error)
            raise error from e
        logger.debug(
            f"{self.provider.value}/{self.model} {label or 'request'}: {len(prompt)} chars"
        )
        attempt = 0
        while True:
            attempt += 1
            try:
                try:
                    text = await self._send(payload)
                except ProviderError:
                    raise
                except Exception as e:
                    raise self._unexpected("Request failed", e) from e
            except ProviderError as e:
                e.attempts = attempt
                if e.retryable and attempt < self.retry.max_attempts:
                    delay = self.retry.delay_for(attempt)
                    logger.warning(
                        f"{self.provider.value} overloaded, retrying in {delay:.1f}s "
                        f"(attempt {attempt}/{self.retry.max_attempts})"
                    )
                    await asyncio.sleep(delay)
                    continue
                self._record(label, prompt, "", attempt, start_time, e)
                raise
            self._record(label, prompt, text, attempt, start_time, None)
            return text

    def _record(
        self,
        label: str,
        prompt: str,
        text: str,
        attempts: int,
        start_time: float,
        error: ProviderError | None,
    ) -> None:
        self.calls.append(
            ProviderCall(
                provider=self.provider.value,
                model=self.model,
                label=label,
                prompt_chars=len(prompt),
                response_chars=len(text),
                attempts=attempts,
                duration=time.time() - start_time,
                error=ErrorInfo.from_exception(error) if error else None,
            )
        )

    @override
    def __repr__(self):
        return f"{self.__class__.__name__}(provider={self.provider.value!r}, model={self.model!r})"
