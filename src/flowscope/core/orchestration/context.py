"""
Run-scoped state. One RunContext per analysis run; nothing is shared between runs.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from flowscope.config import settings
from flowscope.core.clients.clients import get_client
from flowscope.core.clients.provider import ProviderId
from flowscope.utils.progress.handlers import get_display_handler
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowscope.core.clients.client_base import Client
    from flowscope.domain.config.analysis_options import AnalysisOptions
    from flowscope.domain.record.record import RecordSet
    from flowscope.domain.result.analysis import AnalysisEntry, AnalysisResult
    from flowscope.domain.result.provider_call import ProviderCall
    from flowscope.utils.progress.protocol import DisplayHandler


@dataclass
class RunContext:
    record_set: RecordSet
    client: Client
    options: AnalysisOptions
    display: DisplayHandler
    entries: list[AnalysisEntry] = field(default_factory=list)
    result: AnalysisResult | None = None

    @classmethod
    def create(
        cls,
        record_set: RecordSet,
        provider: ProviderId | str | None = None,
        credential: str | None = None,
        options: AnalysisOptions | None = None,
        client: Client | None = None,
    ) -> RunContext:
        """
        Build the context for one run. Client construction errors (missing or malformed
        credentials, unknown provider) surface here, before any request is made.
        """
        options = options or settings.default_options()
        if client is None:
            provider = ProviderId.from_input(provider or settings.default_provider)
            client = get_client(provider, credential, retry=options.retry)
        return cls(
            record_set=record_set,
            client=client,
            options=options,
            display=get_display_handler(options.console),
        )

    @property
    def calls(self) -> list[ProviderCall]:
        return self.client.calls

    @property
    def completed(self) -> bool:
        return self.result is not None
