from __future__ import annotations
from pydantic import BaseModel, Field
from flowscope.domain.result.error import ErrorInfo


class ProviderCall(BaseModel):
    """
    Transient record of one prompt/response exchange with a provider.
    Kept on the run context for reporting; never persisted.
    """

    provider: str
    model: str
    label: str = Field(default="", description="What the call was for, e.g. 'chunk 2/5'")
    prompt_chars: int = 0
    response_chars: int = 0
    attempts: int = 1
    duration: float = Field(default=0.0, description="Seconds, including backoff sleeps")
    error: ErrorInfo | None = None

    @property
    def success(self) -> bool:
        return self.error is None
