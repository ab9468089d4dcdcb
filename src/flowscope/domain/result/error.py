from __future__ import annotations
from pydantic import BaseModel, Field
from flowscope.domain.exceptions.exceptions import ErrorCode, ProviderError
import time


class ErrorInfo(BaseModel):
    """Simple, serializable error information attached to a failed provider call."""

    code: ErrorCode = Field(..., description="Categorical error code")
    message: str = Field(..., description="Human-readable error message")
    provider: str | None = Field(None, description="Provider that raised the error")
    status_code: int | None = Field(None, description="HTTP status, when known")
    attempts: int = Field(1, description="Attempts made before giving up")
    timestamp: int = Field(
        default_factory=lambda: int(time.time() * 1000),
        description="Unix timestamp in milliseconds",
    )

    model_config = {"frozen": True}

    def __str__(self) -> str:
        status = f" (HTTP {self.status_code})" if self.status_code else ""
        return f"[{self.timestamp}] {self.code.value.upper()}{status}: {self.message}"

    @classmethod
    def from_exception(cls, exc: ProviderError) -> ErrorInfo:
        return cls(
            code=exc.code,
            message=exc.message,
            provider=exc.provider,
            status_code=exc.status_code,
            attempts=exc.attempts,
        )
