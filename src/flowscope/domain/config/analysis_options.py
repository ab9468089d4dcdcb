from __future__ import annotations
from flowscope.utils.progress.verbosity import Verbosity
from pydantic import BaseModel, Field, ConfigDict, field_validator
from rich.console import Console


class RetryPolicy(BaseModel):
    """
    Bounded exponential backoff for overloaded providers.
    Attempt n (1-based) that fails with OVERLOAD waits base_delay * 2**(n-1) before attempt n+1.
    """

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=4, ge=1, description="Total attempts, first included.")
    base_delay: float = Field(default=3.0, ge=0.0, description="Seconds before the first retry.")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * 2 ** (attempt - 1)


class AnalysisOptions(BaseModel):
    """
    Runtime configuration for an analysis run.
    Controls batching, pacing, retries and UI, separate from provider inference parameters.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Strategy selection
    size_threshold: int = Field(
        default=100_000,
        description="Serialized size above which the chunked strategy is used.",
    )
    count_threshold: int = Field(
        default=15, description="Record count above which the chunked strategy is used."
    )

    # Chunk planning
    max_chunk_cost: int = Field(default=12_000, gt=0)
    max_chunk_records: int = Field(default=2, ge=1)

    # Pacing
    inter_chunk_delay: float = Field(
        default=5.0,
        ge=0.0,
        description="Seconds to wait after a successful chunk before the next one.",
    )
    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    # Aggregation
    excerpt_chars: int = Field(
        default=100, gt=0, description="Characters of each description kept in the summary."
    )

    # UI
    verbosity: Verbosity = Field(
        default=Verbosity.PROGRESS, description="Verbosity level for progress display."
    )
    console: Console | None = Field(
        default=None,
        description="Rich console for progress display. Plain stderr lines when None.",
        exclude=True,
    )

    # Dev options
    debug_payload: bool = False  # Log full prompts and responses at DEBUG

    @field_validator("verbosity", mode="before")
    @classmethod
    def coerce_verbosity(cls, v):
        if v is None:
            raise ValueError("verbosity cannot be None")
        if isinstance(v, int) and not isinstance(v, bool):
            return Verbosity(v)
        return Verbosity.from_input(v)
