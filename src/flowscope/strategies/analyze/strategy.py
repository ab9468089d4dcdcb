from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flowscope.core.orchestration.context import RunContext
    from flowscope.domain.result.analysis import AnalysisResult


class AnalysisStrategy(ABC):
    """
    Abstract base class for analysis strategies.
    A strategy takes a prepared run context and returns the complete result:
    one entry per record plus the organization-level narrative.
    """

    name: str

    @abstractmethod
    async def __call__(self, ctx: RunContext) -> AnalysisResult:
        """
        Execute the analysis workflow. Provider failures are absorbed into placeholders.
        """
        ...
