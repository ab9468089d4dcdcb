"""
Analysis output: one AnalysisEntry per input record, plus the organization-level narrative.

Both models serialize with camelCase keys (recordName, businessDescription, organizationOverview, ...)
which is the shape downstream renderers expect. Python code uses the snake_case field names.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import TYPE_CHECKING, Literal, Any

if TYPE_CHECKING:
    from flowscope.domain.record.record import Record

# Field defaults used when no extractor produces a value
DEFAULT_DESCRIPTION = "This flow automates business processes in your organization."
DEFAULT_IMPROVEMENTS = "Consider reviewing this flow for optimization opportunities."

# Records whose chunk failed at the provider
UNAVAILABLE_DESCRIPTION = "Analysis temporarily unavailable for this flow."
UNAVAILABLE_IMPROVEMENTS = "Please retry analysis or contact administrator."

# Records the model skipped
SYNTHESIZED_DESCRIPTION = (
    "This flow automates business processes in your organization. "
    "The {category} runs when specific conditions are met and helps maintain "
    "data consistency and business rules."
)
SYNTHESIZED_IMPROVEMENTS = (
    "Consider adding error handling, implementing bulk processing for better performance, "
    "and documenting the business logic for easier maintenance."
)

EntryOrigin = Literal["parsed", "synthesized", "unavailable"]


class AnalysisEntry(BaseModel):
    """
    Analysis of a single record.
    origin tells genuine model output apart from placeholders:
    - parsed: extracted from a model response
    - synthesized: the model skipped this record; generic text derived from its category
    - unavailable: the provider call covering this record failed
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    record_name: str
    business_description: str = DEFAULT_DESCRIPTION
    improvements: str = DEFAULT_IMPROVEMENTS
    record_id: str | None = None
    origin: EntryOrigin = "parsed"

    @classmethod
    def synthesized(cls, record: Record) -> AnalysisEntry:
        category = record.category or "flow"
        return cls(
            record_name=record.name,
            record_id=record.id,
            business_description=SYNTHESIZED_DESCRIPTION.format(category=category),
            improvements=SYNTHESIZED_IMPROVEMENTS,
            origin="synthesized",
        )

    @classmethod
    def unavailable(cls, record: Record) -> AnalysisEntry:
        return cls(
            record_name=record.name,
            record_id=record.id,
            business_description=UNAVAILABLE_DESCRIPTION,
            improvements=UNAVAILABLE_IMPROVEMENTS,
            origin="unavailable",
        )

    @property
    def is_placeholder(self) -> bool:
        return self.origin != "parsed"


class AnalysisResult(BaseModel):
    """
    The complete output of a run. Built once, then handed back to the caller.
    entries is in input record order after reconciliation.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    organization_overview: str = ""
    potential_risks: str = ""
    organization_improvements: str = ""
    entries: list[AnalysisEntry] = Field(
        default_factory=list, serialization_alias="flowAnalysis"
    )

    @property
    def has_narrative(self) -> bool:
        return bool(
            self.organization_overview
            or self.potential_risks
            or self.organization_improvements
        )

    def serialize(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
