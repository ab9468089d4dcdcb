"""
Input records: one automation definition each (e.g. a Salesforce Flow), grouped into a RecordSet.

Records accept both our own field names and the raw field names used by the source
platform's metadata API (Id, MasterLabel, FullName, ProcessType, Metadata, ...), so the
retrieval layer can hand over its payload untouched.
"""

from __future__ import annotations
from collections import Counter
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from typing import Any

# Keys that may carry the display name, in order of preference
_NAME_KEYS = ("name", "MasterLabel", "FullName", "label")


class Record(BaseModel):
    """
    A single automation definition. Immutable for the lifetime of a run.
    Unknown keys are preserved so that serialize() reproduces the source data.
    """

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "Id"))
    name: str = Field(validation_alias=AliasChoices(*_NAME_KEYS))
    category: str | None = Field(
        default=None, validation_alias=AliasChoices("category", "type", "ProcessType")
    )
    status: str | None = Field(default=None, validation_alias=AliasChoices("status", "Status"))
    last_modified: str | None = Field(
        default=None,
        validation_alias=AliasChoices("last_modified", "lastModified", "LastModifiedDate"),
    )
    is_active: bool = Field(
        default=False, validation_alias=AliasChoices("is_active", "isActive", "IsActive")
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict, validation_alias=AliasChoices("metadata", "Metadata")
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_name_keys(cls, data: Any) -> Any:
        # MasterLabel may be present but blank; fall through to FullName in that case
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if not (k in _NAME_KEYS and not v)}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def _none_metadata(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def trigger_type(self) -> str | None:
        """
        Trigger type declared in the record body, if any.
        """
        for key in ("start", "trigger"):
            block = self.metadata.get(key)
            if isinstance(block, dict):
                trigger = block.get("triggerType") or block.get("type")
                if trigger:
                    return str(trigger)
        return None

    @property
    def element_kinds(self) -> list[str]:
        """
        Names of the metadata keys that hold a non-empty list of elements
        (recordUpdates, decisions, actionCalls, ...).
        """
        return [k for k, v in self.metadata.items() if isinstance(v, list) and v]

    def serialize(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class RecordSetMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    source_alias: str | None = Field(
        default=None,
        validation_alias=AliasChoices("source_alias", "sourceAlias", "orgAlias", "alias"),
    )
    total: int | None = Field(
        default=None, validation_alias=AliasChoices("total", "totalFlows", "count")
    )


class RecordSet(BaseModel):
    """
    An ordered sequence of Records plus metadata about where they came from.
    Identifiers are unique within a set.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    records: list[Record] = Field(
        default_factory=list, validation_alias=AliasChoices("records", "flows")
    )
    metadata: RecordSetMetadata = Field(default_factory=RecordSetMetadata)

    @field_validator("metadata", mode="before")
    @classmethod
    def _none_metadata(cls, v: Any) -> Any:
        return {} if v is None else v

    @model_validator(mode="after")
    def _unique_ids(self) -> RecordSet:
        counts = Counter(record.id for record in self.records)
        duplicates = sorted(record_id for record_id, n in counts.items() if n > 1)
        if duplicates:
            raise ValueError(f"Duplicate record ids in record set: {', '.join(duplicates)}")
        return self

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def names(self) -> list[str]:
        return [record.name for record in self.records]

    @property
    def source_alias(self) -> str:
        return self.metadata.source_alias or "Unknown"

    def subset(self, records: list[Record] | tuple[Record, ...]) -> RecordSet:
        """
        Same metadata, different records. Used to give each chunk its own payload.
        """
        return RecordSet(records=list(records), metadata=self.metadata)

    def serialize(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.model_dump(mode="json", exclude_none=True),
            "records": [record.serialize() for record in self.records],
        }

    def __len__(self) -> int:
        return len(self.records)
