"""
Size estimation for prompt payloads.

Cost is the length of the compact JSON serialization of a value. This is a proxy for the
token count the provider will see, and the only unit the batching layer works in.
"""

from __future__ import annotations
from pydantic import BaseModel
from typing import Any
import json


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        serialize = getattr(value, "serialize", None)
        if callable(serialize):
            return serialize()
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def compact_json(value: Any) -> str:
    """
    Compact JSON text; also what gets embedded in prompts, so cost matches payload.
    """
    return json.dumps(
        _to_jsonable(value),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def estimate_cost(value: Any) -> int:
    """
    Length of the compact JSON serialization of value.
    Deterministic: equal values always have equal cost.
    """
    return len(compact_json(value))
