"""
Reconciler: partial parsed entries + input records -> exactly one entry per record.

Matching runs as three global passes, strictest first, so a loose match can never take an
entry that a stricter pass would have given to another record:
1. exact name, case-insensitive
2. normalized name (underscores / hyphens / whitespace runs treated alike)
3. substring, in either direction

Each entry is claimed at most once. A claimed entry is renamed to the canonical record name.
Records left unmatched get a synthesized entry; entries left unclaimed are dropped.
"""

from __future__ import annotations
from flowscope.core.parser.parser import normalize_name
from flowscope.domain.result.analysis import AnalysisEntry
from collections.abc import Callable
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.domain.record.record import Record

logger = logging.getLogger(__name__)


def _exact(entry_name: str, record_name: str) -> bool:
    return entry_name.strip().lower() == record_name.strip().lower()


def _normalized(entry_name: str, record_name: str) -> bool:
    return normalize_name(entry_name) == normalize_name(record_name)


def _substring(entry_name: str, record_name: str) -> bool:
    entry_norm = normalize_name(entry_name)
    record_norm = normalize_name(record_name)
    if not entry_norm or not record_norm:
        return False
    return entry_norm in record_norm or record_norm in entry_norm


MATCH_PASSES: list[tuple[str, Callable[[str, str], bool]]] = [
    ("exact", _exact),
    ("normalized", _normalized),
    ("substring", _substring),
]


def reconcile(
    entries: Sequence[AnalysisEntry], records: Sequence[Record]
) -> list[AnalysisEntry]:
    """
    Return one entry per record, in record order.
    Idempotent: reconciling the output again against the same records returns it unchanged.
    """
    assigned: dict[int, AnalysisEntry] = {}
    claimed: set[int] = set()

    for pass_name, matches in MATCH_PASSES:
        for record_index, record in enumerate(records):
            if record_index in assigned:
                continue
            # An entry already tied to this record by id wins regardless of its name
            for entry_index, entry in enumerate(entries):
                if entry_index in claimed:
                    continue
                if entry.record_id is not None and entry.record_id != record.id:
                    continue
                if entry.record_id == record.id or matches(entry.record_name, record.name):
                    if pass_name != "exact":
                        logger.debug(
                            f"Matched entry '{entry.record_name}' to '{record.name}' ({pass_name})."
                        )
                    assigned[record_index] = entry.model_copy(
                        update={"record_name": record.name, "record_id": record.id}
                    )
                    claimed.add(entry_index)
                    break

    result: list[AnalysisEntry] = []
    for record_index, record in enumerate(records):
        entry = assigned.get(record_index)
        if entry is None:
            logger.warning(f"No analysis found for '{record.name}'; using a generic description.")
            entry = AnalysisEntry.synthesized(record)
        result.append(entry)

    for entry_index, entry in enumerate(entries):
        if entry_index not in claimed:
            logger.warning(f"Dropping analysis for unknown record '{entry.record_name}'.")

    return result
