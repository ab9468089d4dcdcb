"""
Chunk planning: partition records into provider-sized groups.

Records are sorted by cost (ascending, stable) and packed greedily. A chunk closes when the
next record would push it over max_cost or when it already holds max_records. A record that
alone exceeds max_cost becomes a chunk of its own; it is never split or dropped.
"""

from __future__ import annotations
from dataclasses import dataclass
from flowscope.core.batching.size import estimate_cost
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.domain.record.record import Record

logger = logging.getLogger(__name__)

DEFAULT_MAX_COST = 12_000
DEFAULT_MAX_RECORDS = 2


@dataclass(frozen=True)
class Chunk:
    records: tuple[Record, ...]
    cost: int
    index: int

    def __post_init__(self):
        if not self.records:
            raise ValueError("Chunk must contain at least one record.")

    @property
    def names(self) -> list[str]:
        return [record.name for record in self.records]

    def __len__(self) -> int:
        return len(self.records)


def plan_chunks(
    records: Sequence[Record],
    max_cost: int = DEFAULT_MAX_COST,
    max_records: int = DEFAULT_MAX_RECORDS,
) -> list[Chunk]:
    """
    Partition records into chunks. Every record lands in exactly one chunk.
    Output order follows ascending record cost, not input order.
    """
    if max_records < 1:
        raise ValueError("max_records must be at least 1.")

    costed = sorted(
        ((estimate_cost(record), record) for record in records),
        key=lambda pair: pair[0],
    )

    chunks: list[Chunk] = []
    current: list[Record] = []
    current_cost = 0

    def flush():
        nonlocal current, current_cost
        if current:
            chunks.append(Chunk(records=tuple(current), cost=current_cost, index=len(chunks)))
        current = []
        current_cost = 0

    for cost, record in costed:
        if current and (current_cost + cost > max_cost or len(current) >= max_records):
            flush()
        if cost > max_cost:
            logger.warning(
                f"Record '{record.name}' exceeds chunk budget ({cost} > {max_cost}); sending alone."
            )
        current.append(record)
        current_cost += cost

    flush()
    logger.debug(f"Planned {len(chunks)} chunks for {len(records)} records.")
    return chunks
