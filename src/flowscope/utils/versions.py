from __future__ import annotations
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from flowscope.domain.record.record import Record

logger = logging.getLogger(__name__)


def filter_latest_versions(records: Sequence[Record]) -> list[Record]:
    """
    Keep one version per record name.
    The active version wins; without one, the most recently modified version is kept.
    Groups appear in the order their names are first seen.

    last_modified values are ISO-8601 strings from the same source, so they order
    correctly as strings. Missing timestamps sort oldest.
    """
    groups: dict[str, list[Record]] = {}
    for record in records:
        groups.setdefault(record.name, []).append(record)

    latest: list[Record] = []
    for name, versions in groups.items():
        active = [v for v in versions if v.is_active]
        if active:
            chosen = active[0]
        else:
            chosen = max(versions, key=lambda v: v.last_modified or "")
        if len(versions) > 1:
            logger.debug(f"'{name}': kept version {chosen.id} of {len(versions)}.")
        latest.append(chosen)
    return latest
