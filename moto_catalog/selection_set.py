from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Tuple

from .models import Record

logger = logging.getLogger("motocat.compare")

MAX_COMPARE = 3


class SelectionSet:
    """Bounded, insertion-ordered set of record ids picked for comparison."""

    def __init__(self, ids: Iterable[str] = (), limit: int = MAX_COMPARE) -> None:
        self._limit = limit
        self._ids: List[str] = []
        self.replace(ids)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(self._ids)

    @property
    def limit(self) -> int:
        return self._limit

    def __len__(self) -> int:
        return len(self._ids)

    def __bool__(self) -> bool:
        return bool(self._ids)

    def __iter__(self):
        return iter(tuple(self._ids))

    def contains(self, record_id: str) -> bool:
        return record_id in self._ids

    __contains__ = contains

    def is_full(self) -> bool:
        return len(self._ids) >= self._limit

    def toggle(self, record_id: str) -> bool:
        """Purpose: Add or remove an id with a silent soft cap.
        Inputs/Outputs: Input is a record id; output is True if membership changed.
        Side Effects / State: Removes a member, or appends a new id at the end
            while below the cap. At the cap a new id is ignored.
        Testing Notes: Toggling A, B, C, D from empty leaves (A, B, C).
        """
        if record_id in self._ids:
            self._ids.remove(record_id)
            return True
        if self.is_full():
            logger.debug("compare rejected id=%s size=%d", record_id, len(self._ids))
            return False
        self._ids.append(record_id)
        return True

    def replace(self, ids: Iterable[str]) -> None:
        """Replace all members, keeping first-seen order, dropping duplicates and
        anything past the cap."""
        fresh: List[str] = []
        for record_id in ids:
            if record_id in fresh:
                continue
            if len(fresh) >= self._limit:
                break
            fresh.append(record_id)
        self._ids = fresh

    def clear(self) -> None:
        self._ids = []

    def resolve(self, catalog: Mapping[str, Record]) -> List[Record]:
        """Bind members to catalog records for rendering; unknown ids are skipped."""
        records: List[Record] = []
        for record_id in self._ids:
            record = catalog.get(record_id)
            if record is None:
                logger.warning("compare id=%s missing from catalog", record_id)
                continue
            records.append(record)
        return records
