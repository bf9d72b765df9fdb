"""In-memory run history for a tuning session."""

import logging
from collections.abc import Iterator

from instruction_tuner.types import RunRecord

logger = logging.getLogger(__name__)


class RunHistory:
    """Ordered log of run records owned by one advisor session.

    Records are appended in call order and are never reordered. A record's
    suggestion is filled in by replacing it with a patched copy, so a run
    whose advisor call failed keeps ``suggested_next=None``.

    Not safe for concurrent writers: callers are expected to drive one
    session sequentially.
    """

    def __init__(self, records: list[RunRecord] | None = None):
        self._records: list[RunRecord] = list(records or [])

    def append(self, record: RunRecord) -> int:
        """Append a record and return its index."""
        self._records.append(record)
        logger.debug(f"Recorded run {len(self._records)} (score={record.score})")
        return len(self._records) - 1

    def record_suggestion(self, index: int, suggestion: str) -> RunRecord:
        """Fill in the deferred suggestion of the record at ``index``."""
        patched = self._records[index].with_suggestion(suggestion)
        self._records[index] = patched
        return patched

    def snapshot(self) -> tuple[RunRecord, ...]:
        """Return an immutable view of the records, oldest first."""
        return tuple(self._records)

    def clear(self) -> None:
        """Start a fresh session."""
        self._records = []
        logger.debug("Run history cleared")

    @property
    def latest(self) -> RunRecord | None:
        return self._records[-1] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RunRecord]:
        return iter(tuple(self._records))

    def __bool__(self) -> bool:
        return bool(self._records)
