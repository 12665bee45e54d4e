"""Activity ledger: per-file edit statistics and active time"""

import threading
from dataclasses import replace
from typing import Dict, Iterator, List, Optional

from .models import ChangeDelta, FileRecord, HistoryEntry


IDLE_THRESHOLD_MS = 5 * 60 * 1000


class ActivityLedger:
    """
    Maps each tracked path to its cumulative FileRecord

    A record is created on the first change event for a path and dropped when
    the file is deleted. Gaps between consecutive edits shorter than the idle
    threshold count as active editing time; longer gaps count as time away.
    """

    def __init__(self, idle_threshold_ms: int = IDLE_THRESHOLD_MS):
        self.idle_threshold_ms = idle_threshold_ms
        self._records: Dict[str, FileRecord] = {}
        self._lock = threading.RLock()

    def record_change(self, path: str, delta: ChangeDelta, now_ms: int) -> FileRecord:
        """
        Apply one change event to the record for path

        Args:
            path: Normalized path of the changed file
            delta: Lines added/removed by this change
            now_ms: Event processing time in epoch milliseconds

        Returns:
            The committed FileRecord
        """
        with self._lock:
            current = self._records.get(path)

            if current is None:
                entry = HistoryEntry(now_ms, delta.added, delta.removed)
                updated = FileRecord(
                    path=path,
                    additions=delta.added,
                    deletions=delta.removed,
                    change_count=1,
                    first_modified=now_ms,
                    last_modified=now_ms,
                    active_time_ms=0,
                    history=[entry],
                )
            else:
                # A clock stepping backwards yields a zero gap, never a negative one
                previous = current.last_edit_at
                timestamp = max(now_ms, previous)
                gap = timestamp - previous

                active = current.active_time_ms
                if gap < self.idle_threshold_ms:
                    active += gap

                entry = HistoryEntry(timestamp, delta.added, delta.removed)
                updated = replace(
                    current,
                    additions=current.additions + delta.added,
                    deletions=current.deletions + delta.removed,
                    change_count=current.change_count + 1,
                    last_modified=timestamp,
                    active_time_ms=active,
                    history=current.history + [entry],
                )

            self._records[path] = updated
            return updated

    def remove(self, path: str) -> Optional[FileRecord]:
        """Stop tracking path; returns the dropped record if there was one"""
        with self._lock:
            return self._records.pop(path, None)

    def get(self, path: str) -> Optional[FileRecord]:
        with self._lock:
            return self._records.get(path)

    def records(self) -> List[FileRecord]:
        """Snapshot of all current records"""
        with self._lock:
            return list(self._records.values())

    def total_additions(self) -> int:
        return sum(record.additions for record in self.records())

    def total_deletions(self) -> int:
        return sum(record.deletions for record in self.records())

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self.records())
