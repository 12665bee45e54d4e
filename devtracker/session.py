"""Tracking session: session clock and the per-event update pipeline"""

import os
import threading
import time
from pathlib import Path
from typing import Callable, Optional, Union

from .changes import quantify
from .errors import SessionClosedError, SnapshotError, StartupError
from .ledger import IDLE_THRESHOLD_MS, ActivityLedger
from .models import EventResult, FileRecord
from .snapshot_store import SnapshotStore


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


def read_text(path: str) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


class SessionClock:
    """
    Session start, last activity, and productive time

    Productive time discounts a single idle window: everything beyond one
    idle threshold of elapsed time is treated as inactive. This is coarser
    than the per-file active time, which skips every long gap between edits.
    """

    def __init__(self, started_at: int, idle_threshold_ms: int = IDLE_THRESHOLD_MS):
        self.started_at = started_at
        self.last_activity_at = started_at
        self.idle_threshold_ms = idle_threshold_ms

    def record_activity(self, now: int):
        self.last_activity_at = now

    def total_ms(self) -> int:
        # A clock set back before the session start counts as no elapsed time
        return max(0, self.last_activity_at - self.started_at)

    def productive_time_ms(self) -> int:
        total = self.total_ms()
        inactive = max(0, total - self.idle_threshold_ms)
        return total - inactive


class TrackingSession:
    """Owns the ledger, clock and snapshot store for one tracking run"""

    def __init__(
        self,
        project_path: Union[str, Path],
        snapshot_dir_name: str = '.devtracker',
        idle_threshold_ms: int = IDLE_THRESHOLD_MS,
        clock: Optional[Callable[[], int]] = None,
        reader: Optional[Callable[[str], str]] = None
    ):
        """
        Create a tracking session

        Args:
            project_path: Directory being tracked
            snapshot_dir_name: Name of the snapshot directory inside the project
            idle_threshold_ms: Gap length separating active editing from time away
            clock: Callable returning epoch milliseconds (defaults to wall clock)
            reader: Callable returning the current content of a file
        """
        self.project_path = Path(project_path).resolve()
        self.idle_threshold_ms = idle_threshold_ms
        self._clock = clock or now_ms
        self._read = reader or read_text

        self.store = SnapshotStore(self.project_path / snapshot_dir_name)
        self.ledger = ActivityLedger(idle_threshold_ms)
        self.clock = SessionClock(self._clock(), idle_threshold_ms)

        self.started = False
        self.closed = False
        self._lock = threading.Lock()

    def start(self):
        """Validate the project path and create the snapshot directory"""
        if not self.project_path.is_dir():
            raise StartupError(f"Project path is not a directory: {self.project_path}")

        self.store.ensure_directory()
        self.started = True

    def close(self):
        """End the session; waits for any event currently being processed"""
        with self._lock:
            self.closed = True

    def normalize(self, path: Union[str, Path]) -> str:
        """Absolute, normalized key for a path (relative paths are project-relative)"""
        path = Path(path)
        if not path.is_absolute():
            path = self.project_path / path
        return str(path.resolve())

    def relative_path(self, key: str) -> str:
        return os.path.relpath(key, self.project_path)

    def handle_event(self, kind: str, path: Union[str, Path]) -> EventResult:
        """Dispatch a watcher event of kind 'add', 'change' or 'delete'"""
        handlers = {
            'add': self.handle_add,
            'change': self.handle_change,
            'delete': self.handle_delete,
        }
        handler = handlers.get(kind)
        if handler is None:
            raise ValueError(f"Unknown event kind: {kind}")
        return handler(path)

    def handle_add(self, path: Union[str, Path]) -> EventResult:
        """
        Seed the snapshot baseline for a new file

        No FileRecord is created here; records only start at the first change.
        """
        key = self.normalize(path)
        result = EventResult('add', key)

        # Clock capture, read and baseline write happen under one lock
        with self._lock:
            if self._rejected(result):
                return result

            now = self._clock()
            self.clock.record_activity(now)
            try:
                content = self._read(key)
            except (OSError, UnicodeDecodeError) as e:
                result.error = e
                return result

            try:
                self.store.put(key, content)
            except SnapshotError as e:
                result.warnings.append(str(e))

        return result

    def handle_change(self, path: Union[str, Path]) -> EventResult:
        """Diff against the baseline, update the ledger, then store the new baseline"""
        key = self.normalize(path)
        result = EventResult('change', key)

        with self._lock:
            if self._rejected(result):
                return result

            now = self._clock()
            self.clock.record_activity(now)
            try:
                content = self._read(key)
            except (OSError, UnicodeDecodeError) as e:
                result.error = e
                return result

            try:
                baseline = self.store.get(key)
            except SnapshotError as e:
                baseline = None
                result.warnings.append(str(e))

            delta = quantify(baseline, content)
            result.delta = delta
            result.record = self.ledger.record_change(key, delta, now)

            try:
                self.store.put(key, content)
            except SnapshotError as e:
                result.warnings.append(str(e))

        return result

    def handle_delete(self, path: Union[str, Path]) -> EventResult:
        """Drop the record and the baseline of a deleted file"""
        key = self.normalize(path)
        result = EventResult('delete', key)

        with self._lock:
            if self._rejected(result):
                return result

            now = self._clock()
            result.record = self.ledger.remove(key)
            self.clock.record_activity(now)
            try:
                self.store.discard(key)
            except SnapshotError as e:
                result.warnings.append(str(e))

        return result

    def is_known(self, path: Union[str, Path]) -> bool:
        """True if path has a record or a snapshot baseline"""
        key = self.normalize(path)
        with self._lock:
            return key in self.ledger or self.store.has(key)

    def get_record(self, path: Union[str, Path]) -> Optional[FileRecord]:
        return self.ledger.get(self.normalize(path))

    def _rejected(self, result: EventResult) -> bool:
        if self.closed:
            result.error = SessionClosedError("Session is closed")
            return True
        return False
