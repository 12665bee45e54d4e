"""Data models for file activity records and session reports"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class ChangeDelta:
    """Line-level size of a single change"""
    added: int = 0
    removed: int = 0

    @property
    def total(self) -> int:
        return self.added + self.removed


@dataclass(frozen=True)
class HistoryEntry:
    """One change event applied to a file record"""
    timestamp: int  # epoch milliseconds
    added: int
    removed: int


@dataclass
class FileRecord:
    """Cumulative statistics for one tracked path"""
    path: str
    additions: int = 0
    deletions: int = 0
    change_count: int = 0
    first_modified: int = 0
    last_modified: int = 0
    active_time_ms: int = 0
    history: List[HistoryEntry] = field(default_factory=list)

    @property
    def total_edits(self) -> int:
        return self.change_count

    @property
    def average_edit_size(self) -> float:
        """Average lines touched per change event"""
        return (self.additions + self.deletions) / max(1, self.change_count)

    @property
    def last_edit_at(self) -> Optional[int]:
        if not self.history:
            return None
        return self.history[-1].timestamp


@dataclass
class EventResult:
    """Outcome of processing one watcher event"""
    kind: str  # 'add', 'change', 'delete'
    path: str
    record: Optional[FileRecord] = None
    delta: Optional[ChangeDelta] = None
    error: Optional[Exception] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class FileDetail:
    """Per-file entry of the session report"""
    file: str
    additions: int
    deletions: int
    changes: int
    first_modified: str
    last_modified: str
    active_time: str
    active_time_ms: int
    total_edits: int
    average_edit_size: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': self.file,
            'additions': self.additions,
            'deletions': self.deletions,
            'changes': self.changes,
            'firstModified': self.first_modified,
            'lastModified': self.last_modified,
            'activeTime': self.active_time,
            'activeTimeMs': self.active_time_ms,
            'totalEdits': self.total_edits,
            'averageEditSize': round(self.average_edit_size, 2),
        }


@dataclass
class ReportSummary:
    """Session-wide totals"""
    total_time: str
    productive_time_ms: int
    start_time: str
    end_time: str
    total_files: int
    total_additions: int
    total_deletions: int
    top_languages: List[Tuple[str, int]]
    dependencies: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalTime': self.total_time,
            'productiveTimeMs': self.productive_time_ms,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'totalFiles': self.total_files,
            'totalAdditions': self.total_additions,
            'totalDeletions': self.total_deletions,
            'topLanguages': [[ext, count] for ext, count in self.top_languages],
            'dependencies': list(self.dependencies),
        }


@dataclass
class Report:
    """Final session report"""
    summary: ReportSummary
    file_details: List[FileDetail]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'summary': self.summary.to_dict(),
            'fileDetails': [detail.to_dict() for detail in self.file_details],
        }
