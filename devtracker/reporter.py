"""Session report generation and export"""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .models import FileDetail, FileRecord, Report, ReportSummary


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


class Reporter:
    """Builds the end-of-session report from a tracking session"""

    def format_duration(self, ms: int) -> str:
        """Short duration: '42s', '3m 20s' or '1h 5m'"""
        seconds = max(0, ms) // 1000

        if seconds < 60:
            return f"{seconds}s"
        if seconds < 3600:
            return f"{seconds // 60}m {seconds % 60}s"
        return f"{seconds // 3600}h {(seconds % 3600) // 60}m"

    def format_duration_long(self, ms: int) -> str:
        """Spelled-out duration, e.g. '1 hour 2 minutes 5 seconds'"""
        seconds = max(0, ms) // 1000

        if seconds < 60:
            return _plural(seconds, 'second')
        if seconds < 3600:
            return f"{_plural(seconds // 60, 'minute')} {_plural(seconds % 60, 'second')}"

        hours = seconds // 3600
        minutes = (seconds % 3600) // 60
        return f"{_plural(hours, 'hour')} {_plural(minutes, 'minute')} {_plural(seconds % 60, 'second')}"

    def format_timestamp(self, ms: int) -> str:
        return datetime.fromtimestamp(ms / 1000).strftime('%Y-%m-%d %H:%M:%S')

    def file_detail(self, record: FileRecord, relative_path: str) -> FileDetail:
        """Report entry for one file record"""
        return FileDetail(
            file=relative_path,
            additions=record.additions,
            deletions=record.deletions,
            changes=record.change_count,
            first_modified=self.format_timestamp(record.first_modified),
            last_modified=self.format_timestamp(record.last_modified),
            active_time=self.format_duration(record.active_time_ms),
            active_time_ms=record.active_time_ms,
            total_edits=record.total_edits,
            average_edit_size=record.average_edit_size,
        )

    def build_report(
        self,
        session,
        language_stats: Sequence[Tuple[str, int]] = (),
        dependencies: Sequence[str] = ()
    ) -> Report:
        """
        Build the report for a tracking session without modifying it

        Args:
            session: TrackingSession to summarize
            language_stats: Top (extension, file count) pairs
            dependencies: Declared dependency names

        Returns:
            Report with summary totals and one detail per tracked file
        """
        records = session.ledger.records()
        clock = session.clock
        productive_ms = clock.productive_time_ms()

        summary = ReportSummary(
            total_time=self.format_duration_long(productive_ms),
            productive_time_ms=productive_ms,
            start_time=self.format_timestamp(clock.started_at),
            end_time=self.format_timestamp(clock.last_activity_at),
            total_files=len(records),
            total_additions=sum(r.additions for r in records),
            total_deletions=sum(r.deletions for r in records),
            top_languages=[(ext, count) for ext, count in language_stats],
            dependencies=list(dependencies),
        )

        details = [self.file_detail(r, session.relative_path(r.path)) for r in records]
        return Report(summary=summary, file_details=details)

    def sort_by_changes(self, details: List[FileDetail], limit: Optional[int] = None) -> List[FileDetail]:
        """Most changed files first"""
        ranked = sorted(details, key=lambda d: d.changes, reverse=True)
        return ranked[:limit] if limit is not None else ranked

    def save_report(self, report: Report, output_path: Union[str, Path]) -> Path:
        """
        Write the report as JSON

        Returns:
            Absolute path of the written file
        """
        path = Path(output_path)
        if path.parent != Path('.'):
            path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2)

        return path.resolve()


# Global reporter instance
reporter = Reporter()
