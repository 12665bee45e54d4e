"""Tests for reporter.py — report aggregation, formatting and export."""
import json

from devtracker.reporter import Reporter

reporter = Reporter()


def test_format_duration_thresholds():
    assert reporter.format_duration(0) == "0s"
    assert reporter.format_duration(59_999) == "59s"
    assert reporter.format_duration(60_000) == "1m 0s"
    assert reporter.format_duration(200_000) == "3m 20s"
    assert reporter.format_duration(3_599_000) == "59m 59s"
    assert reporter.format_duration(3_600_000) == "1h 0m"
    assert reporter.format_duration(3_900_000) == "1h 5m"


def test_format_duration_long_pluralizes():
    assert reporter.format_duration_long(1_000) == "1 second"
    assert reporter.format_duration_long(42_000) == "42 seconds"
    assert reporter.format_duration_long(61_000) == "1 minute 1 second"
    assert reporter.format_duration_long(3_725_000) == "1 hour 2 minutes 5 seconds"


def test_negative_duration_clamps_to_zero():
    assert reporter.format_duration(-5_000) == "0s"


def _run_edits(session, project, clock):
    a = project / "a.txt"
    b = project / "src" / "b.py"
    b.parent.mkdir()

    a.write_text("x\n")
    session.handle_add(a)
    clock.advance(2_000)
    a.write_text("x\ny\n")
    session.handle_change(a)
    clock.advance(3_000)
    a.write_text("y\n")
    session.handle_change(a)

    b.write_text("1\n2\n3\n")
    session.handle_change(b)
    return a, b


def test_build_report_summary(session, project, clock):
    _run_edits(session, project, clock)

    report = reporter.build_report(session, [("py", 1), ("txt", 1)], ["rich"])
    summary = report.summary

    assert summary.total_files == 2
    assert summary.total_additions == 4
    assert summary.total_deletions == 1
    assert summary.productive_time_ms == 5_000
    assert summary.total_time == "5 seconds"
    assert summary.start_time == reporter.format_timestamp(session.clock.started_at)
    assert summary.end_time == reporter.format_timestamp(clock.now)
    assert summary.top_languages == [("py", 1), ("txt", 1)]
    assert summary.dependencies == ["rich"]


def test_build_report_file_details(session, project, clock):
    _run_edits(session, project, clock)

    report = reporter.build_report(session)
    details = {d.file: d for d in report.file_details}

    a = details["a.txt"]
    assert a.changes == 2
    assert a.total_edits == 2
    assert a.active_time_ms == 3_000
    assert a.active_time == "3s"
    assert a.average_edit_size == 1.0
    assert "src/b.py" in details or "src\\b.py" in details


def test_build_report_does_not_mutate_session(session, project, clock):
    _run_edits(session, project, clock)
    before = [(r.path, r.change_count, r.active_time_ms) for r in session.ledger.records()]
    last_activity = session.clock.last_activity_at

    reporter.build_report(session)
    reporter.build_report(session)

    assert [(r.path, r.change_count, r.active_time_ms) for r in session.ledger.records()] == before
    assert session.clock.last_activity_at == last_activity


def test_empty_session_report(session):
    report = reporter.build_report(session)

    assert report.file_details == []
    assert report.summary.total_files == 0
    assert report.summary.total_time == "0 seconds"


def test_sort_by_changes(session, project, clock):
    _run_edits(session, project, clock)
    report = reporter.build_report(session)

    ranked = reporter.sort_by_changes(report.file_details)
    assert [d.changes for d in ranked] == [2, 1]
    assert len(reporter.sort_by_changes(report.file_details, 1)) == 1


def test_save_report_writes_json(session, project, clock, tmp_path):
    _run_edits(session, project, clock)
    report = reporter.build_report(session, [("txt", 1)], ["chalk", "moment"])

    path = reporter.save_report(report, tmp_path / "out" / "dev-report.json")
    data = json.loads(path.read_text())

    assert set(data) == {"summary", "fileDetails"}
    assert data["summary"]["totalFiles"] == 2
    assert data["summary"]["topLanguages"] == [["txt", 1]]
    assert data["summary"]["dependencies"] == ["chalk", "moment"]
    detail = next(d for d in data["fileDetails"] if d["file"] == "a.txt")
    assert detail["additions"] == 1
    assert detail["deletions"] == 1
    assert detail["changes"] == 2
    assert detail["activeTime"] == "3s"
    assert detail["averageEditSize"] == 1.0
