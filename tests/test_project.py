"""Tests for project.py — language counts and manifest reading."""
import json

from devtracker.project import iter_project_files, language_stats, read_dependencies


def _touch(root, *names):
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")


def test_language_stats_top_n(tmp_path):
    _touch(tmp_path, "a.py", "b.py", "c.py", "d.js", "e.js", "f.md", "g.txt", "Makefile")

    assert language_stats(tmp_path, top_n=2) == [("py", 3), ("js", 2)]


def test_language_stats_skips_ignored_and_hidden(tmp_path):
    _touch(tmp_path, "a.py", "node_modules/x.js", "node_modules/y.js", ".devtracker/snap.py", ".env.py")

    stats = language_stats(tmp_path, ignore=["node_modules", ".devtracker"])
    assert stats == [("py", 1)]


def test_iter_project_files_can_include_hidden(tmp_path):
    _touch(tmp_path, "a.py", ".eslintrc", ".git/config")

    names = {p.name for p in iter_project_files(tmp_path, ignore=[".git"], skip_hidden=False)}
    assert names == {"a.py", ".eslintrc"}


def test_read_dependencies_package_json(tmp_path):
    (tmp_path / "package.json").write_text(json.dumps({
        "dependencies": {"chalk": "^4", "moment": "^2"},
        "devDependencies": {"jest": "^29", "chalk": "^4"},
    }))

    assert read_dependencies(tmp_path) == ["chalk", "jest", "moment"]


def test_read_dependencies_requirements(tmp_path):
    (tmp_path / "requirements.txt").write_text(
        "# runtime\nrich>=13\npython-dotenv==1.0.0  # env\n\n-r dev.txt\nwatchdog[watchmedo]\n"
    )

    assert read_dependencies(tmp_path) == ["python-dotenv", "rich", "watchdog"]


def test_malformed_manifest_yields_empty_list(tmp_path):
    (tmp_path / "package.json").write_text("{not json")

    assert read_dependencies(tmp_path) == []


def test_missing_manifests(tmp_path):
    assert read_dependencies(tmp_path) == []
