"""Tests for the ``linkchecker`` command line."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from linkchecker_cli.main import app

runner = CliRunner()


@pytest.fixture
def site(tmp_path):
    """A small build directory with one broken local link."""
    (tmp_path / "docs").mkdir()
    (tmp_path / "index.html").write_text(
        '<a href="docs/">Docs</a><a href="missing.html">Gone</a>', encoding="utf-8"
    )
    (tmp_path / "docs" / "index.html").write_text('<a href="../">Home</a>', encoding="utf-8")
    return tmp_path


def test_broken_links_exit_one(site) -> None:
    result = runner.invoke(app, ["check", str(site)])
    assert result.exit_code == 1
    assert "Broken links found:\n\nindex.html:\n  missing.html (not found)" in result.stdout


def test_ignore_flag_clears_failure(site) -> None:
    result = runner.invoke(app, ["check", str(site), "--ignore", "^missing"])
    assert result.exit_code == 0
    assert "No broken links found." in result.stdout
    assert "1 ignored" in result.stdout


def test_config_file_merged(site, tmp_path) -> None:
    config = tmp_path / "options.json"
    config.write_text(json.dumps({"ignore": ["missing"]}), encoding="utf-8")
    result = runner.invoke(app, ["check", str(site), "--config", str(config)])
    assert result.exit_code == 0


def test_pattern_flag_limits_scan(site) -> None:
    result = runner.invoke(app, ["check", str(site), "--pattern", "docs/*.html"])
    assert result.exit_code == 0


def test_invalid_ignore_pattern_exit_two(site) -> None:
    result = runner.invoke(app, ["check", str(site), "--ignore", "(unclosed"])
    assert result.exit_code == 2
    assert "Invalid ignore pattern" in result.stdout


def test_missing_directory_exit_two(tmp_path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "absent")])
    assert result.exit_code == 2
    assert "Not a directory" in result.stdout


def test_bad_option_value_exit_two(site) -> None:
    result = runner.invoke(app, ["check", str(site), "--parallelism", "0"])
    assert result.exit_code == 2
