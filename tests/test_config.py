"""Tests for settings, option merging and options files."""

from __future__ import annotations

import json

import pytest

from linkchecker.config import (
    DEFAULT_USER_AGENT,
    LinkCheckOptions,
    Settings,
    deep_merge,
    load_options_file,
)
from linkchecker.exceptions import OptionsError


@pytest.fixture
def base(monkeypatch) -> Settings:
    for name in (
        "LINKCHECK_TIMEOUT",
        "LINKCHECK_ATTEMPTS",
        "LINKCHECK_PARALLELISM",
        "LINKCHECK_USER_AGENT",
        "LINKCHECK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings()


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

class TestSettings:
    def test_defaults(self, base) -> None:
        assert base.timeout == 10000
        assert base.attempts == 3
        assert base.parallelism == 100
        assert base.user_agent == DEFAULT_USER_AGENT
        assert base.log_level == "WARNING"

    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("LINKCHECK_TIMEOUT", "2500")
        monkeypatch.setenv("LINKCHECK_ATTEMPTS", "0")
        monkeypatch.setenv("LINKCHECK_USER_AGENT", "Bot/2")
        monkeypatch.setenv("LINKCHECK_LOG_LEVEL", "debug")
        s = Settings()
        assert s.timeout == 2500
        assert s.attempts == 0
        assert s.user_agent == "Bot/2"
        assert s.log_level == "DEBUG"


# ---------------------------------------------------------------------------
# deep_merge
# ---------------------------------------------------------------------------

class TestDeepMerge:
    def test_nested_mappings_merge(self) -> None:
        merged = deep_merge({"html": {"pattern": "a", "tags": {"a": "href"}}}, {"html": {"pattern": "b"}})
        assert merged == {"html": {"pattern": "b", "tags": {"a": "href"}}}

    def test_lists_replace(self) -> None:
        assert deep_merge({"ignore": ["x"]}, {"ignore": ["y"]}) == {"ignore": ["y"]}

    def test_base_not_mutated(self) -> None:
        base = {"html": {"pattern": "a"}}
        deep_merge(base, {"html": {"pattern": "b"}})
        assert base == {"html": {"pattern": "a"}}


# ---------------------------------------------------------------------------
# LinkCheckOptions.from_mapping
# ---------------------------------------------------------------------------

class TestFromMapping:
    def test_defaults(self, base) -> None:
        options = LinkCheckOptions.from_mapping(None, base=base)
        assert options == LinkCheckOptions()
        assert options.html_tags == {
            "a": "href",
            "img": ["src", "data-src"],
            "link": "href",
            "script": "src",
        }
        assert options.timeout_seconds == 10.0

    def test_tags_merge_over_defaults(self, base) -> None:
        options = LinkCheckOptions.from_mapping(
            {"html": {"tags": {"img": "src", "iframe": ["src"]}}}, base=base
        )
        assert options.html_tags["img"] == "src"
        assert options.html_tags["iframe"] == ["src"]
        assert options.html_tags["a"] == "href"
        assert options.html_pattern == "**/*.html"

    def test_scalar_overrides(self, base) -> None:
        options = LinkCheckOptions.from_mapping(
            {"timeout": 500, "attempts": 0, "parallelism": 4, "userAgent": "UA"}, base=base
        )
        assert (options.timeout, options.attempts, options.parallelism) == (500, 0, 4)
        assert options.user_agent == "UA"

    def test_single_ignore_string_accepted(self, base) -> None:
        assert LinkCheckOptions.from_mapping({"ignore": "^x"}, base=base).ignore == ["^x"]

    def test_settings_supply_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("LINKCHECK_PARALLELISM", "9")
        assert LinkCheckOptions.from_mapping({}, base=Settings()).parallelism == 9

    @pytest.mark.parametrize(
        "raw",
        [
            {"timeout": 0},
            {"attempts": -1},
            {"parallelism": "10"},
            {"parallelism": True},
            {"ignore": [1]},
            {"html": "nope"},
            {"html": {"pattern": ""}},
            {"html": {"tags": {"a": 3}}},
            {"userAgent": None},
        ],
    )
    def test_invalid_values(self, base, raw) -> None:
        with pytest.raises(OptionsError):
            LinkCheckOptions.from_mapping(raw, base=base)

    def test_non_mapping_rejected(self, base) -> None:
        with pytest.raises(OptionsError):
            LinkCheckOptions.from_mapping(["not", "a", "mapping"], base=base)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# load_options_file
# ---------------------------------------------------------------------------

class TestLoadOptionsFile:
    def test_reads_object(self, tmp_path) -> None:
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"ignore": ["^x"]}), encoding="utf-8")
        assert load_options_file(path) == {"ignore": ["^x"]}

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(OptionsError):
            load_options_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "options.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(OptionsError):
            load_options_file(path)

    def test_non_object(self, tmp_path) -> None:
        path = tmp_path / "options.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(OptionsError):
            load_options_file(path)
