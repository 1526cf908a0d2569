"""Centralised settings and option handling for linkchecker.

Environment-level defaults are resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the working directory
(loaded automatically when this module is imported).  Per-run options passed by
a caller are merged over those defaults by :meth:`LinkCheckOptions.from_mapping`.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from linkchecker.exceptions import OptionsError

load_dotenv(Path.cwd() / ".env", override=False)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

DEFAULT_PATTERN = "**/*.html"

DEFAULT_TAGS: dict[str, str | list[str]] = {
    "a": "href",
    "img": ["src", "data-src"],
    "link": "href",
    "script": "src",
}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Network probing
    # ------------------------------------------------------------------
    timeout: int = field(
        default_factory=lambda: int(os.environ.get("LINKCHECK_TIMEOUT", "10000"))
    )
    attempts: int = field(
        default_factory=lambda: int(os.environ.get("LINKCHECK_ATTEMPTS", "3"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("LINKCHECK_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    parallelism: int = field(
        default_factory=lambda: int(os.environ.get("LINKCHECK_PARALLELISM", "100"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LINKCHECK_LOG_LEVEL", "WARNING").upper()
    )

    def default_options(self) -> dict[str, Any]:
        """Return the option tree every run starts from."""
        return {
            "html": {
                "pattern": DEFAULT_PATTERN,
                "tags": {tag: _copy_attributes(attrs) for tag, attrs in DEFAULT_TAGS.items()},
            },
            "ignore": [],
            "timeout": self.timeout,
            "attempts": self.attempts,
            "userAgent": self.user_agent,
            "parallelism": self.parallelism,
        }


def _copy_attributes(attributes: str | list[str]) -> str | list[str]:
    return list(attributes) if isinstance(attributes, list) else attributes


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Return *base* with *override* merged on top.

    Nested mappings are merged key by key; any other value in *override*
    (lists included) replaces the one in *base*.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_options_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON options file.

    Raises:
        OptionsError: If the file cannot be read, is not valid JSON, or does
            not contain a JSON object.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise OptionsError(f"Cannot read options file {str(path)!r}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise OptionsError(f"Options file {str(path)!r} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise OptionsError(f"Options file {str(path)!r} must contain a JSON object.")
    return raw


# ---------------------------------------------------------------------------
# Per-run options
# ---------------------------------------------------------------------------

@dataclass
class LinkCheckOptions:
    """Fully-resolved options for one link-checking run."""

    html_pattern: str = DEFAULT_PATTERN
    html_tags: dict[str, str | list[str]] = field(
        default_factory=lambda: {tag: _copy_attributes(a) for tag, a in DEFAULT_TAGS.items()}
    )
    ignore: list[str] = field(default_factory=list)
    timeout: int = 10000
    attempts: int = 3
    user_agent: str = DEFAULT_USER_AGENT
    parallelism: int = 100

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any] | None = None,
        *,
        base: Settings | None = None,
    ) -> LinkCheckOptions:
        """Merge *raw* over the defaults of *base* and validate the result.

        *raw* uses the same shape as a JSON options file, e.g.
        ``{"html": {"pattern": "**/*.htm"}, "ignore": ["^https://localhost"]}``.

        Raises:
            OptionsError: If a value has the wrong type or is out of range.
        """
        if raw is not None and not isinstance(raw, Mapping):
            raise OptionsError("Options must be a mapping.")
        base = base or settings
        merged = deep_merge(base.default_options(), raw or {})

        html = merged["html"]
        if not isinstance(html, Mapping):
            raise OptionsError("'html' must be a mapping.")
        pattern = html.get("pattern", DEFAULT_PATTERN)
        if not isinstance(pattern, str) or not pattern:
            raise OptionsError("'html.pattern' must be a non-empty string.")

        ignore = merged["ignore"]
        if isinstance(ignore, str):
            ignore = [ignore]
        if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
            raise OptionsError("'ignore' must be a list of regular expression strings.")

        user_agent = merged["userAgent"]
        if not isinstance(user_agent, str):
            raise OptionsError("'userAgent' must be a string.")

        return cls(
            html_pattern=pattern,
            html_tags=_validate_tags(html.get("tags", {})),
            ignore=list(ignore),
            timeout=_validate_int(merged, "timeout", minimum=1),
            attempts=_validate_int(merged, "attempts", minimum=0),
            user_agent=user_agent,
            parallelism=_validate_int(merged, "parallelism", minimum=1),
        )


def _validate_tags(tags: Any) -> dict[str, str | list[str]]:
    if not isinstance(tags, Mapping):
        raise OptionsError("'html.tags' must map tag names to attribute names.")
    validated: dict[str, str | list[str]] = {}
    for tag, attributes in tags.items():
        if isinstance(attributes, str):
            validated[str(tag)] = attributes
        elif isinstance(attributes, list) and all(isinstance(a, str) for a in attributes):
            validated[str(tag)] = list(attributes)
        else:
            raise OptionsError(
                f"'html.tags.{tag}' must be an attribute name or a list of names."
            )
    return validated


def _validate_int(merged: Mapping[str, Any], key: str, *, minimum: int) -> int:
    value = merged[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise OptionsError(f"{key!r} must be an integer >= {minimum}, got {value!r}.")
    return value


# Module-level singleton: import this everywhere:
#   from linkchecker.config import settings
settings = Settings()
