"""Data models for the link scanner."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Dict, List, Optional

REPORT_HEADER = "Broken links found:\n\n"


@dataclass(frozen=True)
class LinkOccurrence:
    """One link found inside one document."""

    filename: str
    link: str


@dataclass(frozen=True)
class LinkResult:
    """A :class:`LinkOccurrence` together with its validation outcome.

    ``result`` is ``None`` for a valid link, otherwise a short reason such as
    ``"HTTP 404"`` or ``"not found"``.
    """

    filename: str
    link: str
    result: Optional[str] = None

    @property
    def broken(self) -> bool:
        return self.result is not None


@dataclass
class LinkReport:
    """The aggregated outcome of one run.

    ``broken`` maps each offending document (sorted) to its sorted
    ``"<link> (<reason>)"`` entries.
    """

    broken: Dict[str, List[str]] = field(default_factory=dict)
    total: int = 0
    duplicates: int = 0
    ignored: int = 0
    checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.broken

    @property
    def broken_count(self) -> int:
        return sum(len(entries) for entries in self.broken.values())

    @property
    def message(self) -> str:
        """Human-readable failure text, or an empty string when nothing broke."""
        if not self.broken:
            return ""
        blocks = [
            f"{filename}:\n" + "\n".join(f"  {entry}" for entry in entries)
            for filename, entries in self.broken.items()
        ]
        return REPORT_HEADER + "\n\n".join(blocks)

    @classmethod
    def from_results(cls, results: Iterable[LinkResult], **counts: int) -> LinkReport:
        grouped: Dict[str, List[str]] = defaultdict(list)
        for item in results:
            if item.broken:
                grouped[item.filename].append(f"{item.link} ({item.result})")
        broken = {filename: sorted(grouped[filename]) for filename in sorted(grouped)}
        return cls(broken=broken, **counts)
