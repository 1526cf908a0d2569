"""Exception hierarchy for linkchecker.

All linkchecker exceptions inherit from :class:`LinkCheckerError`.  Setup
failures (:class:`SetupError` and its subclasses) abort a run before any link
is validated; :class:`BrokenLinksError` is raised only after a complete run
and carries the aggregated report.  Individual broken links are never raised;
they are plain diagnostic strings collected into that report.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linkchecker.scanner.models import LinkReport


class LinkCheckerError(Exception):
    """Base exception for all linkchecker errors."""


class SetupError(LinkCheckerError):
    """Raised when a run cannot start or its inputs cannot be read."""


class OptionsError(SetupError):
    """Raised when run options are malformed."""


class InvalidIgnorePatternError(SetupError):
    """Raised when an ignore pattern is not a valid regular expression.

    Attributes:
        pattern: The offending pattern source.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid ignore pattern {pattern!r}: {reason}")


class ExtractionError(SetupError):
    """Raised when a document cannot be decoded or parsed for links.

    Attributes:
        filename: The document that failed.
    """

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        super().__init__(f"Failed to extract links from {filename!r}: {reason}")


class DocumentLoadError(SetupError):
    """Raised when the document set cannot be read from disk."""


class BrokenLinksError(LinkCheckerError):
    """Raised when a completed run found at least one broken link.

    Attributes:
        report: The :class:`~linkchecker.scanner.models.LinkReport` of the run.
    """

    def __init__(self, report: LinkReport) -> None:
        self.report = report
        super().__init__(report.message)
