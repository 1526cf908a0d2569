"""linkchecker: find broken links in a generated set of HTML documents.

Public API::

    from linkchecker import check_links, load_documents
    report = check_links(load_documents("build"), {"ignore": ["^https://localhost"]})
"""

from linkchecker.config import LinkCheckOptions
from linkchecker.documents import load_documents, match
from linkchecker.exceptions import (
    BrokenLinksError,
    DocumentLoadError,
    ExtractionError,
    InvalidIgnorePatternError,
    LinkCheckerError,
    OptionsError,
    SetupError,
)
from linkchecker.runner import LinkChecker, check_links
from linkchecker.scanner.models import LinkReport

__all__ = [
    "LinkChecker",
    "LinkCheckOptions",
    "LinkReport",
    "check_links",
    "load_documents",
    "match",
    "LinkCheckerError",
    "SetupError",
    "OptionsError",
    "InvalidIgnorePatternError",
    "ExtractionError",
    "DocumentLoadError",
    "BrokenLinksError",
]
