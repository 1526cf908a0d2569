"""Link extraction: turns a document set into :class:`LinkOccurrence` records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import List

from bs4 import BeautifulSoup

from linkchecker import documents as document_set
from linkchecker.exceptions import ExtractionError
from linkchecker.scanner.models import LinkOccurrence

_LOG = logging.getLogger(__name__)

Matcher = Callable[[str, Iterable[str]], List[str]]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse(filename: str, contents: bytes | str) -> BeautifulSoup:
    """Parse *contents* into a soup, keeping attribute values verbatim.

    ``multi_valued_attributes=None`` stops bs4 from splitting attributes such
    as ``rel`` into lists, so every value comes back exactly as written.
    """
    try:
        html = contents.decode("utf-8", errors="replace") if isinstance(contents, bytes) else contents
        return BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
    except Exception as exc:
        raise ExtractionError(filename, str(exc) or type(exc).__name__) from exc


def _attribute_values(
    soup: BeautifulSoup, tags: Mapping[str, str | list[str]]
) -> Iterator[str]:
    """Yield non-empty attribute values in tag, attribute, then document order."""
    for tag, attributes in tags.items():
        if isinstance(attributes, str):
            attributes = [attributes]
        for attribute in attributes:
            # html.parser lowercases tag and attribute names.
            attribute = attribute.lower()
            for element in soup.find_all(tag.lower(), attrs={attribute: True}):
                value = element.get(attribute)
                if value:
                    yield value


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_links(
    documents: Mapping[str, bytes | str],
    pattern: str,
    tags: Mapping[str, str | list[str]],
    match: Matcher = document_set.match,
) -> list[LinkOccurrence]:
    """Collect every configured tag/attribute link from matching documents.

    Args:
        documents: The document set (path → markup).
        pattern: Glob selecting which documents to scan.
        tags: Tag name → attribute name, or an ordered list of names.
        match: Pattern-matching capability ``(pattern, keys) -> matching keys``.

    Raises:
        ExtractionError: If a selected document cannot be parsed.
    """
    occurrences: list[LinkOccurrence] = []
    for filename in match(pattern, list(documents)):
        _LOG.debug("Scanning file: %s", filename)
        soup = _parse(filename, documents[filename])
        normalized = document_set.normalize_path(filename)
        occurrences.extend(
            LinkOccurrence(filename=normalized, link=link)
            for link in _attribute_values(soup, tags)
        )
    return occurrences
