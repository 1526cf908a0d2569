"""Resolution of scheme-less links against the document set."""

from __future__ import annotations

import posixpath
import re
from collections.abc import Iterable

from linkchecker.documents import normalize_path

_FRAGMENT = re.compile(r"#.*$", re.DOTALL)
_QUERY = re.compile(r"\?.*$", re.DOTALL)
_SELF = frozenset({"", ".", "./"})


class LocalResolver:
    """Answers whether a relative or root-relative link exists in a document set.

    Document keys are normalised to ``/`` separators once, at construction.
    """

    def __init__(self, documents: Iterable[str]) -> None:
        self._keys = frozenset(normalize_path(key) for key in documents)

    def resolve(self, source: str, link: str) -> str:
        """Return the document-set path *link* points at from *source*.

        Fragments and query strings are dropped.  An empty string means the
        link refers to *source* itself.
        """
        dest = _QUERY.sub("", _FRAGMENT.sub("", normalize_path(link)))
        if dest in _SELF:
            return ""

        if dest.startswith("/"):
            joined = dest[1:]
        else:
            joined = posixpath.join(posixpath.dirname(normalize_path(source)), dest)
        if joined in _SELF:
            return ""

        resolved = posixpath.normpath(joined)
        if resolved == ".":
            return ""
        if dest.endswith("/"):
            resolved += "/"
        return resolved

    def is_valid(self, source: str, link: str) -> bool:
        """Return ``True`` if *link* from *source* names a document or a
        directory holding an ``index.html``."""
        resolved = self.resolve(source, link)
        if not resolved:
            return True
        if not resolved.endswith("/") and resolved in self._keys:
            return True
        return posixpath.join(resolved, "index.html") in self._keys


def valid_local(documents: Iterable[str], source: str, link: str) -> bool:
    """One-shot form of :meth:`LocalResolver.is_valid`."""
    return LocalResolver(documents).is_valid(source, link)
