"""Document-set helpers: path normalisation, glob matching, directory loading.

A *document set* is a mapping of relative path → raw bytes.  The checker core
only reads it; these helpers let a host (the CLI, or a caller's own build
pipeline) produce one and select documents from it by glob.
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from linkchecker.exceptions import DocumentLoadError

_LOG = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[/\\]")


def normalize_path(path: str) -> str:
    """Return *path* with every ``\\`` or ``/`` separator replaced by ``/``."""
    return _SEPARATORS.sub("/", path)


# ---------------------------------------------------------------------------
# Glob matching
# ---------------------------------------------------------------------------

@functools.lru_cache(maxsize=64)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob into a full-match regex.

    ``**/`` matches zero or more directories, ``**`` anything, ``*`` a run of
    non-separator characters and ``?`` a single non-separator character.
    """
    pattern = normalize_path(pattern)
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts), re.DOTALL)


def match(pattern: str, keys: Iterable[str]) -> list[str]:
    """Return the subset of *keys* whose normalised form matches *pattern*.

    Keys are returned unchanged (not normalised) and in their original order.
    """
    regex = _compile_glob(pattern)
    return [key for key in keys if regex.fullmatch(normalize_path(key))]


# ---------------------------------------------------------------------------
# Loading from disk
# ---------------------------------------------------------------------------

def load_documents(directory: str | Path) -> dict[str, bytes]:
    """Read every regular file below *directory* into a document set.

    Keys are paths relative to *directory*, always using ``/`` separators.

    Raises:
        DocumentLoadError: If *directory* is not a directory or a file cannot
            be read.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DocumentLoadError(f"Not a directory: {str(root)!r}")

    documents: dict[str, bytes] = {}
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        try:
            documents[path.relative_to(root).as_posix()] = path.read_bytes()
        except OSError as exc:
            raise DocumentLoadError(f"Cannot read {str(path)!r}: {exc}") from exc

    _LOG.debug("Loaded %d document(s) from %s", len(documents), root)
    return documents
