"""Run-scoped memo of remote URL validation outcomes."""

from __future__ import annotations

import threading
from typing import Any, Optional

MISSING: Any = object()


class UrlCache:
    """Maps an exact URL string to its cached validation result.

    A cached ``None`` means the URL was reachable.  Entries are never removed;
    a later :meth:`store` for the same URL overwrites the earlier outcome.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Optional[str]] = {}
        self._lock = threading.Lock()

    def get(self, url: str, default: Any = MISSING) -> Any:
        with self._lock:
            return self._entries.get(url, default)

    def store(self, url: str, result: Optional[str]) -> None:
        with self._lock:
            self._entries[url] = result

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
