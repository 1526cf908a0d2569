"""Scheme detection: decides which validator family handles a link."""

from __future__ import annotations

import enum
from urllib.parse import urlsplit


class LinkKind(enum.Enum):
    LOCAL = "local"
    FACETIME = "facetime"
    MAILTO = "mailto"
    SMS = "sms"
    TEL = "tel"
    REMOTE_URL = "remote"
    UNKNOWN = "unknown"


_SCHEMES = {
    "facetime": LinkKind.FACETIME,
    "facetime-audio": LinkKind.FACETIME,
    "http": LinkKind.REMOTE_URL,
    "https": LinkKind.REMOTE_URL,
    "mailto": LinkKind.MAILTO,
    "sms": LinkKind.SMS,
    "tel": LinkKind.TEL,
}


def link_scheme(link: str) -> str:
    """Return the lower-cased scheme of *link*, or ``""`` when it has none.

    Links that cannot be parsed at all are treated as scheme-less.
    """
    try:
        return urlsplit(link).scheme
    except ValueError:
        return ""


def classify(link: str) -> LinkKind:
    """Return the :class:`LinkKind` for *link*.

    Scheme-less links are :attr:`LinkKind.LOCAL`; schemes without a dedicated
    validator are :attr:`LinkKind.UNKNOWN` and always pass.
    """
    scheme = link_scheme(link)
    if not scheme:
        return LinkKind.LOCAL
    return _SCHEMES.get(scheme, LinkKind.UNKNOWN)
