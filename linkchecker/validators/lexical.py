"""Syntax checks for link schemes that are never probed over the network.

Each validator takes the raw link and returns ``None`` when it is well-formed,
or a short reason string when it is not.  They never raise.
"""

from __future__ import annotations

import re
from typing import Optional

_DIGIT = re.compile(r"[0-9]")
_FACETIME_EMAIL = re.compile(r"^facetime(?:-audio)?:[^@]+@.+$")
_FACETIME_PHONE = re.compile(r"^facetime(?:-audio)?:[0-9.+-]+$")

_MAILTO_LOCAL = re.compile(r"^mailto:[^@]+@")
_MAILTO_DOMAIN = re.compile(r"^mailto:[^@]+@[^?]+")
_MAILTO_FULL = re.compile(
    r"^mailto:[^@]+@[^?]+"
    r"(\?(subject|cc|bcc|body)=[^&]+(&(subject|cc|bcc|body)=[^&]+)?)?$"
)

_SMS = re.compile(r"^sms:([0-9.+-]+)?$")
_TEL = re.compile(r"^tel:([0-9.+-]+)?$")


def valid_facetime(link: str) -> Optional[str]:
    """Validate a ``facetime:`` or ``facetime-audio:`` link.

    The target is either an email address or a phone number; a bare scheme
    with no target is accepted.
    """
    if link in ("facetime:", "facetime-audio:"):
        return None
    if "@" not in link and not _DIGIT.search(link):
        return "invalid"
    if "@" in link:
        if not _FACETIME_EMAIL.match(link):
            return "invalid email address"
    else:
        if " " in link:
            return "contains a space"
        if not _FACETIME_PHONE.match(link):
            return "invalid phone number"
    return None


def valid_mailto(link: str) -> Optional[str]:
    """Validate a ``mailto:`` link.

    At most two query parameters are accepted, each one of ``subject``,
    ``cc``, ``bcc`` or ``body``.
    """
    if not _MAILTO_LOCAL.match(link):
        return "invalid local-part"
    if not _MAILTO_DOMAIN.match(link):
        return "invalid domain"
    if not _MAILTO_FULL.match(link):
        return "invalid query params"
    return None


def _valid_phone_like(link: str, grammar: re.Pattern[str]) -> Optional[str]:
    if not grammar.match(link.replace(" ", "")):
        return "invalid"
    if " " in link:
        return "contains a space"
    return None


def valid_sms(link: str) -> Optional[str]:
    return _valid_phone_like(link, _SMS)


def valid_tel(link: str) -> Optional[str]:
    return _valid_phone_like(link, _TEL)
