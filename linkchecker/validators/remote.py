"""Reachability probing for ``http:`` and ``https:`` links.

Each URL is probed with ``HEAD`` first.  A ``405`` or a transport error on
``HEAD`` is re-issued as ``GET`` within the same attempt.  A failure after
that is retried with exponential backoff, and the final outcome is stored in
the run's :class:`~linkchecker.validators.cache.UrlCache` so later
occurrences of the same URL never hit the network again.
"""

from __future__ import annotations

import enum
import logging
import time
from collections.abc import Callable
from typing import Optional

import httpx

from linkchecker.config import LinkCheckOptions
from linkchecker.validators.cache import MISSING, UrlCache

_LOG = logging.getLogger(__name__)

_MAX_BACKOFF = 1.0
_BASE_BACKOFF = 0.1

# Hostnames that fail IDNA encoding surface as UnicodeError (idna.IDNAError
# included), ValueError or IndexError from below httpx.
_REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeError, ValueError, IndexError)


class _Phase(enum.Enum):
    INIT = "init"
    HEAD_ATTEMPT = "head"
    GET_FALLBACK = "get"
    RETRYING = "retrying"
    DONE = "done"


def build_client(options: LinkCheckOptions) -> httpx.Client:
    """Return the client shared by every probe of one run.

    Certificates are not verified and redirects are not followed; a ``3xx``
    answer already proves the URL is reachable.  The pool holds one
    connection per worker so ``parallelism`` is the only concurrency bound.
    """
    return httpx.Client(
        limits=httpx.Limits(
            max_connections=options.parallelism,
            max_keepalive_connections=options.parallelism,
        ),
        headers={"User-Agent": options.user_agent},
        timeout=options.timeout_seconds,
        verify=False,
        follow_redirects=False,
    )


def backoff_delay(attempt: int) -> float:
    """Seconds to wait before the attempt following *attempt*."""
    return min(_MAX_BACKOFF, _BASE_BACKOFF * 2**attempt)


def _response_outcome(response: Optional[httpx.Response]) -> Optional[str]:
    if response is None:
        return "no response"
    if 400 <= response.status_code <= 599:
        return f"HTTP {response.status_code}"
    return None


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _probe(client: httpx.Client, method: str, url: str) -> httpx.Response:
    # Streaming avoids downloading the body of a GET fallback.
    with client.stream(method, url) as response:
        return response


def validate_url(
    url: str,
    options: LinkCheckOptions,
    client: httpx.Client,
    cache: UrlCache,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[str]:
    """Return ``None`` if *url* is reachable, otherwise a short reason.

    The outcome is memoised in *cache*.  A cached entry found at the start of
    any attempt is returned as-is without issuing a request.

    Args:
        url: An absolute ``http:`` or ``https:`` URL.
        options: Run options; only ``attempts`` is read here, the timeout
            and user agent live on *client*.
        client: The run's shared client (see :func:`build_client`).
        cache: The run's URL cache.
        sleep: Called with the backoff delay in seconds between attempts.
    """
    phase = _Phase.INIT
    attempt = 1
    outcome: Optional[str] = None

    while phase is not _Phase.DONE:
        if phase is _Phase.INIT:
            cached = cache.get(url, MISSING)
            if cached is not MISSING:
                return cached
            phase = _Phase.HEAD_ATTEMPT

        elif phase in (_Phase.HEAD_ATTEMPT, _Phase.GET_FALLBACK):
            method = "HEAD" if phase is _Phase.HEAD_ATTEMPT else "GET"
            try:
                response = _probe(client, method, url)
            except _REQUEST_ERRORS as exc:
                if method == "HEAD":
                    phase = _Phase.GET_FALLBACK
                    continue
                outcome = _error_message(exc)
            else:
                if response.status_code == 405 and method == "HEAD":
                    phase = _Phase.GET_FALLBACK
                    continue
                outcome = _response_outcome(response)

            if outcome is not None and attempt <= options.attempts:
                phase = _Phase.RETRYING
            else:
                phase = _Phase.DONE

        elif phase is _Phase.RETRYING:
            delay = backoff_delay(attempt)
            _LOG.debug(
                "Retrying %s in %.1fs (attempt %d failed: %s)", url, delay, attempt, outcome
            )
            sleep(delay)
            attempt += 1
            phase = _Phase.INIT

    cache.store(url, outcome)
    return outcome
