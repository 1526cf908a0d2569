"""High-level runner: checks every link in a document set.

:class:`LinkChecker` is the scheduler.  One call to :meth:`LinkChecker.run`
extracts links, drops duplicates and ignored links, shuffles the rest so
requests to the same host are spread out, validates them on a bounded thread
pool and aggregates the broken ones into a :class:`LinkReport`.
"""

from __future__ import annotations

import logging
import random
import re
import time
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Optional

import httpx

from linkchecker import documents as document_set
from linkchecker.config import LinkCheckOptions
from linkchecker.exceptions import BrokenLinksError, InvalidIgnorePatternError
from linkchecker.scanner.extractor import Matcher, extract_links
from linkchecker.scanner.models import LinkOccurrence, LinkReport, LinkResult
from linkchecker.validators.cache import UrlCache
from linkchecker.validators.classifier import LinkKind, classify
from linkchecker.validators.lexical import valid_facetime, valid_mailto, valid_sms, valid_tel
from linkchecker.validators.local import LocalResolver
from linkchecker.validators.remote import build_client, validate_url

_LOG = logging.getLogger(__name__)

_LEXICAL_VALIDATORS: dict[LinkKind, Callable[[str], Optional[str]]] = {
    LinkKind.FACETIME: valid_facetime,
    LinkKind.MAILTO: valid_mailto,
    LinkKind.SMS: valid_sms,
    LinkKind.TEL: valid_tel,
}


def compile_ignore_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile ignore regexes.

    Raises:
        InvalidIgnorePatternError: On the first pattern that does not compile.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise InvalidIgnorePatternError(pattern, str(exc)) from exc
    return compiled


def _dedupe(occurrences: Iterable[LinkOccurrence]) -> list[LinkOccurrence]:
    # Deduplicate while preserving first-seen order.
    seen: set[LinkOccurrence] = set()
    unique: list[LinkOccurrence] = []
    for occurrence in occurrences:
        if occurrence not in seen:
            seen.add(occurrence)
            unique.append(occurrence)
    return unique


class LinkChecker:
    """Validates the links of a document set.

    Args:
        options: A resolved :class:`LinkCheckOptions`, or a raw option mapping
            to merge over the defaults.
        rng: Source of the processing-order shuffle.
        sleep: Backoff sleep used between retries of a remote URL.
    """

    def __init__(
        self,
        options: LinkCheckOptions | Mapping[str, Any] | None = None,
        *,
        rng: random.Random | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not isinstance(options, LinkCheckOptions):
            options = LinkCheckOptions.from_mapping(options)
        self.options = options
        self._rng = rng or random.Random()
        self._sleep = sleep

    def run(
        self,
        documents: Mapping[str, bytes | str],
        match: Matcher = document_set.match,
    ) -> LinkReport:
        """Check every link in *documents* and return the aggregated report.

        Broken links never raise; they are collected into the report.

        Raises:
            SetupError: If an ignore pattern is invalid or a document cannot be
                parsed.  No link is validated in that case.
        """
        resolver = LocalResolver(documents)
        ignore = compile_ignore_patterns(self.options.ignore)

        occurrences = extract_links(
            documents, self.options.html_pattern, self.options.html_tags, match
        )
        total = len(occurrences)
        _LOG.debug("Detected %d links to check", total)

        unique = _dedupe(occurrences)
        _LOG.debug("Eliminated duplicates, down to %d links to check", len(unique))

        pending = [o for o in unique if not any(p.search(o.link) for p in ignore)]
        _LOG.debug("Eliminated ignored links, down to %d links to check", len(pending))

        self._rng.shuffle(pending)

        cache = UrlCache()
        results: list[LinkResult] = []
        with build_client(self.options) as client:
            with ThreadPoolExecutor(max_workers=self.options.parallelism) as pool:
                futures = [
                    pool.submit(self._validate, occurrence, resolver, client, cache)
                    for occurrence in pending
                ]
                for future in as_completed(futures):
                    results.append(future.result())

        report = LinkReport.from_results(
            results,
            total=total,
            duplicates=total - len(unique),
            ignored=len(unique) - len(pending),
            checked=len(pending),
        )
        _LOG.debug("Checked %d links, %d broken", report.checked, report.broken_count)
        return report

    def _validate(
        self,
        occurrence: LinkOccurrence,
        resolver: LocalResolver,
        client: httpx.Client,
        cache: UrlCache,
    ) -> LinkResult:
        link = occurrence.link
        kind = classify(link)

        if kind is LinkKind.LOCAL:
            result = None if resolver.is_valid(occurrence.filename, link) else "not found"
        elif kind is LinkKind.REMOTE_URL:
            result = validate_url(link, self.options, client, cache, self._sleep)
        elif kind in _LEXICAL_VALIDATORS:
            result = _LEXICAL_VALIDATORS[kind](link)
        else:
            result = None

        return LinkResult(filename=occurrence.filename, link=link, result=result)


def check_links(
    documents: Mapping[str, bytes | str],
    options: LinkCheckOptions | Mapping[str, Any] | None = None,
    match: Matcher = document_set.match,
) -> LinkReport:
    """Run a check and raise if anything is broken.

    Returns:
        The (clean) :class:`LinkReport` when every link is valid.

    Raises:
        BrokenLinksError: If at least one link is broken; ``str()`` of the
            error is the formatted report.
        SetupError: If the run could not start.
    """
    report = LinkChecker(options).run(documents, match)
    if not report.ok:
        raise BrokenLinksError(report)
    return report
