"""Scanner package: link extraction & result models."""

from linkchecker.scanner.extractor import extract_links
from linkchecker.scanner.models import LinkOccurrence, LinkReport, LinkResult

__all__ = ["extract_links", "LinkOccurrence", "LinkResult", "LinkReport"]
