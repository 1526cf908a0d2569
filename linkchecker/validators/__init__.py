"""Validators package: one validator family per link kind."""

from linkchecker.validators.cache import UrlCache
from linkchecker.validators.classifier import LinkKind, classify
from linkchecker.validators.lexical import valid_facetime, valid_mailto, valid_sms, valid_tel
from linkchecker.validators.local import LocalResolver, valid_local
from linkchecker.validators.remote import build_client, validate_url

__all__ = [
    "UrlCache",
    "LinkKind",
    "classify",
    "valid_facetime",
    "valid_mailto",
    "valid_sms",
    "valid_tel",
    "LocalResolver",
    "valid_local",
    "build_client",
    "validate_url",
]
