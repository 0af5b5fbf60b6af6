"""URL acceptance checks for experiment-param rewriting."""
from __future__ import annotations

import re
from urllib.parse import urlsplit

from ab_url_params.models import Rejection, UrlRejected, ValidatedUrl

# Characters that are never valid in a URL but slip through naive callers
_DISALLOWED_CHARS = re.compile(r"[{}|\\^`<>]")
_WHITESPACE = re.compile(r"\s")
_SCHEME_PREFIX = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*://")

ALLOWED_SCHEMES = {"http", "https"}
# Prepended to scheme-less input for parsing only, never emitted
SYNTHETIC_SCHEME = "https://"


def split_url(url: str) -> tuple[str, str]:
    """Split a URL into (base, query) at the first "?"."""
    base, _, query = url.partition("?")
    return base, query


def validate_url(value: object) -> ValidatedUrl:
    """Validate a candidate URL, with or without a scheme.

    Raises UrlRejected carrying the reason when the value cannot be rewritten.
    Bare domains like ``example.com/path`` are accepted; the https scheme used
    to check them is not part of the result's ``base``.
    """
    if not isinstance(value, str):
        raise UrlRejected(Rejection.TYPE_MISMATCH, value)

    trimmed = value.strip()
    if not trimmed or _WHITESPACE.search(trimmed) or _DISALLOWED_CHARS.search(trimmed):
        raise UrlRejected(Rejection.MALFORMED_SYNTAX, value)

    had_scheme = bool(_SCHEME_PREFIX.match(trimmed))
    candidate = trimmed if had_scheme else SYNTHETIC_SCHEME + trimmed

    try:
        parsed = urlsplit(candidate)
        hostname = parsed.hostname
        parsed.port  # raises ValueError on a non-numeric or out-of-range port
    except ValueError:
        raise UrlRejected(Rejection.UNPARSABLE_URL, value) from None
    if not hostname:
        raise UrlRejected(Rejection.UNPARSABLE_URL, value)

    if had_scheme and parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise UrlRejected(Rejection.UNSUPPORTED_SCHEME, value)

    if "." not in hostname or hostname.startswith(".") or hostname.endswith("."):
        raise UrlRejected(Rejection.INVALID_HOSTNAME, value)

    base, query = split_url(trimmed)
    return ValidatedUrl(
        had_scheme=had_scheme,
        scheme=parsed.scheme.lower(),
        host=hostname,
        path=parsed.path,
        base=base,
        query=query,
    )
