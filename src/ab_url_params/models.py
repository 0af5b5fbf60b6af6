from __future__ import annotations

import enum
from urllib.parse import parse_qsl

from pydantic import BaseModel, Field

# Query keys owned by this package, in the order they are appended
RESERVED_PARAMS = ("experiment_name", "variation_name", "visitor_id")


class Rejection(str, enum.Enum):
    TYPE_MISMATCH = "type_mismatch"
    MALFORMED_SYNTAX = "malformed_syntax"
    UNPARSABLE_URL = "unparsable_url"
    UNSUPPORTED_SCHEME = "unsupported_scheme"
    INVALID_HOSTNAME = "invalid_hostname"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    NO_ACTIVE_EXPERIMENT = "no_active_experiment"
    INCOMPLETE_EXPERIMENT_DATA = "incomplete_experiment_data"
    UNEXPECTED_FAILURE = "unexpected_failure"


class UrlRejected(ValueError):
    """Raised by the validator when a candidate URL cannot be rewritten."""

    def __init__(self, reason: Rejection, value: object) -> None:
        super().__init__(f"{reason.value}: {value!r}")
        self.reason = reason
        self.value = value


class ValidatedUrl(BaseModel):
    had_scheme: bool
    scheme: str  # "https" when inferred
    host: str
    path: str
    base: str  # trimmed input before the first "?", verbatim
    query: str = ""  # everything after the first "?", fragment included

    @property
    def query_pairs(self) -> list[tuple[str, str]]:
        return parse_qsl(self.query, keep_blank_values=True)


class ExperimentRecord(BaseModel):
    """One active A/B assignment as reported by the experimentation provider."""

    model_config = {"frozen": True}

    experiment_name: str = Field(min_length=1, strict=True)
    variation_name: str = Field(min_length=1, strict=True)
    visitor_id: str = Field(min_length=1, strict=True)

    def as_params(self) -> list[tuple[str, str]]:
        return [(name, getattr(self, name)) for name in RESERVED_PARAMS]
