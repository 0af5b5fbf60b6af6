"""Logging setup and the fallback notices emitted at each rejection point."""
from __future__ import annotations

import logging

from ab_url_params.config import settings
from ab_url_params.models import Rejection

# Rejection -> (level, message)
NOTICES: dict[Rejection, tuple[int, str]] = {
    Rejection.TYPE_MISMATCH: (
        logging.WARNING, "URL must be a string, returning original value"),
    Rejection.MALFORMED_SYNTAX: (
        logging.WARNING, "Invalid or malformed URL provided, returning original value"),
    Rejection.UNPARSABLE_URL: (
        logging.WARNING, "Invalid URL structure, returning original value"),
    Rejection.UNSUPPORTED_SCHEME: (
        logging.WARNING, "Unsupported URL scheme detected, returning original value"),
    Rejection.INVALID_HOSTNAME: (
        logging.WARNING, "Invalid hostname in URL, returning original value"),
    Rejection.PROVIDER_UNAVAILABLE: (
        logging.INFO, "Experimentation provider unavailable, URL left unchanged"),
    Rejection.NO_ACTIVE_EXPERIMENT: (
        logging.INFO, "No running A/B experiment found, URL left unchanged"),
    Rejection.INCOMPLETE_EXPERIMENT_DATA: (
        logging.WARNING, "Incomplete experiment data, URL left unchanged"),
    Rejection.UNEXPECTED_FAILURE: (
        logging.ERROR, "Unexpected error while appending experiment params"),
}


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def log_rejection(
    logger: logging.Logger,
    reason: Rejection,
    value: object = None,
    exc_info: BaseException | None = None,
) -> None:
    level, message = NOTICES[reason]
    if value is None:
        logger.log(level, "%s (%s)", message, reason.value, exc_info=exc_info)
    else:
        logger.log(level, "%s (%s): %r", message, reason.value, value, exc_info=exc_info)
