"""Append A/B experiment params to a URL, falling back to the original input."""
from __future__ import annotations

import logging
from typing import Any

from ab_url_params.diagnostics import log_rejection
from ab_url_params.merge import merge_experiment_params
from ab_url_params.models import Rejection, UrlRejected
from ab_url_params.provider import INSTALLED, current_experiment
from ab_url_params.url import validate_url

logger = logging.getLogger(__name__)


def append_experiment_params(value: Any, provider: Any = INSTALLED) -> Any:
    """Append experiment_name, variation_name and visitor_id to ``value``.

    ``provider`` defaults to the installed process-wide provider. The input is
    returned unchanged whenever it is not a valid http(s) URL, no experiment is
    running, or anything else goes wrong. This function never raises.
    """
    try:
        try:
            url = validate_url(value)
        except UrlRejected as e:
            log_rejection(logger, e.reason, value)
            return value

        experiment = current_experiment(provider)
        if experiment is None:
            return value

        merged = merge_experiment_params(url, experiment)
        logger.debug("A/B test parameters appended: %s", merged)
        return merged
    except Exception as e:
        log_rejection(logger, Rejection.UNEXPECTED_FAILURE, value, exc_info=e)
        return value
