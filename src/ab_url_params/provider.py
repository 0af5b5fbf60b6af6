"""Read the active A/B experiment from the process-wide experimentation provider.

The provider is any object exposing a no-argument query method (by default
``get_running_ab_experiments``) that returns a list of experiment records.
Records may be mappings or objects with ``experiment_name``,
``variation_name`` and ``visitor_id`` attributes.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ab_url_params.config import settings
from ab_url_params.diagnostics import log_rejection
from ab_url_params.models import ExperimentRecord, Rejection

logger = logging.getLogger(__name__)

# Sentinel: use whatever provider is installed in the registry
INSTALLED: Any = object()
_provider: Any = None


def install_provider(provider: Any) -> None:
    """Register the process-wide experimentation provider."""
    global _provider
    _provider = provider
    logger.info("Experimentation provider installed: %s", type(provider).__name__)


def clear_provider() -> None:
    global _provider
    _provider = None


def get_provider() -> Any:
    return _provider


def parse_experiment(raw: Any) -> ExperimentRecord | None:
    """Build an ExperimentRecord from loosely-shaped provider data.

    Returns None when any field is missing, empty or not a string.
    """
    if raw is None:
        return None
    try:
        if isinstance(raw, Mapping):
            return ExperimentRecord.model_validate(dict(raw))
        return ExperimentRecord.model_validate(raw, from_attributes=True)
    except ValidationError as e:
        logger.debug("Rejected experiment record %r: %s", raw, e)
        return None


def current_experiment(provider: Any = INSTALLED) -> ExperimentRecord | None:
    """Return the first running experiment, or None if there is nothing usable.

    Never raises: an absent provider, a missing query method, an empty or
    malformed result, and errors raised by the provider all yield None.
    """
    if provider is INSTALLED:
        provider = _provider

    if provider is None:
        log_rejection(logger, Rejection.PROVIDER_UNAVAILABLE)
        return None

    try:
        query = getattr(provider, settings.experiment_query_method, None)
        if not callable(query):
            log_rejection(logger, Rejection.PROVIDER_UNAVAILABLE)
            return None
        experiments = query()
        if not isinstance(experiments, (list, tuple)) or not experiments:
            log_rejection(logger, Rejection.NO_ACTIVE_EXPERIMENT)
            return None
        # First listed experiment wins; concurrent experiments are not merged
        record = parse_experiment(experiments[0])
    except Exception as e:
        logger.error("Experimentation provider query failed: %s", e, exc_info=e)
        return None

    if record is None:
        log_rejection(logger, Rejection.INCOMPLETE_EXPERIMENT_DATA)
        return None
    return record


class StaticExperimentProvider:
    """In-process provider over a fixed list of experiment assignments.

    Also answers to ``settings.experiment_query_method`` when that is not the
    default name.
    """

    def __init__(self, experiments: list[Any] | None = None) -> None:
        self.experiments = list(experiments or [])
        method = settings.experiment_query_method
        if method != "get_running_ab_experiments":
            setattr(self, method, self.get_running_ab_experiments)

    def get_running_ab_experiments(self) -> list[Any]:
        return list(self.experiments)

    @classmethod
    def from_yaml(cls, path: str) -> StaticExperimentProvider:
        """Load experiments from a YAML file with a top-level ``experiments`` list."""
        try:
            data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning("Experiments file not found: %s", path)
            return cls()

        if not isinstance(data, dict):
            if data is not None:
                logger.warning("Experiments file %s is not a mapping, ignoring", path)
            return cls()

        experiments = data.get("experiments") or []
        logger.info("Loaded %d experiments from %s", len(experiments), path)
        return cls(experiments)


def install_provider_from_settings() -> StaticExperimentProvider | None:
    """Install a StaticExperimentProvider when ``experiments_path`` is configured."""
    if not settings.experiments_path:
        logger.debug("No experiments_path configured, no provider installed")
        return None
    provider = StaticExperimentProvider.from_yaml(settings.experiments_path)
    install_provider(provider)
    return provider
