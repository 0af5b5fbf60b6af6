from __future__ import annotations

from urllib.parse import urlencode

from ab_url_params.models import RESERVED_PARAMS, ExperimentRecord, ValidatedUrl


def merge_experiment_params(url: ValidatedUrl, experiment: ExperimentRecord) -> str:
    """Rewrite the query so each reserved param appears once, after all others.

    Non-reserved pairs keep their order, duplicates and blank values. The base
    is emitted exactly as the caller wrote it.
    """
    kept = [(k, v) for k, v in url.query_pairs if k not in RESERVED_PARAMS]
    query = urlencode(kept + experiment.as_params())
    return f"{url.base}?{query}"
