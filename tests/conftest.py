"""
tests/conftest.py — Shared fixtures and experiment payloads for the test suite.
"""

import pytest

from ab_url_params.models import ExperimentRecord
from ab_url_params.provider import StaticExperimentProvider, clear_provider

EXPERIMENT = {
    "experiment_name": "exp1",
    "variation_name": "varA",
    "visitor_id": "v123",
}

EXPERIMENTS_YAML = """\
experiments:
  - experiment_name: checkout-cta
    variation_name: green
    visitor_id: visitor-42
  - experiment_name: pricing
    variation_name: control
    visitor_id: visitor-42
"""

RESERVED_SUFFIX = "experiment_name=exp1&variation_name=varA&visitor_id=v123"


@pytest.fixture(autouse=True)
def _clean_registry():
    """Every test starts and ends with no provider installed."""
    clear_provider()
    yield
    clear_provider()


@pytest.fixture
def experiment():
    return ExperimentRecord(**EXPERIMENT)


@pytest.fixture
def provider():
    """A provider reporting one running experiment."""
    return StaticExperimentProvider([dict(EXPERIMENT)])


@pytest.fixture
def experiments_file(tmp_path):
    path = tmp_path / "experiments.yaml"
    path.write_text(EXPERIMENTS_YAML, encoding="utf-8")
    return path
