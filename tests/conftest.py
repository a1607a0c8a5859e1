"""Shared test fixtures."""

import pytest

from tests.factories import make_metrics, make_security
from tokenrisk.models.token import SecuritySignals, TokenMetrics


@pytest.fixture
def healthy_metrics() -> TokenMetrics:
    return make_metrics()


@pytest.fixture
def clean_security() -> SecuritySignals:
    return make_security()
