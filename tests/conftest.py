"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from pma_analyzer.main import app
from pma_analyzer.calculations import DEFAULT_INPUTS, evaluate


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def default_params():
    """The documented default parameter set."""
    return DEFAULT_INPUTS


@pytest.fixture
def default_result(default_params):
    """Evaluation of the default parameter set."""
    return evaluate(default_params)
