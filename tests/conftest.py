"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from app.core.rate_limit import reset_rate_limiter


@pytest.fixture(autouse=True)
def fresh_rate_limiter():
    """Give every test an empty set of token buckets."""
    reset_rate_limiter()
    yield
    reset_rate_limiter()


@pytest.fixture
def client() -> TestClient:
    from app.main import app

    return TestClient(app)
