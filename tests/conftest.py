"""Shared pytest fixtures for MEMPRO client tests."""

from __future__ import annotations

import os
import tempfile

# Keep test runs from writing into ~/.mempro/logs; must be set before
# mempro_client.log_config is imported.
os.environ.setdefault("MEMPRO_LOG_DIR", tempfile.mkdtemp(prefix="mempro-logs-"))

import pytest

from mempro_client.config import Config
from mempro_client.mcp.client import BackendClient

BASE_URL = "http://test-backend:8821"
TEST_USER = "test-user"


@pytest.fixture
def config() -> Config:
    """Config pointing at the mocked test backend."""
    return Config(backend_url=BASE_URL, default_user_id=TEST_USER, timeout=5.0)


@pytest.fixture
def client(config):
    """Create a test backend client."""
    return BackendClient(config)
