"""Pytest hooks and fixtures."""

import pytest

from rpcdispatch.config import clear_config_cache
from rpcdispatch.rpc.server import Server


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "concurrency: exercises the registry from several threads",
    )


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch, tmp_path):
    """Point the default config path at an empty temp dir."""
    monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def server() -> Server:
    return Server()
