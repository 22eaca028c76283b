"""Pytest configuration for cw-state tests."""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _silence_loguru():
    """Drop loguru's default stderr sink so tests stay quiet."""
    logger.remove()
    yield
    logger.remove()


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep user config and LCD overrides out of tests."""
    monkeypatch.delenv("OVERLOAD_LCD", raising=False)
    monkeypatch.delenv("CW_STATE_LOG_LEVEL", raising=False)
    monkeypatch.setenv("CW_STATE_CONFIG", str(tmp_path / "missing-config.yml"))


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=2s, integration=10s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(2))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(10))
