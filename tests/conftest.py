"""Pytest configuration for the aurora-engine test suite."""

from __future__ import annotations

import pytest

from auroraengine.container import reset_container


@pytest.fixture(autouse=True)
def _fresh_container():
    """Give every test its own global service container."""
    reset_container()
    yield
    reset_container()
