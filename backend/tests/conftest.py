"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_swap_env(monkeypatch):
    """Keep SWAP_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("SWAP_"):
            monkeypatch.delenv(name, raising=False)
