"""Pytest configuration and fixtures for guards package tests."""

import os

import pytest

from dataknobs_guards import create_validator_set


@pytest.fixture
def strict():
    """Validator set that raises on every unsuppressed failure."""
    return create_validator_set()


@pytest.fixture
def messages():
    """List receiving messages from the lenient validator set."""
    return []


@pytest.fixture
def lenient(messages):
    """Validator set that reports failures to ``messages`` instead of raising."""
    return create_validator_set(custom_error_handler=messages.append)


@pytest.fixture
def clear_env(monkeypatch):
    """Clear all DATAKNOBS_GUARDS_ environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("DATAKNOBS_GUARDS_"):
            monkeypatch.delenv(key)
