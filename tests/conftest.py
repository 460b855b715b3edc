"""Shared fixtures for the data-objects test suite."""

from __future__ import annotations

import os

import pytest

from data_objects.core.config import Settings, configure
from data_objects.domain import Customer, Purchase


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Run every test against default settings and restore them afterwards.

    ``DATA_OBJECTS_*`` variables from the calling shell are cleared so the
    process environment cannot switch derive revalidation off.
    """
    for name in list(os.environ):
        if name.startswith("DATA_OBJECTS_"):
            monkeypatch.delenv(name, raising=False)
    configure(Settings())
    yield
    configure(None)


@pytest.fixture
def lax_settings():
    """Settings that skip constructor validation on derived values."""
    configure(Settings(revalidate_on_derive=False))


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_purchases() -> list[Purchase]:
    """Three valid purchases."""
    return [Purchase(3342), Purchase(5648), Purchase(7577)]


@pytest.fixture
def sample_customer(sample_purchases) -> Customer:
    """A valid customer holding three purchases."""
    return Customer("Oleg", 1111, sample_purchases)
