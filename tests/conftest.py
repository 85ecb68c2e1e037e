"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from matlista.config import Settings, get_settings
from matlista.main import app
from matlista.plan.grocery_list import GroceryListBuilder, PlannedMeal

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(
        _env_file=None,
        exclude_pantry_staples=True,
        display_language="sv",
    )


@pytest.fixture
def settings_keep_staples():
    """Settings that keep pantry staples on the list."""
    return Settings(_env_file=None, exclude_pantry_staples=False)


@pytest.fixture
def builder(settings):
    """Grocery list builder using the default settings."""
    return GroceryListBuilder(settings)


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client(settings):
    """Test client with settings pinned for the duration of a test."""
    app.dependency_overrides[get_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Recipe Fixtures
# =============================================================================


@pytest.fixture
def pancake_lines():
    """Ingredient lines for pannkakor, as scraped from a recipe site."""
    return [
        "3 ägg",
        "6 dl mjölk",
        "2,5 dl vetemjöl",
        "1 krm salt",
        "Smör till stekning",
    ]


@pytest.fixture
def omelette_lines():
    """Ingredient lines for an omelett."""
    return ["4 ägg", "1 dl mjölk"]


@pytest.fixture
def planned_week(pancake_lines, omelette_lines):
    """Two planned meals sharing eggs and milk."""
    return [
        PlannedMeal(name="Pannkakor", ingredients=pancake_lines),
        PlannedMeal(name="Omelett", ingredients=omelette_lines),
    ]
