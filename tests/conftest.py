"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

from fountainkit.config import FountainKitSettings, reset_settings, set_settings

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Give every test default settings, unaffected by the developer's env."""
    for key in list(os.environ):
        if key.startswith("FOUNTAINKIT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    set_settings(FountainKitSettings(_env_file=None))
    yield
    reset_settings()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding sample screenplays."""
    return FIXTURES_DIR


@pytest.fixture
def sample_script() -> str:
    """A small, correctly spaced screenplay with directives."""
    return (FIXTURES_DIR / "coffee_shop.fountain").read_text(encoding="utf-8")


@pytest.fixture
def messy_script() -> str:
    """A pasted screenplay with mojibake, wrapped lines and bad spacing."""
    return (FIXTURES_DIR / "pasted_draft.txt").read_text(encoding="utf-8")
