"""Shared fixtures for dogpatch tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> bytes:
    """Read a JSON fixture file as raw bytes."""
    return (FIXTURES_DIR / f"{name}.json").read_bytes()


@pytest.fixture
def base_url():
    return "https://example.com/api/v1/"


@pytest.fixture
def dogs_json():
    return load_fixture("GET_Dogs_Response")


@pytest.fixture
def missing_values_json():
    return load_fixture("GET_Dogs_MissingValuesResponse")
