"""Shared pytest fixtures and configuration."""

from pathlib import Path

import pytest

from gradetrack.records import JsonFileStorage, RecordStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path for a student data file that doesn't exist yet."""
    return tmp_path / "students.json"


@pytest.fixture
def store(data_file: Path) -> RecordStore:
    """Create an empty RecordStore backed by a temporary JSON file."""
    record_store = RecordStore(JsonFileStorage(data_file))
    record_store.load()
    return record_store

