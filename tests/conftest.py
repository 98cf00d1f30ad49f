"""
Shared pytest fixtures for tabula tests.

This module provides:
- In-memory SQLite adapters
- Table bindings over the sample models in ``tests/_support/models.py``
- Logging context cleanup between tests
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from tabula.core.adapters import SQLiteAdapter
from tabula.core.logging import clear_context
from tabula.model import Table
from tests._support.models import Account, Profile


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if "integration" in str(test_path):
            item.add_marker(pytest.mark.integration)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def clean_log_context() -> Iterator[None]:
    """Clear structlog context variables around each test."""
    clear_context()
    yield
    clear_context()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def db() -> Iterator[SQLiteAdapter]:
    """Connected in-memory SQLite adapter."""
    adapter = SQLiteAdapter(":memory:")
    adapter.connect()
    yield adapter
    adapter.disconnect()


@pytest.fixture
def accounts(db: SQLiteAdapter) -> Table[Account]:
    """Created ``accounts`` table bound to :class:`Account`."""
    table = Table(db, "accounts", Account)
    table.create()
    return table


@pytest.fixture
def profiles(db: SQLiteAdapter) -> Table[Profile]:
    """Created ``profiles`` table bound to :class:`Profile`."""
    table = Table(db, "profiles", Profile)
    table.create()
    return table
