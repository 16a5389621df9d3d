"""Integration test fixtures.

Provides an AppState wired to the in-memory catalog from tests/conftest.py,
so the Textual screen runs the real pipeline and index without network I/O.
"""

from __future__ import annotations

import pytest

from mealbrowser.config import Settings
from mealbrowser.state import AppState


@pytest.fixture()
def app_state(fake_catalog, settings: Settings) -> AppState:
    return AppState(settings=settings, catalog=fake_catalog)
