"""Shared fixtures for the deep-diff test suite."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def release_documents() -> tuple[dict[str, Any], dict[str, Any]]:
    """Two release plans whose phases swapped places (six records apart)."""
    lhs = {
        "id": "Release",
        "phases": [
            {"id": "Phase1", "tasks": [{"id": "Task1"}, {"id": "Task2"}]},
            {"id": "Phase2", "tasks": [{"id": "Task3"}]},
        ],
    }
    rhs = {
        "id": "Release",
        "phases": [
            {"id": "Phase2", "tasks": [{"id": "Task3"}]},
            {"id": "Phase1", "tasks": [{"id": "Task1"}, {"id": "Task2"}]},
        ],
    }
    return lhs, rhs
