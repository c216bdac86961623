"""Shared fixtures for context assembly tests."""

from datetime import datetime, timezone
import itertools

import pytest

from moltbrain.context import BudgetPacker, Observation, Summary


FIXED_TIME = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def make_observation():
    """Factory for observations with sensible defaults."""
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        data = {
            "id": f"obs-{n}",
            "session_id": "sess-12345678",
            "type": "issue",
            "title": f"Observation {n}",
            "project": "demo",
            "created_at": FIXED_TIME,
        }
        data.update(overrides)
        return Observation(**data)

    return _make


@pytest.fixture
def make_summary():
    """Factory for summaries with sensible defaults."""

    def _make(**overrides):
        data = {
            "id": "sum-1",
            "session_id": "sess-12345678",
            "project": "demo",
            "created_at": FIXED_TIME,
        }
        data.update(overrides)
        return Summary(**data)

    return _make


@pytest.fixture
def packer():
    return BudgetPacker()
