"""
Shared fixtures
"""
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from habitdesk.core.dependencies import get_store
from habitdesk.models import AppData, Habit
from habitdesk.routes.todos import get_subtask_decomposer
from habitdesk.services.repository import JsonStore


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data.json")


@pytest.fixture
def make_habit():
    def _make(id, quantity=5, name=None, created="2025-01-01"):
        return Habit(
            id=id,
            name=name or f"Habit {id}",
            quantity=quantity,
            unit="reps",
            created_at=datetime.strptime(created, "%Y-%m-%d"),
        )
    return _make


@pytest.fixture
def app_data(make_habit):
    return AppData(
        habits=[make_habit(1, 5, "Pushups"), make_habit(2, 2, "Reading")],
        created_at="2025-01-01",
    )


@pytest.fixture
def decomposer():
    """Fake decomposer that records the tasks it was asked about"""
    calls = []

    def _decompose(task):
        calls.append(task)
        return ["Step one", "Step two", "Step three"]

    _decompose.calls = calls
    return _decompose


@pytest.fixture
def client(store, decomposer):
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_subtask_decomposer] = lambda: decomposer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
