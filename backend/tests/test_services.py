"""
Tests for the habit and todo services
"""
import json

import pytest

from habitdesk.core.exceptions import (
    ConfigurationError,
    HabitNotFoundError,
    RemoteError,
    TodoNotFoundError,
    ValidationError,
)
from habitdesk.models import DayRecord, Todo
from habitdesk.services import habits as habit_service
from habitdesk.services import todos as todo_service
from habitdesk.services.external import subtasks
from habitdesk.utils.dates import today


def test_render_dashboard_sets_anchor_and_applies_penalty(store, app_data):
    app_data.created_at = ""
    app_data.history["2025-01-09"] = DayRecord(date="2025-01-09", completed_habits=[2])
    app_data.history["2025-01-08"] = DayRecord(date="2025-01-08", completed_habits=[2])
    app_data.history["2025-01-10"] = DayRecord(date="2025-01-10", completed_habits=[1])
    store.save(app_data)

    view = habit_service.render_dashboard(store, message="Hi", today="2025-01-10")

    saved = store.load()
    assert saved.created_at == "2025-01-10"
    assert [h.quantity for h in saved.habits] == [3, 2]
    assert saved.history["2025-01-09"].penalty_applied_habits == [1]

    pushups, reading = view.habits
    assert pushups.habit.quantity == 3
    assert pushups.completed_today is True
    assert pushups.streak == 0
    assert reading.streak == 2
    assert reading.completed_today is False
    assert pushups.calendar[-1].date == "2025-01-10"
    assert pushups.calendar[-1].done is True
    assert view.needs_week_review is False
    assert view.message == "Hi"


def test_render_dashboard_twice_same_day(store, app_data):
    store.save(app_data)

    habit_service.render_dashboard(store, today="2025-01-10")
    first = store.load()
    habit_service.render_dashboard(store, today="2025-01-10")

    assert store.load() == first


def test_render_dashboard_flags_week_review(store, app_data):
    app_data.last_week_review = "2025-01-03"
    store.save(app_data)

    assert habit_service.render_dashboard(store, today="2025-01-09").needs_week_review is False
    assert habit_service.render_dashboard(store, today="2025-01-10").needs_week_review is True


def test_render_dashboard_tolerates_bad_anchor(store, app_data):
    app_data.last_week_review = "garbage"
    store.save(app_data)

    assert habit_service.render_dashboard(store, today="2025-01-10").needs_week_review is False


def test_render_dashboard_tolerates_bad_creation_date(store):
    store.path.write_text(json.dumps({
        "habits": [{"id": 1, "name": "Run", "quantity": 3, "unit": "km",
                    "created_at": "0001-01-01T00:00:00Z"}],
        "history": {},
        "created_at": "garbage",
    }))

    view = habit_service.render_dashboard(store, today="2025-01-10")

    assert [(c.date, c.done) for c in view.habits[0].calendar] == [("2025-01-10", False)]


def test_add_habit_defaults(store):
    result = habit_service.add_habit(store, "  Pushups ")

    assert result["status"] == "success"
    habit = store.load().habits[0]
    assert (habit.id, habit.name, habit.quantity, habit.unit) == (1, "Pushups", 5, "units")
    assert habit.created_at is not None


def test_add_habit_assigns_increasing_ids(store):
    habit_service.add_habit(store, "Run", 3, "km")
    habit_service.add_habit(store, "Read", 10, "pages")
    habit_service.delete_habit(store, 1)
    habit_service.add_habit(store, "Write", 1, "pages")

    assert [h.id for h in store.load().habits] == [2, 3]


def test_deleted_habit_id_is_not_reused(store):
    habit_service.add_habit(store, "Run")
    habit_service.delete_habit(store, 1)

    result = habit_service.add_habit(store, "Walk")

    assert result["data"]["id"] == 2
    assert store.load().last_habit_id == 2


def test_completed_todo_id_is_not_reused(store):
    todo_service.add_todo(store, "Call the bank")
    todo_service.complete_todo(store, 1)

    result = todo_service.add_todo(store, "File taxes")

    assert result["data"]["id"] == 2


@pytest.mark.parametrize("name,quantity,field", [("", None, "name"), ("   ", 5, "name"), ("Run", 0, "quantity"), ("Run", -2, "quantity")])
def test_add_habit_validation(store, name, quantity, field):
    with pytest.raises(ValidationError) as excinfo:
        habit_service.add_habit(store, name, quantity)

    assert excinfo.value.field == field
    assert not store.path.exists()


def test_new_habit_survives_first_render(store):
    habit_service.add_habit(store, "Pushups", 5)

    view = habit_service.render_dashboard(store)

    assert view.habits[0].habit.quantity == 5


def test_toggle_completion_round_trip(store, app_data):
    app_data.history[today()] = DayRecord(date=today(), completed_habits=[2])
    store.save(app_data)

    habit_service.set_habit_completion(store, 1, True)
    assert store.load().history[today()].completed_habits == [2, 1]

    habit_service.set_habit_completion(store, 1, False)
    assert store.load().history[today()].completed_habits == [2]


def test_toggle_unknown_habit(store, app_data):
    store.save(app_data)

    with pytest.raises(HabitNotFoundError):
        habit_service.set_habit_completion(store, 42)

    assert today() not in store.load().history


def test_complete_week_review(store, app_data):
    store.save(app_data)

    result = habit_service.complete_week_review(store, today="2025-01-10")

    saved = store.load()
    assert [h.quantity for h in saved.habits] == [6, 3]
    assert saved.last_week_review == "2025-01-10"
    assert result["last_week_review"] == "2025-01-10"


def test_edit_habit_partial(store, app_data):
    store.save(app_data)

    habit_service.edit_habit(store, 1, quantity=8)
    habit_service.edit_habit(store, 2, name="Reading books", unit="  ")

    pushups, reading = store.load().habits
    assert (pushups.name, pushups.quantity, pushups.unit) == ("Pushups", 8, "reps")
    assert (reading.name, reading.quantity, reading.unit) == ("Reading books", 2, "reps")


def test_edit_habit_rejects_bad_values(store, app_data):
    store.save(app_data)

    with pytest.raises(ValidationError):
        habit_service.edit_habit(store, 1, name=" ")
    with pytest.raises(ValidationError):
        habit_service.edit_habit(store, 1, quantity=0)
    with pytest.raises(HabitNotFoundError):
        habit_service.edit_habit(store, 9, name="Nope")

    assert store.load() == app_data


def test_delete_habit_keeps_history(store, app_data):
    app_data.history["2025-01-09"] = DayRecord(date="2025-01-09", completed_habits=[1, 2])
    store.save(app_data)

    habit_service.delete_habit(store, 1)

    saved = store.load()
    assert [h.id for h in saved.habits] == [2]
    assert saved.history["2025-01-09"].completed_habits == [1, 2]

    with pytest.raises(HabitNotFoundError):
        habit_service.delete_habit(store, 1)


def test_add_and_complete_todo(store):
    todo_service.add_todo(store, "Call the bank")
    todo_service.add_todo(store, "File taxes")

    todo_service.complete_todo(store, 1)

    assert [(t.id, t.text) for t in store.load().todos] == [(2, "File taxes")]

    with pytest.raises(TodoNotFoundError):
        todo_service.complete_todo(store, 1)


def test_add_blank_todo(store):
    with pytest.raises(ValidationError) as excinfo:
        todo_service.add_todo(store, "  ")

    assert excinfo.value.field == "text"


def test_simplify_todo_replaces_in_place(store, decomposer):
    for text in ["First", "Clean the garage", "Last"]:
        todo_service.add_todo(store, text)

    result = todo_service.simplify_todo(store, 2, decomposer)

    todos = store.load().todos
    assert [t.text for t in todos] == ["First", "Step one", "Step two", "Step three", "Last"]
    assert [t.id for t in todos] == [1, 4, 5, 6, 3]
    assert decomposer.calls == ["Clean the garage"]
    assert len(result["data"]) == 3


def test_simplify_missing_todo(store, decomposer):
    with pytest.raises(TodoNotFoundError):
        todo_service.simplify_todo(store, 7, decomposer)

    assert decomposer.calls == []


def test_simplify_todo_removed_during_call(store):
    todo_service.add_todo(store, "Clean the garage")

    def decompose(task):
        todo_service.complete_todo(store, 1)
        return ["a", "b", "c"]

    with pytest.raises(TodoNotFoundError):
        todo_service.simplify_todo(store, 1, decompose)

    assert store.load().todos == []


def test_simplify_failure_leaves_todos_unchanged(store):
    todo_service.add_todo(store, "Clean the garage")
    before = store.load().todos

    def decompose(task):
        raise RemoteError("OpenAI API error 429", status_code=429)

    with pytest.raises(RemoteError):
        todo_service.simplify_todo(store, 1, decompose)

    assert store.load().todos == before


def test_simplify_without_credential(store, monkeypatch):
    monkeypatch.setattr(subtasks.settings, "OPENAI_API_KEY", "")
    store.save(store.load().model_copy(update={"todos": [Todo(id=1, text="Clean the garage")]}))

    with pytest.raises(ConfigurationError):
        todo_service.simplify_todo(store, 1)

    assert [t.text for t in store.load().todos] == ["Clean the garage"]
