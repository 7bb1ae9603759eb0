"""
Habits Service - Business logic for habit management
Each operation loads the document, mutates it and saves it in one store transaction
"""
from typing import Optional, Dict, Any
import logging

from habitdesk.core.constants import DEFAULT_HABIT_QUANTITY, DEFAULT_HABIT_UNIT
from habitdesk.core.exceptions import FormatError, HabitNotFoundError, ValidationError
from habitdesk.models import DashboardView, Habit, HabitView
from habitdesk.services.repository import JsonStore
from habitdesk.utils.dates import get_now, resolve_today
from . import rules

logger = logging.getLogger(__name__)


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Please enter a habit name.", field="name")
    return name


def _check_quantity(quantity: int) -> int:
    if quantity < 1:
        raise ValidationError("Quantity must be a positive number.", field="quantity")
    return quantity


def _require_habit(data, habit_id: int) -> Habit:
    habit = rules.find_by_id(data.habits, habit_id)
    if habit is None:
        raise HabitNotFoundError(f"Habit {habit_id} not found")
    return habit


def render_dashboard(store: JsonStore, message: Optional[str] = None,
                     error: Optional[str] = None, today: Optional[str] = None) -> DashboardView:
    """
    Build the dashboard, applying yesterday's miss penalties first

    Sets the app's creation date on first use, applies any pending miss
    penalty, saves, then computes streaks, calendars and the review flag.

    Args:
        store: The document store
        message: Optional success message to show
        error: Optional error message to show
        today: Date string to treat as today; defaults to the real date

    Returns:
        DashboardView ready for rendering

    Raises:
        StorageError: If the document cannot be read or written
    """
    today = resolve_today(today)

    with store.transaction() as data:
        if not data.created_at:
            data.created_at = today
        rules.process_yesterday_misses(data, today)

    try:
        review_due = rules.needs_week_review(data, today)
    except FormatError as e:
        logger.warning(f"Could not check week review: {e}")
        review_due = False

    habits = [
        HabitView(
            habit=habit,
            streak=rules.get_streak_for_habit(data, habit.id, today),
            completed_today=rules.is_completed(data, habit.id, today),
            calendar=rules.build_calendar(data, habit, today),
        )
        for habit in data.habits
    ]

    return DashboardView(
        today=today,
        habits=habits,
        todos=data.todos,
        needs_week_review=review_due,
        last_week_review=rules.get_last_week_review(data, today),
        message=message,
        error=error,
    )


def set_habit_completion(store: JsonStore, habit_id: int, completed: bool = True,
                         today: Optional[str] = None) -> Dict[str, Any]:
    """
    Mark a habit done (or not done) for today

    Raises:
        HabitNotFoundError: If the habit does not exist
        StorageError: If the document cannot be read or written
    """
    today = resolve_today(today)

    with store.transaction() as data:
        habit = _require_habit(data, habit_id)
        rules.set_completion(data, habit_id, today, completed)

    state = "complete" if completed else "not complete"
    return {
        "status": "success",
        "message": f"Habit '{habit.name}' marked {state} for {today}",
        "habit_id": habit_id,
        "completed": completed
    }


def complete_week_review(store: JsonStore, today: Optional[str] = None) -> Dict[str, Any]:
    """Increment every habit's target and restart the 7-day cadence"""
    today = resolve_today(today)

    with store.transaction() as data:
        rules.complete_week_review(data, today)
        count = len(data.habits)

    return {
        "status": "success",
        "message": f"Week review complete. {count} habits incremented",
        "last_week_review": today
    }


def add_habit(store: JsonStore, name: str, quantity: Optional[int] = None,
              unit: Optional[str] = None) -> Dict[str, Any]:
    """
    Add a new habit

    Args:
        store: The document store
        name: Habit name (required)
        quantity: Daily target; defaults to 5
        unit: Display unit; defaults to "units"

    Returns:
        Dict with status, message, and the created habit

    Raises:
        ValidationError: If the name is blank or the quantity is not positive
        StorageError: If the document cannot be read or written
    """
    name = _clean_name(name)
    quantity = DEFAULT_HABIT_QUANTITY if quantity is None else _check_quantity(quantity)
    unit = (unit or "").strip() or DEFAULT_HABIT_UNIT

    with store.transaction() as data:
        habit = Habit(
            id=rules.assign_habit_id(data),
            name=name,
            quantity=quantity,
            unit=unit,
            created_at=get_now(),
        )
        data.habits.append(habit)

    logger.info(f"Added habit {habit.id} '{name}' ({quantity} {unit})")
    return {
        "status": "success",
        "message": f"Habit '{name}' added",
        "data": habit.model_dump(mode="json")
    }


def edit_habit(store: JsonStore, habit_id: int, name: Optional[str] = None,
               quantity: Optional[int] = None, unit: Optional[str] = None) -> Dict[str, Any]:
    """
    Update a habit's name, quantity and/or unit

    Fields left as None are not changed. A blank unit also counts as unchanged.

    Raises:
        HabitNotFoundError: If the habit does not exist
        ValidationError: If a supplied name is blank or a supplied quantity is not positive
        StorageError: If the document cannot be read or written
    """
    if name is not None:
        name = _clean_name(name)
    if quantity is not None:
        _check_quantity(quantity)
    unit = (unit or "").strip() or None

    with store.transaction() as data:
        habit = _require_habit(data, habit_id)
        if name is not None:
            habit.name = name
        if quantity is not None:
            habit.quantity = quantity
        if unit is not None:
            habit.unit = unit

    return {
        "status": "success",
        "message": f"Habit '{habit.name}' updated",
        "data": habit.model_dump(mode="json")
    }


def delete_habit(store: JsonStore, habit_id: int) -> Dict[str, Any]:
    """
    Remove a habit

    Its id is left in historical day records.

    Raises:
        HabitNotFoundError: If the habit does not exist
        StorageError: If the document cannot be read or written
    """
    with store.transaction() as data:
        habit = _require_habit(data, habit_id)
        data.habits = [h for h in data.habits if h.id != habit_id]

    logger.info(f"Deleted habit {habit_id} '{habit.name}'")
    return {
        "status": "success",
        "message": f"Habit '{habit.name}' removed",
        "habit_id": habit_id
    }
