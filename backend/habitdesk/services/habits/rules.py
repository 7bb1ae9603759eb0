"""
Habit rules - miss penalty, week review cadence and streaks
These functions mutate AppData in memory only; callers persist it
"""
from typing import Iterable, List, Optional, Sequence, TypeVar
import itertools
import logging

from habitdesk.core.constants import WEEK_REVIEW_INTERVAL_DAYS, CALENDAR_WINDOW_DAYS
from habitdesk.core.exceptions import FormatError
from habitdesk.models import AppData, CalendarDay, DayRecord, Habit
from habitdesk.utils.dates import (
    dates_in_range,
    days_between,
    format_date,
    parse_date,
    resolve_today,
    shift_date,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def apply_miss_penalty(habit: Habit) -> None:
    """
    Reduce a habit's target after a missed day

    Targets of 3 or more drop by 2, a target of 2 drops to 1, and 1 stays put,
    so 5 -> 3 -> 2 -> 1.
    """
    if habit.quantity <= 1:
        return
    if habit.quantity >= 3:
        habit.quantity -= 2
    else:
        habit.quantity -= 1


def get_day_record(data: AppData, day: str) -> DayRecord:
    """Return the record for day, creating and attaching an empty one if needed"""
    record = data.history.get(day)
    if record is None:
        record = DayRecord(date=day)
        data.history[day] = record
    return record


def process_yesterday_misses(data: AppData, today: Optional[str] = None) -> List[int]:
    """
    Apply the miss penalty for yesterday, once per habit

    Every habit missing from yesterday's completed list that has not already
    been penalized for that day loses part of its target, and its id is
    recorded in penalty_applied_habits so later calls skip it. Only the single
    day before today is considered, however long the app went unopened. Habits
    created after that day are skipped.

    Args:
        data: Application state (mutated in place)
        today: Date string to treat as today; defaults to the real date

    Returns:
        IDs of the habits penalized by this call
    """
    day = shift_date(resolve_today(today), -1)
    record = data.history.get(day) or DayRecord(date=day)

    penalized = []
    for habit in data.habits:
        if habit.created_at is not None and format_date(habit.created_at.date()) > day:
            continue
        if habit.id in record.completed_habits:
            continue
        if habit.id in record.penalty_applied_habits:
            continue
        before = habit.quantity
        apply_miss_penalty(habit)
        record.penalty_applied_habits.append(habit.id)
        penalized.append(habit.id)
        logger.info(f"Missed '{habit.name}' on {day}: target {before} -> {habit.quantity}")

    if penalized:
        record.date = day
        data.history[day] = record
    return penalized


def get_last_week_review(data: AppData, today: Optional[str] = None) -> str:
    """
    The date the review cadence counts from

    Falls back to the app's creation date, then to a week before today.
    """
    if data.last_week_review:
        return data.last_week_review
    if data.created_at:
        return data.created_at
    return shift_date(resolve_today(today), -WEEK_REVIEW_INTERVAL_DAYS)


def needs_week_review(data: AppData, today: Optional[str] = None) -> bool:
    """
    True if seven or more days have passed since the last week review

    Raises:
        FormatError: If the stored anchor date is malformed
    """
    today = resolve_today(today)
    anchor = get_last_week_review(data, today)
    return days_between(anchor, today) >= WEEK_REVIEW_INTERVAL_DAYS


def complete_week_review(data: AppData, today: Optional[str] = None) -> None:
    """Increment every habit's target by 1 and restart the review cadence"""
    for habit in data.habits:
        habit.quantity += 1
    data.last_week_review = resolve_today(today)
    logger.info(f"Week review completed on {data.last_week_review} for {len(data.habits)} habits")


def get_streak_for_habit(data: AppData, habit_id: int, today: Optional[str] = None) -> int:
    """
    Count consecutive completed days ending yesterday

    Today is still in progress, so it never counts.
    """
    streak = 0
    day = shift_date(resolve_today(today), -1)
    while True:
        record = data.history.get(day)
        if record is None or habit_id not in record.completed_habits:
            break
        streak += 1
        day = shift_date(day, -1)
    return streak


def set_completion(data: AppData, habit_id: int, day: str, completed: bool = True) -> None:
    """Add or remove a habit from a day's completed list; repeating a call changes nothing"""
    record = get_day_record(data, day)
    if completed:
        if habit_id not in record.completed_habits:
            record.completed_habits.append(habit_id)
    else:
        record.completed_habits = [i for i in record.completed_habits if i != habit_id]


def is_completed(data: AppData, habit_id: int, day: str) -> bool:
    record = data.history.get(day)
    return record is not None and habit_id in record.completed_habits


def build_calendar(data: AppData, habit: Habit, today: Optional[str] = None) -> List[CalendarDay]:
    """
    Heatmap cells for a habit, one per day through today

    Starts at the habit's creation date (or the app's, for habits saved
    without one) but never more than CALENDAR_WINDOW_DAYS back.
    """
    today = resolve_today(today)
    if habit.created_at is not None:
        start = format_date(habit.created_at.date())
    else:
        start = today
        if data.created_at:
            try:
                start = format_date(parse_date(data.created_at))
            except FormatError:
                logger.warning(f"Ignoring malformed app creation date '{data.created_at}'")

    window_start = shift_date(today, -(CALENDAR_WINDOW_DAYS - 1))
    if start < window_start:
        start = window_start

    return [
        CalendarDay(date=day, done=is_completed(data, habit.id, day))
        for day in dates_in_range(start, today)
    ]


def next_id(entities: Sequence, reserved: Iterable[int] = ()) -> int:
    """Max existing id + 1, or 1 for an empty list; ids in reserved also count as taken"""
    return max(itertools.chain((e.id for e in entities), reserved), default=0) + 1


def assign_habit_id(data: AppData) -> int:
    """
    Hand out a new habit id and record it as the high-water mark

    Ids of deleted habits are never returned: the stored mark, the current
    habits and every id left in the history all count as taken.
    """
    referenced = itertools.chain.from_iterable(
        record.completed_habits + record.penalty_applied_habits
        for record in data.history.values()
    )
    habit_id = next_id(data.habits, itertools.chain(referenced, [data.last_habit_id]))
    data.last_habit_id = habit_id
    return habit_id


def assign_todo_id(data: AppData) -> int:
    """Hand out a new todo id and record it as the high-water mark"""
    todo_id = next_id(data.todos, [data.last_todo_id])
    data.last_todo_id = todo_id
    return todo_id


def find_by_id(entities: Sequence[T], entity_id: int) -> Optional[T]:
    for entity in entities:
        if entity.id == entity_id:
            return entity
    return None
