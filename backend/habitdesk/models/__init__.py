"""
Pydantic models for the persisted document and the dashboard view
"""
from .habit import Habit, DayRecord, CalendarDay, HabitView
from .todo import Todo
from .app_data import AppData
from .dashboard import DashboardView

__all__ = [
    'Habit',
    'DayRecord',
    'CalendarDay',
    'HabitView',
    'Todo',
    'AppData',
    'DashboardView',
]
