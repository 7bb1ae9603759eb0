"""
Habits module - Core habit management functionality
"""
from . import rules
from . import service

from .service import (
    render_dashboard,
    set_habit_completion,
    complete_week_review,
    add_habit,
    edit_habit,
    delete_habit
)

__all__ = [
    'rules',
    'service',
    'render_dashboard',
    'set_habit_completion',
    'complete_week_review',
    'add_habit',
    'edit_habit',
    'delete_habit',
]
