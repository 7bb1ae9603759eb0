"""
Dashboard view model
"""
from pydantic import BaseModel
from typing import List, Optional

from .habit import HabitView
from .todo import Todo


class DashboardView(BaseModel):
    """Everything the index page renders"""
    today: str
    habits: List[HabitView]
    todos: List[Todo]
    needs_week_review: bool
    last_week_review: str = ""
    message: Optional[str] = None
    error: Optional[str] = None
