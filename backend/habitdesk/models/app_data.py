"""
Root document persisted by the store
"""
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List

from .habit import Habit, DayRecord
from .todo import Todo


class AppData(BaseModel):
    """The whole application state, loaded and saved as one document"""
    habits: List[Habit] = Field(default_factory=list)
    todos: List[Todo] = Field(default_factory=list)
    history: Dict[str, DayRecord] = Field(default_factory=dict)
    last_week_review: str = ""
    created_at: str = ""
    # Highest ids ever handed out; ids are never reused after deletion
    last_habit_id: int = 0
    last_todo_id: int = 0

    @field_validator('habits', 'todos', 'history', mode='before')
    @classmethod
    def null_as_empty(cls, v, info):
        if v is None:
            return {} if info.field_name == 'history' else []
        return v

    @field_validator('last_week_review', 'created_at', mode='before')
    @classmethod
    def null_as_blank(cls, v):
        return "" if v is None else v

    @field_validator('last_habit_id', 'last_todo_id', mode='before')
    @classmethod
    def null_as_zero(cls, v):
        return 0 if v is None else v
