"""
Pydantic models for habits
"""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class Habit(BaseModel):
    """A tracked habit with a daily target"""
    id: int
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, description="Daily target, never below 1")
    unit: str = Field("units", description="Display label for the quantity")
    created_at: Optional[datetime] = None

    @field_validator('created_at', mode='before')
    @classmethod
    def drop_zero_time(cls, v):
        """Older files store an unset creation time as year 1"""
        if isinstance(v, str) and v.startswith("0001-01-01"):
            return None
        return v


class DayRecord(BaseModel):
    """What happened on a single calendar day"""
    date: str = ""
    completed_habits: List[int] = Field(default_factory=list)
    week_review_done: bool = False
    penalty_applied_habits: List[int] = Field(default_factory=list)

    @field_validator('completed_habits', 'penalty_applied_habits', mode='before')
    @classmethod
    def null_as_empty(cls, v):
        return [] if v is None else v


class CalendarDay(BaseModel):
    """One heatmap cell"""
    date: str
    done: bool


class HabitView(BaseModel):
    """A habit with the values the dashboard displays next to it"""
    habit: Habit
    streak: int
    completed_today: bool
    calendar: List[CalendarDay]
