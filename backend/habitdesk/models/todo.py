"""
Pydantic models for todos
"""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class Todo(BaseModel):
    """A freeform to-do item; removed from the list once completed"""
    id: int
    text: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None
