"""
Habit Routes - Form endpoints for habit management
Every endpoint redirects back to the dashboard with a flash flag
"""
from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException

from habitdesk.core.dependencies import get_store
from habitdesk.core.exceptions import NotFoundError, StorageError, ValidationError
from habitdesk.services import habits as habit_service
from habitdesk.services.repository import JsonStore
from .forms import parse_id, parse_quantity, redirect_home

router = APIRouter(tags=["habits"])


@router.post("/complete")
def complete_habit(
    habit_id: Optional[str] = Form(None),
    action: Optional[str] = Form(None),
    store: JsonStore = Depends(get_store),
):
    """Mark a habit done for today, or undo it with action=uncomplete"""
    completed = action != "uncomplete"
    try:
        habit_service.set_habit_completion(store, parse_id(habit_id), completed)
    except ValidationError as e:
        return redirect_home(error=e.field)
    except NotFoundError:
        return redirect_home(error="notfound")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(**{"done" if completed else "undone": 1})


@router.post("/week-review")
def week_review(store: JsonStore = Depends(get_store)):
    """Complete the 7-day review (every habit +1)"""
    try:
        habit_service.complete_week_review(store)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(review=1)


@router.post("/add-habit")
def add_habit(
    name: str = Form(""),
    quantity: Optional[str] = Form(None),
    unit: Optional[str] = Form(None),
    store: JsonStore = Depends(get_store),
):
    """Add a new habit"""
    try:
        habit_service.add_habit(store, name, parse_quantity(quantity), unit)
    except ValidationError as e:
        return redirect_home(error=e.field)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(added=1)


@router.post("/edit-habit")
def edit_habit(
    habit_id: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    quantity: Optional[str] = Form(None),
    unit: Optional[str] = Form(None),
    store: JsonStore = Depends(get_store),
):
    """Edit a habit's name, quantity or unit; omitted fields are kept"""
    try:
        habit_service.edit_habit(store, parse_id(habit_id), name, parse_quantity(quantity), unit)
    except ValidationError as e:
        return redirect_home(error=e.field)
    except NotFoundError:
        return redirect_home(error="notfound")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(edited=1)


@router.post("/delete-habit")
def delete_habit(habit_id: Optional[str] = Form(None), store: JsonStore = Depends(get_store)):
    """Delete a habit"""
    try:
        habit_service.delete_habit(store, parse_id(habit_id))
    except ValidationError as e:
        return redirect_home(error=e.field)
    except NotFoundError:
        return redirect_home(error="notfound")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(deleted=1)
