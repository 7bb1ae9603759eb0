"""
Todo Routes - Form endpoints for to-do items
"""
from typing import Callable, List, Optional
import logging

from fastapi import APIRouter, Depends, Form, HTTPException

from habitdesk.core.dependencies import get_store
from habitdesk.core.exceptions import (
    ExternalServiceError,
    NotFoundError,
    StorageError,
    ValidationError
)
from habitdesk.services import todos as todo_service
from habitdesk.services.external.subtasks import break_into_subtasks
from habitdesk.services.repository import JsonStore
from .forms import parse_id, redirect_home

logger = logging.getLogger(__name__)

router = APIRouter(tags=["todos"])


def get_subtask_decomposer() -> Callable[[str], List[str]]:
    """Function used to split a todo into subtasks"""
    return break_into_subtasks


@router.post("/add-todo")
def add_todo(text: str = Form(""), store: JsonStore = Depends(get_store)):
    """Add a todo"""
    try:
        todo_service.add_todo(store, text)
    except ValidationError as e:
        return redirect_home(error=e.field)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(todo_added=1)


@router.post("/complete-todo")
def complete_todo(todo_id: Optional[str] = Form(None), store: JsonStore = Depends(get_store)):
    """Complete (remove) a todo"""
    try:
        todo_service.complete_todo(store, parse_id(todo_id))
    except ValidationError as e:
        return redirect_home(error=e.field)
    except NotFoundError:
        return redirect_home(error="notfound")
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(todo_done=1)


@router.post("/simplify-todo")
def simplify_todo(
    todo_id: Optional[str] = Form(None),
    store: JsonStore = Depends(get_store),
    decompose: Callable[[str], List[str]] = Depends(get_subtask_decomposer),
):
    """Replace a todo with up to three simpler ones"""
    try:
        todo_service.simplify_todo(store, parse_id(todo_id), decompose)
    except ValidationError as e:
        return redirect_home(error=e.field)
    except NotFoundError:
        return redirect_home(error="notfound")
    except ExternalServiceError as e:
        logger.warning(f"Simplify failed for todo {todo_id}: {e}")
        return redirect_home(error="simplify", detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return redirect_home(simplified=1)
