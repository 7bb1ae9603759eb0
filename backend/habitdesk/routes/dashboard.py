"""
Dashboard Routes - The index page and its JSON twin
"""
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.templating import Jinja2Templates

from habitdesk.core.dependencies import get_store
from habitdesk.core.exceptions import StorageError
from habitdesk.models import DashboardView
from habitdesk.services import habits as habit_service
from habitdesk.services.repository import JsonStore

router = APIRouter(tags=["dashboard"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

SUCCESS_MESSAGES = {
    "done": "Habit marked complete for today!",
    "undone": "Habit unmarked for today.",
    "review": "Week review complete. All habits incremented!",
    "added": "Habit added!",
    "edited": "Habit updated!",
    "deleted": "Habit deleted.",
    "todo_added": "Todo added!",
    "todo_done": "Todo completed!",
    "simplified": "Todo split into simpler steps!",
}

ERROR_MESSAGES = {
    "name": "Please enter a habit name.",
    "quantity": "Quantity must be a positive whole number.",
    "text": "Please enter a todo.",
    "invalid": "Invalid request.",
    "notfound": "That item no longer exists.",
    "simplify": "Could not simplify the todo.",
}


def _flash(request: Request) -> tuple[Optional[str], Optional[str]]:
    """Turn the query flags set by a redirect into (message, error)"""
    params = request.query_params

    error = None
    code = params.get("error")
    if code:
        error = ERROR_MESSAGES.get(code, ERROR_MESSAGES["invalid"])
        detail = params.get("detail")
        if detail:
            error = f"{error} {detail}"

    message = None
    for flag, text in SUCCESS_MESSAGES.items():
        if params.get(flag) == "1":
            message = text
            break

    return message, error


def _load_view(request: Request, store: JsonStore) -> DashboardView:
    message, error = _flash(request)
    try:
        return habit_service.render_dashboard(store, message=message, error=error)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/")
def index(request: Request, store: JsonStore = Depends(get_store)):
    """Render the habits and todos page"""
    view = _load_view(request, store)
    return templates.TemplateResponse(request, "index.html", {"view": view})


@router.get("/api/dashboard", response_model=DashboardView)
def dashboard_json(request: Request, store: JsonStore = Depends(get_store)):
    """Same data as the index page, as JSON"""
    return _load_view(request, store)
