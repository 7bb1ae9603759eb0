"""
Health Routes - Liveness plus a check that the data file is readable
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from habitdesk.core.exceptions import StorageError
from habitdesk.core.dependencies import get_store
from habitdesk.services.repository import JsonStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(store: JsonStore = Depends(get_store)):
    """Report whether the stored state can be loaded"""
    try:
        data = store.load()
    except StorageError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "data_file": str(store.path), "detail": str(e)}
        )
    return {
        "status": "ok",
        "data_file": str(store.path),
        "habits": len(data.habits),
        "todos": len(data.todos)
    }
