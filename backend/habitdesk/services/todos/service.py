"""
Todos Service - Adding, completing and simplifying to-do items
"""
from typing import Callable, Dict, Any, List, Optional
import logging

from habitdesk.core.exceptions import TodoNotFoundError, ValidationError
from habitdesk.models import Todo
from habitdesk.services.external.subtasks import break_into_subtasks
from habitdesk.services.habits.rules import assign_todo_id, find_by_id
from habitdesk.services.repository import JsonStore
from habitdesk.utils.dates import get_now

logger = logging.getLogger(__name__)


def _index_of(todos: List[Todo], todo_id: int) -> int:
    for i, todo in enumerate(todos):
        if todo.id == todo_id:
            return i
    raise TodoNotFoundError(f"Todo {todo_id} not found")


def add_todo(store: JsonStore, text: str) -> Dict[str, Any]:
    """
    Add a to-do item

    Raises:
        ValidationError: If the text is blank
        StorageError: If the document cannot be read or written
    """
    text = text.strip()
    if not text:
        raise ValidationError("Please enter a todo.", field="text")

    with store.transaction() as data:
        todo = Todo(id=assign_todo_id(data), text=text, created_at=get_now())
        data.todos.append(todo)

    return {
        "status": "success",
        "message": f"Todo '{text}' added",
        "data": todo.model_dump(mode="json")
    }


def complete_todo(store: JsonStore, todo_id: int) -> Dict[str, Any]:
    """
    Complete a to-do item, which removes it from the list

    Raises:
        TodoNotFoundError: If the todo does not exist
        StorageError: If the document cannot be read or written
    """
    with store.transaction() as data:
        todo = data.todos.pop(_index_of(data.todos, todo_id))

    return {
        "status": "success",
        "message": f"Todo '{todo.text}' completed",
        "todo_id": todo_id
    }


def simplify_todo(store: JsonStore, todo_id: int,
                  decompose: Optional[Callable[[str], List[str]]] = None) -> Dict[str, Any]:
    """
    Replace a to-do item with up to three simpler ones

    The decomposition call runs outside the store lock. The new todos take
    the old todo's place in the list, in the order the service returned them.

    Args:
        store: The document store
        todo_id: Todo to simplify
        decompose: Function turning a task into subtasks; defaults to the OpenAI-backed one

    Returns:
        Dict with status, message, and the new todos

    Raises:
        TodoNotFoundError: If the todo does not exist (before or after the call)
        ExternalServiceError: If decomposition fails; the todo list is left unchanged
        StorageError: If the document cannot be read or written
    """
    decompose = decompose or break_into_subtasks

    todo = find_by_id(store.load().todos, todo_id)
    if todo is None:
        raise TodoNotFoundError(f"Todo {todo_id} not found")

    subtasks = decompose(todo.text)

    with store.transaction() as data:
        index = _index_of(data.todos, todo_id)
        now = get_now()
        new_todos = []
        for text in subtasks:
            new_todos.append(Todo(id=assign_todo_id(data), text=text, created_at=now))
        data.todos[index:index + 1] = new_todos

    logger.info(f"Simplified todo {todo_id} into {len(new_todos)} subtasks")
    return {
        "status": "success",
        "message": f"Todo '{todo.text}' split into {len(new_todos)} subtasks",
        "data": [t.model_dump(mode="json") for t in new_todos]
    }
