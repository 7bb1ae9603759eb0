"""
Todos module - freeform to-do items
"""
from .service import add_todo, complete_todo, simplify_todo

__all__ = ['add_todo', 'complete_todo', 'simplify_todo']
