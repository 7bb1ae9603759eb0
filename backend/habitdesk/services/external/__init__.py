"""
External integrations module
Handles the connection to the text-generation service
"""
from . import subtasks

__all__ = ['subtasks']
