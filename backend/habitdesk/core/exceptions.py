"""
Custom Exceptions - Application-specific error types
"""
from typing import Optional


class HabitDeskException(Exception):
    """Base exception for all habitdesk errors"""
    pass


class NotFoundError(HabitDeskException):
    """Raised when a referenced habit or todo does not exist"""
    pass


class HabitNotFoundError(NotFoundError):
    """Raised when a habit cannot be found"""
    pass


class TodoNotFoundError(NotFoundError):
    """Raised when a todo cannot be found"""
    pass


class ValidationError(HabitDeskException):
    """Raised when user-supplied data is missing or out of range"""

    def __init__(self, message: str, field: str = "invalid"):
        super().__init__(message)
        self.field = field


class StorageError(HabitDeskException):
    """Raised when the data file cannot be read or written"""
    pass


class FormatError(HabitDeskException):
    """Raised when a date string is not YYYY-MM-DD"""
    pass


class ExternalServiceError(HabitDeskException):
    """Raised when the subtask decomposition service fails"""
    pass


class ConfigurationError(ExternalServiceError):
    """Raised when no API credential is configured"""
    pass


class TransportError(ExternalServiceError):
    """Raised when the network call to the service fails"""
    pass


class RemoteError(ExternalServiceError):
    """Raised when the service answers with a non-success status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(ExternalServiceError):
    """Raised when no usable subtasks can be read from a response"""
    pass
