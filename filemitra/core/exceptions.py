"""
Error taxonomy and custom exceptions for FileMitra operations.

Exceptions stay inside the upload pipeline: the controller turns them into
user notifications. Only configuration errors reach the entry point.
"""
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Every way an upload attempt can end without success."""
    PERMISSION_DENIED = 'permission_denied'
    PICKER_CANCELLED = 'picker_cancelled'  # silent, not reported
    PICKER_FAILED = 'picker_failed'
    FILE_TOO_LARGE = 'file_too_large'
    UNSUPPORTED_TYPE = 'unsupported_type'
    NETWORK_ERROR = 'network_error'
    SERVER_REJECTED = 'server_rejected'
    
    @property
    def is_silent(self) -> bool:
        """True for kinds that must not be shown to the user."""
        return self is ErrorKind.PICKER_CANCELLED


class FileMitraException(Exception):
    """Base exception for all FileMitra errors."""
    
    def __init__(self, message: str, kind: Optional[ErrorKind] = None) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Error message
            kind: Pipeline error kind (if the error maps to one)
        """
        self.kind = kind
        super().__init__(message)


class ConfigurationError(FileMitraException):
    """Raised when the remote configuration is missing or malformed."""
    pass


class PickerCancelledError(FileMitraException):
    """Raised by a picker collaborator when the user dismisses it."""
    
    def __init__(self, message: str = "File selection cancelled") -> None:
        super().__init__(message, ErrorKind.PICKER_CANCELLED)


class PickerFailedError(FileMitraException):
    """Raised when the file picker fails for a reason other than cancellation."""
    
    def __init__(self, message: str = "Failed to pick file") -> None:
        super().__init__(message, ErrorKind.PICKER_FAILED)
