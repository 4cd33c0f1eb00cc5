"""Upload models."""
from .upload_models import (
    FileDescriptor,
    ValidationResult,
    SessionState,
    UploadSession,
    OutcomeKind,
    UploadOutcome,
    UploadProgress,
    Platform,
    PermissionStatus,
    Notification,
    AttemptReport,
    percent_of,
    GENERIC_UPLOAD_ERROR,
)

__all__ = [
    'FileDescriptor',
    'ValidationResult',
    'SessionState',
    'UploadSession',
    'OutcomeKind',
    'UploadOutcome',
    'UploadProgress',
    'Platform',
    'PermissionStatus',
    'Notification',
    'AttemptReport',
    'percent_of',
    'GENERIC_UPLOAD_ERROR',
]
