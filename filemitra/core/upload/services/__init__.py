"""Upload services module."""
from .permission_service import PermissionGate
from .selector_service import FileSelector
from .file_service import FileValidator, AsyncFileReader
from .document_service import DocumentUploader, ProgressReporter, describe_result

__all__ = [
    'PermissionGate',
    'FileSelector',
    'FileValidator',
    'AsyncFileReader',
    'DocumentUploader',
    'ProgressReporter',
    'describe_result',
]
