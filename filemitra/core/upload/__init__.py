"""
Upload module for sending documents to the chat platform.

Pipeline: PermissionGate -> FileSelector -> FileValidator -> DocumentUploader,
driven by UploadController.
"""
from .controller import UploadController, build_notification
from .registry import TypeRegistry, default_registry, SUPPORTED_TYPES
from .services import PermissionGate, FileSelector, FileValidator, DocumentUploader
from .models import (
    FileDescriptor,
    ValidationResult,
    SessionState,
    UploadSession,
    UploadOutcome,
    OutcomeKind,
    UploadProgress,
    Platform,
    PermissionStatus,
    Notification,
    AttemptReport,
)
from .protocols import FilePickerProtocol, PermissionPromptProtocol, ProgressCallback

__all__ = [
    # Main classes
    'UploadController',
    'build_notification',
    'TypeRegistry',
    'default_registry',
    'SUPPORTED_TYPES',
    'PermissionGate',
    'FileSelector',
    'FileValidator',
    'DocumentUploader',
    
    # Models
    'FileDescriptor',
    'ValidationResult',
    'SessionState',
    'UploadSession',
    'UploadOutcome',
    'OutcomeKind',
    'UploadProgress',
    'Platform',
    'PermissionStatus',
    'Notification',
    'AttemptReport',
    
    # Protocols
    'FilePickerProtocol',
    'PermissionPromptProtocol',
    'ProgressCallback',
]
