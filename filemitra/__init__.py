"""
FileMitra - send local files to a Telegram chat as documents.

Usage:
    >>> from filemitra import RemoteConfig, UploadController, PermissionGate, FileSelector
    >>> 
    >>> config = RemoteConfig.from_env()
    >>> async with UploadController(config, PermissionGate(prompt), FileSelector(picker)) as controller:
    ...     report = await controller.request_pick()
"""
import logging

from .core.config import RemoteConfig, TimeoutConfig, MAX_FILE_SIZE
from .core.logging import ROOT_LOGGER_NAME
from .core.exceptions import (
    ErrorKind,
    FileMitraException,
    ConfigurationError,
    PickerCancelledError,
    PickerFailedError,
)
from .core.events import EventEmitter
from .core.upload import (
    UploadController,
    TypeRegistry,
    PermissionGate,
    FileSelector,
    FileValidator,
    DocumentUploader,
    FileDescriptor,
    ValidationResult,
    SessionState,
    UploadOutcome,
    OutcomeKind,
    Platform,
    PermissionStatus,
    Notification,
    AttemptReport,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for filemitra modules.
    
    This ensures that all filemitra loggers are properly configured
    to show log messages at the specified level.
    
    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        ROOT_LOGGER_NAME,
        'filemitra.cli',
        'filemitra.config',
        'filemitra.events',
        'filemitra.upload',
        'filemitra.upload.permission',
        'filemitra.upload.selector',
        'filemitra.upload.file',
        'filemitra.upload.document',
        'filemitra.upload.controller',
        'filemitra.upload.events',
    ]
    
    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Ensure propagation is enabled
        logger.propagate = True


__all__ = [
    'RemoteConfig',
    'TimeoutConfig',
    'MAX_FILE_SIZE',
    'ErrorKind',
    'FileMitraException',
    'ConfigurationError',
    'PickerCancelledError',
    'PickerFailedError',
    'EventEmitter',
    'UploadController',
    'TypeRegistry',
    'PermissionGate',
    'FileSelector',
    'FileValidator',
    'DocumentUploader',
    'FileDescriptor',
    'ValidationResult',
    'SessionState',
    'UploadOutcome',
    'OutcomeKind',
    'Platform',
    'PermissionStatus',
    'Notification',
    'AttemptReport',
    'setup_logging',
]
