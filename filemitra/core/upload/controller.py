"""
Upload controller.

Drives one pick-validate-upload attempt at a time through an explicit
state machine and publishes every change to observers.
"""
from typing import Callable, Optional

from .models import (
    AttemptReport,
    FileDescriptor,
    GENERIC_UPLOAD_ERROR,
    Notification,
    PermissionStatus,
    Platform,
    SessionState,
    UploadSession,
)
from .protocols import (
    DocumentUploaderProtocol,
    FileSelectorProtocol,
    FileValidatorProtocol,
    LoggerProtocol,
    PermissionGateProtocol,
)
from .registry import TypeRegistry, default_registry
from .services import DocumentUploader, FileValidator
from ..config import MAX_FILE_SIZE, RemoteConfig
from ..events import EventEmitter
from ..exceptions import ErrorKind, PickerFailedError
from ..logging import get_logger

# Events published by the controller
STATE = 'state'
FILE_SELECTED = 'file_selected'
PROGRESS = 'progress'
NOTIFICATION = 'notification'
COMPLETED = 'completed'

SUCCESS_NOTIFICATION = Notification('Success', 'File uploaded successfully')


def format_limit(max_size_bytes: int) -> str:
    """Render a byte limit the way users read it, e.g. '10MB'."""
    mb = max_size_bytes / (1024 * 1024)
    if mb == int(mb):
        return f"{int(mb)}MB"
    return f"{mb:.1f}MB"


def build_notification(
    kind: ErrorKind,
    max_size_bytes: int = MAX_FILE_SIZE,
    description: Optional[str] = None
) -> Optional[Notification]:
    """
    User-facing message for an error kind.

    Args:
        kind: Error the attempt ended with
        max_size_bytes: Size limit quoted in FILE_TOO_LARGE messages
        description: Server-supplied message for upload failures

    Returns:
        Notification, or None for silent kinds
    """
    if kind.is_silent:
        return None
    if kind is ErrorKind.PERMISSION_DENIED:
        return Notification('Permission Required', 'Storage access is needed to pick files', kind)
    if kind is ErrorKind.PICKER_FAILED:
        return Notification('Error', 'Failed to pick file', kind)
    if kind is ErrorKind.FILE_TOO_LARGE:
        return Notification('Error', f'File size must be less than {format_limit(max_size_bytes)}', kind)
    if kind is ErrorKind.UNSUPPORTED_TYPE:
        return Notification('Error', 'Unsupported file type', kind)
    return Notification('Error', description or GENERIC_UPLOAD_ERROR, kind)


class UploadController:
    """
    Orchestrates permission, selection, validation and upload.

    States: IDLE -> PICKING -> VALIDATING -> UPLOADING -> IDLE. Every
    attempt ends back in IDLE, whatever happened, so the controller can
    always be triggered again. Requests made while an attempt is running
    are ignored.

    Example:
        >>> controller = UploadController(config, PermissionGate(prompt), FileSelector(picker))
        >>> controller.on('progress', lambda p: print(f"{p}%"))
        >>> report = await controller.request_pick()
    """

    def __init__(
        self,
        config: RemoteConfig,
        permission_gate: PermissionGateProtocol,
        file_selector: FileSelectorProtocol,
        validator: Optional[FileValidatorProtocol] = None,
        uploader: Optional[DocumentUploaderProtocol] = None,
        registry: Optional[TypeRegistry] = None,
        max_size_bytes: int = MAX_FILE_SIZE,
        platform: Optional[Platform] = None,
        logger: Optional[LoggerProtocol] = None
    ):
        """
        Initialize upload controller.

        Args:
            config: Remote endpoint configuration, injected into the uploader
            permission_gate: Storage permission gate
            file_selector: File selector
            validator: File validator (defaults to FileValidator over registry)
            uploader: Document uploader (defaults to a DocumentUploader owned by the controller)
            registry: Supported types (defaults to the built-in registry)
            max_size_bytes: Inclusive file size limit
            platform: Platform to request permission for (detected if omitted)
            logger: Logger instance
        """
        self._config = config
        self._permission_gate = permission_gate
        self._selector = file_selector
        self._registry = registry or default_registry
        self._validator = validator or FileValidator(self._registry)
        self._owns_uploader = uploader is None
        self._uploader = uploader or DocumentUploader()
        self._max_size_bytes = max_size_bytes
        self._platform = platform or Platform.current()
        self._logger = logger or get_logger('filemitra.upload.controller')

        self._events = EventEmitter('filemitra.upload.events')
        self._state = SessionState.IDLE
        self._session: Optional[UploadSession] = None

    async def __aenter__(self) -> 'UploadController':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the uploader if the controller created it."""
        if self._owns_uploader and isinstance(self._uploader, DocumentUploader):
            await self._uploader.close()

    def on(self, event: str, callback: Callable) -> 'UploadController':
        """Register an observer for a controller event."""
        self._events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'UploadController':
        """Remove an observer."""
        self._events.off(event, callback)
        return self

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def session(self) -> Optional[UploadSession]:
        return self._session

    @property
    def progress_percent(self) -> int:
        return self._session.progress_percent if self._session else 0

    @property
    def can_pick(self) -> bool:
        """Whether the pick trigger should be enabled."""
        return self._state is SessionState.IDLE

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    async def request_pick(self) -> Optional[AttemptReport]:
        """
        Run one complete attempt.

        Returns:
            Report of the attempt, or None if an attempt was already running
        """
        if not self.can_pick:
            self._logger.warning(f"Pick request ignored while {self._state.value}")
            return None

        # claimed before the first await
        self._session = UploadSession()
        self._transition(SessionState.PICKING)
        try:
            report = await self._run_attempt()
        finally:
            self._session = None
            self._transition(SessionState.IDLE)

        if report.notification is not None:
            self._events.emit(NOTIFICATION, report.notification)
        self._events.emit(COMPLETED, report)
        return report

    async def _run_attempt(self) -> AttemptReport:
        status = await self._permission_gate.request_access(self._platform)
        if status is not PermissionStatus.GRANTED:
            self._logger.info("Storage permission denied")
            return self._failure(ErrorKind.PERMISSION_DENIED)

        try:
            file = await self._selector.pick_file(self._registry.mime_types)
        except PickerFailedError:
            return self._failure(ErrorKind.PICKER_FAILED)

        if file is None:
            return AttemptReport(error=ErrorKind.PICKER_CANCELLED)

        self._session.file = file
        self._events.emit(FILE_SELECTED, file)

        self._transition(SessionState.VALIDATING)
        result = self._validator.validate(file, self._max_size_bytes)
        if not result.is_valid:
            self._logger.info(f"{file.name} rejected: {result.error.value}")
            return self._failure(result.error, file)

        self._transition(SessionState.UPLOADING)
        outcome = await self._uploader.upload(file, self._config, self._on_progress)

        if outcome.is_success:
            return AttemptReport(file=file, outcome=outcome, notification=SUCCESS_NOTIFICATION)

        kind = outcome.error_kind
        return AttemptReport(
            file=file,
            error=kind,
            outcome=outcome,
            notification=build_notification(kind, self._max_size_bytes, outcome.description)
        )

    def _failure(self, kind: ErrorKind, file: Optional[FileDescriptor] = None) -> AttemptReport:
        return AttemptReport(
            file=file,
            error=kind,
            notification=build_notification(kind, self._max_size_bytes)
        )

    def _on_progress(self, percent: int) -> None:
        session = self._session
        if session is None or self._state is not SessionState.UPLOADING:
            return
        if session.advance(percent):
            self._events.emit(PROGRESS, session.progress_percent)

    def _transition(self, state: SessionState) -> None:
        self._logger.debug(f"State {self._state.value} -> {state.value}")
        self._state = state
        if self._session is not None:
            self._session.state = state
        self._events.emit(STATE, state)
