"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional
from urllib.parse import urlparse, unquote
import sys

from ...exceptions import ErrorKind


GENERIC_UPLOAD_ERROR = "Failed to upload file"


def percent_of(sent: int, total: int) -> int:
    """
    Integer percentage of sent over total, rounded half up and clamped to 100.

    An empty total counts as complete.
    """
    if total <= 0:
        return 100
    sent = max(0, sent)
    return min(100, (sent * 200 + total) // (2 * total))


@dataclass(frozen=True)
class FileDescriptor:
    """
    A file chosen by the user.

    Attributes:
        uri: Opaque handle (local path or file:// URL for local pickers)
        name: Display/declared file name
        mime_type: Declared MIME type
        size_bytes: File size in bytes

    Example:
        >>> f = FileDescriptor("/tmp/a.pdf", "a.pdf", "application/pdf", 1024)
        >>> f.size_mb
        0.0009765625
    """
    uri: str
    name: str
    mime_type: str
    size_bytes: int

    def __post_init__(self):
        if self.size_bytes < 0:
            raise ValueError(f"File size cannot be negative: {self.size_bytes}")

    @property
    def size_mb(self) -> float:
        """Size in megabytes (MiB)."""
        return self.size_bytes / (1024 * 1024)

    @property
    def path(self) -> Path:
        """Local filesystem path behind the uri."""
        parsed = urlparse(self.uri)
        if parsed.scheme == 'file':
            return Path(unquote(parsed.path))
        return Path(self.uri)


@dataclass(frozen=True)
class ValidationResult:
    """Valid, or Invalid carrying the reason."""
    error: Optional[ErrorKind] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls()

    @classmethod
    def invalid(cls, reason: ErrorKind) -> 'ValidationResult':
        return cls(error=reason)


class SessionState(Enum):
    """Controller states. Success and failure collapse straight back to IDLE."""
    IDLE = 'idle'
    PICKING = 'picking'
    VALIDATING = 'validating'
    UPLOADING = 'uploading'


@dataclass
class UploadSession:
    """
    The single active upload attempt.

    Attributes:
        file: File being uploaded (None until a file is chosen)
        state: Current controller state
        progress_percent: Upload progress, 0-100, never decreasing
    """
    file: Optional[FileDescriptor] = None
    state: SessionState = SessionState.PICKING
    progress_percent: int = 0

    def advance(self, percent: int) -> bool:
        """
        Record progress.

        Returns:
            True if progress moved forward
        """
        percent = max(0, min(100, int(percent)))
        if percent <= self.progress_percent:
            return False
        self.progress_percent = percent
        return True


class OutcomeKind(Enum):
    SUCCESS = 'success'
    NETWORK_ERROR = 'network_error'
    SERVER_REJECTED = 'server_rejected'


@dataclass(frozen=True)
class UploadOutcome:
    """
    Result of a single upload attempt.

    Attributes:
        kind: How the attempt ended
        description: Server-supplied (or generic) message for rejections
        result: Parsed 'result' object of a successful response
    """
    kind: OutcomeKind
    description: Optional[str] = None
    result: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        """Pipeline error kind, None on success."""
        if self.kind is OutcomeKind.NETWORK_ERROR:
            return ErrorKind.NETWORK_ERROR
        if self.kind is OutcomeKind.SERVER_REJECTED:
            return ErrorKind.SERVER_REJECTED
        return None

    @classmethod
    def success(cls, result: Optional[Dict[str, Any]] = None) -> 'UploadOutcome':
        return cls(OutcomeKind.SUCCESS, result=result or {})

    @classmethod
    def network_error(cls) -> 'UploadOutcome':
        return cls(OutcomeKind.NETWORK_ERROR, description=GENERIC_UPLOAD_ERROR)

    @classmethod
    def server_rejected(cls, description: Optional[str] = None) -> 'UploadOutcome':
        return cls(OutcomeKind.SERVER_REJECTED, description=description or GENERIC_UPLOAD_ERROR)


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_bytes: Total file size
        sent_bytes: Bytes handed to the transport so far
    """
    total_bytes: int
    sent_bytes: int = 0

    @property
    def percentage(self) -> int:
        """Returns upload progress as a whole percentage."""
        return percent_of(self.sent_bytes, self.total_bytes)

    @property
    def is_complete(self) -> bool:
        """Returns True if every byte has been sent."""
        return self.sent_bytes >= self.total_bytes


class Platform(Enum):
    """Platforms with distinct storage permission models."""
    IOS = 'ios'
    ANDROID = 'android'
    DESKTOP = 'desktop'

    @classmethod
    def current(cls) -> 'Platform':
        """Best guess for the running interpreter."""
        if sys.platform == 'ios':
            return cls.IOS
        if sys.platform == 'android' or hasattr(sys, 'getandroidapilevel'):
            return cls.ANDROID
        return cls.DESKTOP


class PermissionStatus(Enum):
    GRANTED = 'granted'
    DENIED = 'denied'


@dataclass(frozen=True)
class Notification:
    """A single human-readable message for the user."""
    title: str
    message: str
    error: Optional[ErrorKind] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class AttemptReport:
    """
    Summary of one pick-and-upload attempt.

    Attributes:
        file: The chosen file (None when no file was picked)
        error: Error kind the attempt ended with (None on success)
        outcome: Uploader outcome, when an upload was made
        notification: Message shown to the user (None for silent endings)
    """
    file: Optional[FileDescriptor] = None
    error: Optional[ErrorKind] = None
    outcome: Optional[UploadOutcome] = None
    notification: Optional[Notification] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome is not None and self.outcome.is_success

    @property
    def cancelled(self) -> bool:
        return self.error is ErrorKind.PICKER_CANCELLED
