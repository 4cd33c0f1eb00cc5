"""
Protocol definitions for upload module.

Defines interfaces (protocols) for the external collaborators and the
pipeline stages, so each can be swapped or mocked independently.
"""
from typing import Protocol, Optional, AbstractSet, Callable, AsyncIterator, runtime_checkable
from pathlib import Path

from .models import (
    FileDescriptor,
    ValidationResult,
    UploadOutcome,
    Platform,
    PermissionStatus,
)
from ..config import RemoteConfig


ProgressCallback = Callable[[int], None]


@runtime_checkable
class FilePickerProtocol(Protocol):
    """
    Protocol for the platform file picker.

    Implementations show the OS picker (or any other selection UI).
    """

    async def pick(self, allowed_types: AbstractSet[str]) -> Optional[FileDescriptor]:
        """
        Let the user choose a single file.

        Args:
            allowed_types: MIME types the picker should offer

        Returns:
            Chosen file, or None when the user cancelled

        Raises:
            PickerCancelledError: Alternative way to signal cancellation
            Exception: Any platform failure
        """
        ...


@runtime_checkable
class PermissionPromptProtocol(Protocol):
    """Protocol for the platform permission prompt."""

    async def request(self, capability: str) -> str:
        """
        Ask the user for a capability.

        Args:
            capability: Platform capability identifier

        Returns:
            Status string; only 'granted' grants access
        """
        ...


class PermissionGateProtocol(Protocol):
    async def request_access(self, platform: Platform) -> PermissionStatus: ...


class FileSelectorProtocol(Protocol):
    async def pick_file(self, allowed_types: AbstractSet[str]) -> Optional[FileDescriptor]: ...


class FileValidatorProtocol(Protocol):
    """Protocol for file validation operations."""

    def validate(self, file: FileDescriptor, max_size_bytes: int) -> ValidationResult:
        """
        Apply size and type policy.

        Args:
            file: File to check
            max_size_bytes: Inclusive size limit

        Returns:
            Validation result
        """
        ...


class FileReaderProtocol(Protocol):
    """Protocol for streaming file content."""

    def iter_chunks(self, file_path: Path, chunk_size: int) -> AsyncIterator[bytes]:
        """
        Iterate over a file in chunks.

        Args:
            file_path: Path to the file
            chunk_size: Maximum chunk size in bytes
        """
        ...


class DocumentUploaderProtocol(Protocol):
    """Protocol for document transmission."""

    async def upload(
        self,
        file: FileDescriptor,
        config: RemoteConfig,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadOutcome:
        """
        Send a document and classify the response.

        Args:
            file: File to send
            config: Remote endpoint configuration
            on_progress: Advisory progress callback (percent)

        Returns:
            Outcome of the single attempt
        """
        ...


class LoggerProtocol(Protocol):
    """Protocol for logger objects."""

    def debug(self, msg: str) -> None: ...
    def info(self, msg: str) -> None: ...
    def warning(self, msg: str) -> None: ...
    def error(self, msg: str) -> None: ...
