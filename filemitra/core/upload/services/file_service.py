"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import AsyncIterator, Optional

import aiofiles

from ..models import FileDescriptor, ValidationResult
from ..registry import TypeRegistry, default_registry
from ...exceptions import ErrorKind
from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Rules, first failure wins:
    - Size above the limit (the limit itself is allowed)
    - MIME type not in the registry
    """

    def __init__(self, registry: Optional[TypeRegistry] = None):
        self._registry = registry or default_registry

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def validate(self, file: FileDescriptor, max_size_bytes: int) -> ValidationResult:
        """
        Validate a file for upload.

        Args:
            file: File descriptor from the picker
            max_size_bytes: Inclusive size limit

        Returns:
            ValidationResult, Invalid with FILE_TOO_LARGE or UNSUPPORTED_TYPE
        """
        if file.size_bytes > max_size_bytes:
            return ValidationResult.invalid(ErrorKind.FILE_TOO_LARGE)

        if not self._registry.is_supported(file.mime_type):
            return ValidationResult.invalid(ErrorKind.UNSUPPORTED_TYPE)

        return ValidationResult.valid()


class AsyncFileReader:
    """
    Asynchronous file reader for streaming uploads.

    Uses aiofiles for non-blocking I/O operations.
    """

    DEFAULT_CHUNK_SIZE = 64 * 1024

    def __init__(self):
        """Initialize file reader."""
        self._logger = get_logger('filemitra.upload.file')

    async def iter_chunks(
        self,
        file_path: Path,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ) -> AsyncIterator[bytes]:
        """
        Read a file sequentially.

        Args:
            file_path: Path to the file
            chunk_size: Maximum bytes per chunk

        Yields:
            Non-empty chunks in file order

        Raises:
            OSError: If the file cannot be opened or read
        """
        async with aiofiles.open(file_path, 'rb') as f:
            while True:
                data = await f.read(chunk_size)
                if not data:
                    break
                self._logger.debug(f"Read {len(data)} bytes from {file_path.name}")
                yield data
