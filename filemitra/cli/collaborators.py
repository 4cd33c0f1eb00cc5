"""Console stand-ins for the platform file picker and permission prompt."""
import asyncio
import mimetypes
from pathlib import Path
from typing import AbstractSet, Optional

import typer

from filemitra.core.logging import get_logger
from filemitra.core.upload.models import FileDescriptor

logger = get_logger('filemitra.cli')

FALLBACK_MIME_TYPE = 'application/octet-stream'


def describe_file(path: Path) -> FileDescriptor:
    """
    Build a descriptor for a local file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        IsADirectoryError: If the path is a directory
    """
    path = path.expanduser()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if not path.is_file():
        raise IsADirectoryError(f"Path is not a file: {path}")

    mime_type, _ = mimetypes.guess_type(path.name)
    return FileDescriptor(
        uri=str(path.resolve()),
        name=path.name,
        mime_type=mime_type or FALLBACK_MIME_TYPE,
        size_bytes=path.stat().st_size
    )


class PathFilePicker:
    """
    Picks the file given on the command line, or asks for a path.

    An empty answer counts as cancellation.
    """

    def __init__(self, path: Optional[Path] = None):
        self._path = path

    async def pick(self, allowed_types: AbstractSet[str]) -> Optional[FileDescriptor]:
        path = self._path
        if path is None:
            answer = await asyncio.to_thread(
                typer.prompt, "File path", default="", show_default=False
            )
            if not answer.strip():
                return None
            path = Path(answer.strip())

        file = describe_file(path)
        if file.mime_type not in allowed_types:
            logger.debug(f"{file.name} has type {file.mime_type}, outside the picker filter")
        return file


class ConfirmPermissionPrompt:
    """Asks on the terminal before any file is read."""

    def __init__(self, assume_yes: bool = False):
        self._assume_yes = assume_yes

    async def request(self, capability: str) -> str:
        if self._assume_yes:
            return 'granted'
        allowed = await asyncio.to_thread(
            typer.confirm, "Allow FileMitra to read the selected file?", default=True
        )
        return 'granted' if allowed else 'denied'
