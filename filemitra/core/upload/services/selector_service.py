"""
File selection service.

Wraps the picker collaborator and separates cancellation from failure.
"""
from typing import AbstractSet, Optional

from ..models import FileDescriptor
from ..protocols import FilePickerProtocol
from ...exceptions import PickerCancelledError, PickerFailedError
from ...logging import get_logger


class FileSelector:
    """
    Lets the user choose one file of an allowed type.

    Responsibilities:
    - Restrict the picker to the allowed MIME types
    - Treat cancellation as a silent None
    - Turn any other picker error into PickerFailedError
    """

    def __init__(self, picker: FilePickerProtocol):
        self._picker = picker
        self._logger = get_logger('filemitra.upload.selector')

    async def pick_file(self, allowed_types: AbstractSet[str]) -> Optional[FileDescriptor]:
        """
        Invoke the picker.

        Args:
            allowed_types: MIME types to offer

        Returns:
            Chosen file, or None if the user cancelled

        Raises:
            PickerFailedError: If the picker failed
        """
        try:
            file = await self._picker.pick(frozenset(allowed_types))
        except PickerCancelledError:
            self._logger.debug("Picker cancelled by user")
            return None
        except Exception as e:
            self._logger.error(f"Picker error: {e}")
            raise PickerFailedError() from e

        if file is None:
            self._logger.debug("Picker cancelled by user")
            return None

        self._logger.info(f"File chosen: {file.name} ({file.mime_type}, {file.size_bytes} bytes)")
        return file
