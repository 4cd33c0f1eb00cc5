"""
Permission service.

Requests storage/media access before any file is touched.
"""
from typing import Dict

from ..models import Platform, PermissionStatus
from ..protocols import PermissionPromptProtocol
from ...logging import get_logger

GRANTED = 'granted'

CAPABILITIES: Dict[Platform, str] = {
    Platform.IOS: 'ios.permission.MEDIA_LIBRARY',
    Platform.ANDROID: 'android.permission.READ_EXTERNAL_STORAGE',
    Platform.DESKTOP: 'storage.read',
}


class PermissionGate:
    """
    Asks the permission prompt collaborator for read access.

    Never raises: any prompt failure counts as a denial.
    """

    def __init__(self, prompt: PermissionPromptProtocol):
        self._prompt = prompt
        self._logger = get_logger('filemitra.upload.permission')

    async def request_access(self, platform: Platform) -> PermissionStatus:
        """
        Request storage access for a platform.

        Args:
            platform: Platform whose capability is requested

        Returns:
            GRANTED only when the prompt answers 'granted'
        """
        capability = CAPABILITIES[platform]
        self._logger.debug(f"Requesting {capability}")
        try:
            answer = await self._prompt.request(capability)
        except Exception as e:
            self._logger.error(f"Permission error: {e}")
            return PermissionStatus.DENIED

        if str(answer).lower() == GRANTED:
            return PermissionStatus.GRANTED

        self._logger.info(f"Permission {capability} not granted ({answer})")
        return PermissionStatus.DENIED
