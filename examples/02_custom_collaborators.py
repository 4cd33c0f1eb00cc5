"""
Plug in your own picker and permission prompt
"""
import asyncio

from filemitra import (
    RemoteConfig,
    UploadController,
    PermissionGate,
    FileSelector,
    FileDescriptor,
    PickerCancelledError,
)


class InboxPicker:
    """Picks the newest file from a queue, or cancels when it is empty."""
    
    def __init__(self, files):
        self._files = list(files)
    
    async def pick(self, allowed_types):
        candidates = [f for f in self._files if f.mime_type in allowed_types]
        if not candidates:
            raise PickerCancelledError()
        return candidates[-1]


class AlwaysAllow:
    async def request(self, capability):
        return 'granted'


async def main():
    config = RemoteConfig.from_env()
    
    scan = FileDescriptor(
        uri="file:///home/me/scans/receipt.png",
        name="receipt.png",
        mime_type="image/png",
        size_bytes=482_113
    )
    
    async with UploadController(
        config,
        PermissionGate(AlwaysAllow()),
        FileSelector(InboxPicker([scan])),
        max_size_bytes=5 * 1024 * 1024
    ) as controller:
        report = await controller.request_pick()
    
    if report.notification:
        print(f"{report.notification.title}: {report.notification.message}")


if __name__ == "__main__":
    asyncio.run(main())
