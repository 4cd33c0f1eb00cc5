"""
Send a document with the default pipeline
"""
import asyncio
from pathlib import Path

from filemitra import RemoteConfig, UploadController, PermissionGate, FileSelector
from filemitra.cli.collaborators import PathFilePicker, ConfirmPermissionPrompt


async def main():
    # Reads TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID (or .env)
    config = RemoteConfig.from_env()
    
    controller = UploadController(
        config,
        PermissionGate(ConfirmPermissionPrompt(assume_yes=True)),
        FileSelector(PathFilePicker(Path("document.pdf")))
    )
    
    # Observe the state machine
    controller.on('state', lambda state: print(f"State: {state.value}"))
    controller.on('progress', lambda pct: print(f"Progress: {pct}%"))
    controller.on('notification', lambda n: print(f"{n.title}: {n.message}"))
    
    async with controller:
        report = await controller.request_pick()
    
    if report.succeeded:
        print(f"Sent: {report.file.name}")


if __name__ == "__main__":
    asyncio.run(main())
