"""FileMitra CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.markup import escape
from rich.table import Table

from filemitra.core.config import MAX_FILE_SIZE, RemoteConfig
from filemitra.core.exceptions import ConfigurationError
from filemitra.core.upload import (
    FileSelector,
    Notification,
    PermissionGate,
    SessionState,
    UploadController,
    default_registry,
)
from filemitra.core.upload.services import describe_result
from .collaborators import ConfirmPermissionPrompt, PathFilePicker, describe_file

app = typer.Typer(
    name="filemitra",
    help="Upload files securely to your Telegram storage.",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def print_notification(notification: Notification):
    color = "red" if notification.is_error else "green"
    console.print(f"[{color}]{notification.title}:[/{color}] {escape(notification.message)}")


@app.command()
def send(
    file_path: Optional[Path] = typer.Argument(None, help="Local file to upload (asks if omitted)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Grant file access without asking"),
    max_size: int = typer.Option(MAX_FILE_SIZE, "--max-size", help="Maximum file size in bytes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Upload a file to the configured Telegram chat."""
    if verbose:
        from filemitra import setup_logging
        logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
        setup_logging(logging.DEBUG)

    try:
        config = RemoteConfig.from_env()
    except ConfigurationError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2)

    async def do_send():
        controller = UploadController(
            config,
            PermissionGate(ConfirmPermissionPrompt(assume_yes=yes)),
            FileSelector(PathFilePicker(file_path)),
            max_size_bytes=max_size
        )

        # Live display only while uploading, so prompts stay readable
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
            transient=True
        )
        task = progress.add_task("Uploading", total=100)

        def on_file(file):
            progress.update(task, description=f"Uploading {file.name}")

        def on_state(state: SessionState):
            if state is SessionState.UPLOADING:
                progress.start()
            elif state is SessionState.IDLE:
                progress.stop()

        def on_progress(percent: int):
            progress.update(task, completed=percent)

        controller.on('file_selected', on_file)
        controller.on('state', on_state)
        controller.on('progress', on_progress)

        async with controller:
            try:
                return await controller.request_pick()
            finally:
                progress.stop()

    report = run_async(do_send())
    if report is None:
        raise typer.Exit(1)

    if report.notification is not None:
        print_notification(report.notification)
    if report.succeeded:
        stored = describe_result(report.outcome.result)
        if stored:
            console.print(f"Stored as: {stored}")
    elif report.error is not None and not report.cancelled:
        raise typer.Exit(1)


@app.command()
def types():
    """List supported file types."""
    table = Table(title="Supported File Types")
    table.add_column("Type", no_wrap=True)
    table.add_column("MIME", style="dim", overflow="fold")
    for mime_type in sorted(default_registry.mime_types, key=default_registry.label_for):
        table.add_row(default_registry.label_for(mime_type), mime_type)
    console.print(table)


@app.command()
def info(
    file_path: Path = typer.Argument(..., help="Local file to describe"),
):
    """Show what would be sent for a file."""
    try:
        file = describe_file(file_path)
    except OSError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print("Selected File:")
    console.print(f"Name: {file.name}")
    console.print(f"Size: {file.size_mb:.2f} MB")
    console.print(f"Type: {default_registry.label_for(file.mime_type)}")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
