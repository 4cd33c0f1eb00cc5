"""Tests for the upload controller state machine."""
import asyncio
import pytest
from unittest.mock import AsyncMock, Mock

from aiohttp import web
from aiohttp.test_utils import TestServer

from filemitra.core.config import RemoteConfig
from filemitra.core.exceptions import ErrorKind, PickerFailedError
from filemitra.core.upload.controller import UploadController, build_notification, format_limit
from filemitra.core.upload.models import (
    GENERIC_UPLOAD_ERROR,
    PermissionStatus,
    Platform,
    SessionState,
    UploadOutcome,
)
from filemitra.core.upload.services import FileValidator

MB = 1024 * 1024


class FakeUploader:
    """Uploader stand-in reporting fixed progress steps."""

    def __init__(self, outcome=None, steps=(0, 25, 25, 60, 100)):
        self.outcome = outcome or UploadOutcome.success({'message_id': 1})
        self.steps = steps
        self.calls = []

    async def upload(self, file, config, on_progress=None):
        self.calls.append((file, config))
        for percent in self.steps:
            await asyncio.sleep(0)
            on_progress(percent)
        return self.outcome


@pytest.fixture
def gate():
    gate = AsyncMock()
    gate.request_access = AsyncMock(return_value=PermissionStatus.GRANTED)
    return gate


@pytest.fixture
def selector(pdf_5mb):
    selector = AsyncMock()
    selector.pick_file = AsyncMock(return_value=pdf_5mb)
    return selector


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def validator():
    return Mock(wraps=FileValidator())


@pytest.fixture
def controller(remote_config, gate, selector, validator, uploader):
    return UploadController(
        remote_config, gate, selector,
        validator=validator, uploader=uploader, platform=Platform.ANDROID
    )


def record(controller):
    """Collect every controller event in emission order."""
    events = []
    for name in ('state', 'file_selected', 'progress', 'notification', 'completed'):
        controller.on(name, lambda value, name=name: events.append((name, value)))
    return events


class TestUploadController:
    """Test suite for UploadController."""

    def test_initial_state(self, controller):
        assert controller.state is SessionState.IDLE
        assert controller.session is None
        assert controller.progress_percent == 0
        assert controller.can_pick

    @pytest.mark.asyncio
    async def test_successful_upload(self, controller, uploader, pdf_5mb, remote_config):
        """Test a 5 MB PDF is uploaded and reported as success."""
        events = record(controller)

        report = await controller.request_pick()

        assert report.succeeded
        assert report.file == pdf_5mb
        assert report.notification.title == 'Success'
        assert report.notification.message == 'File uploaded successfully'
        assert uploader.calls == [(pdf_5mb, remote_config)]

        progress = [value for name, value in events if name == 'progress']
        assert progress == sorted(progress)
        assert progress[-1] == 100

    @pytest.mark.asyncio
    async def test_state_sequence(self, controller):
        events = record(controller)

        await controller.request_pick()

        states = [value for name, value in events if name == 'state']
        assert states == [
            SessionState.PICKING,
            SessionState.VALIDATING,
            SessionState.UPLOADING,
            SessionState.IDLE,
        ]

    @pytest.mark.asyncio
    async def test_progress_precedes_outcome(self, controller):
        """Test every progress event comes before the attempt is reported."""
        events = record(controller)

        await controller.request_pick()

        names = [name for name, _ in events]
        last_progress = max(i for i, name in enumerate(names) if name == 'progress')
        assert last_progress < names.index('notification') < names.index('completed')

    @pytest.mark.asyncio
    async def test_duplicate_progress_not_republished(self, controller):
        events = record(controller)

        await controller.request_pick()

        assert [v for n, v in events if n == 'progress'] == [25, 60, 100]

    @pytest.mark.asyncio
    async def test_progress_tracked_while_uploading(self, controller, uploader):
        seen = []
        controller.on('progress', lambda _: seen.append(controller.progress_percent))

        await controller.request_pick()

        assert seen == [25, 60, 100]

    @pytest.mark.asyncio
    async def test_reset_after_success(self, controller):
        notified = []
        controller.on('notification', lambda _: notified.append(
            (controller.state, controller.progress_percent, controller.session)))

        await controller.request_pick()

        assert notified == [(SessionState.IDLE, 0, None)]
        assert controller.progress_percent == 0
        assert controller.can_pick

    @pytest.mark.asyncio
    async def test_permission_denied(self, controller, gate, selector, validator, uploader):
        """Test denial stops the attempt before any file access."""
        gate.request_access.return_value = PermissionStatus.DENIED

        report = await controller.request_pick()

        assert report.error is ErrorKind.PERMISSION_DENIED
        assert report.notification.title == 'Permission Required'
        assert report.notification.message == 'Storage access is needed to pick files'
        selector.pick_file.assert_not_called()
        validator.validate.assert_not_called()
        assert uploader.calls == []
        assert controller.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_permission_requested_for_platform(self, controller, gate):
        await controller.request_pick()

        gate.request_access.assert_awaited_once_with(Platform.ANDROID)

    @pytest.mark.asyncio
    async def test_picker_offers_registry_types(self, controller, selector):
        await controller.request_pick()

        selector.pick_file.assert_awaited_once_with(controller.registry.mime_types)

    @pytest.mark.asyncio
    async def test_picker_cancelled(self, controller, selector, validator, uploader):
        """Test cancelling the picker ends silently."""
        selector.pick_file.return_value = None
        events = record(controller)

        report = await controller.request_pick()

        assert report.cancelled
        assert report.notification is None
        assert 'notification' not in [name for name, _ in events]
        validator.validate.assert_not_called()
        assert uploader.calls == []
        assert controller.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_picker_failed(self, controller, selector, uploader):
        selector.pick_file.side_effect = PickerFailedError()

        report = await controller.request_pick()

        assert report.error is ErrorKind.PICKER_FAILED
        assert report.notification.message == 'Failed to pick file'
        assert uploader.calls == []
        assert controller.can_pick

    @pytest.mark.asyncio
    async def test_file_too_large(self, controller, selector, uploader, jpeg_12mb):
        """Test a 12 MB JPEG is rejected before any network call."""
        selector.pick_file.return_value = jpeg_12mb

        report = await controller.request_pick()

        assert report.error is ErrorKind.FILE_TOO_LARGE
        assert report.file == jpeg_12mb
        assert report.notification.message == 'File size must be less than 10MB'
        assert uploader.calls == []

    @pytest.mark.asyncio
    async def test_unsupported_type(self, controller, selector, uploader, pdf_5mb):
        from dataclasses import replace
        selector.pick_file.return_value = replace(pdf_5mb, mime_type='application/zip', name='a.zip')

        report = await controller.request_pick()

        assert report.error is ErrorKind.UNSUPPORTED_TYPE
        assert report.notification.message == 'Unsupported file type'
        assert uploader.calls == []

    @pytest.mark.asyncio
    async def test_server_rejected(self, controller, uploader):
        """Test a server rejection is reported with its description."""
        uploader.outcome = UploadOutcome.server_rejected("chat not found")

        report = await controller.request_pick()

        assert report.error is ErrorKind.SERVER_REJECTED
        assert report.outcome.description == "chat not found"
        assert report.notification.title == 'Error'
        assert report.notification.message == "chat not found"
        assert controller.progress_percent == 0
        assert controller.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_network_error(self, controller, uploader):
        uploader.outcome = UploadOutcome.network_error()

        report = await controller.request_pick()

        assert report.error is ErrorKind.NETWORK_ERROR
        assert report.notification.message == 'Failed to upload file'
        assert controller.progress_percent == 0

    @pytest.mark.asyncio
    async def test_pick_ignored_while_busy(self, controller, gate, selector):
        """Test a second request during an attempt is ignored."""
        release = asyncio.Event()

        async def slow_access(platform):
            await release.wait()
            return PermissionStatus.GRANTED

        gate.request_access.side_effect = slow_access

        first = asyncio.create_task(controller.request_pick())
        await asyncio.sleep(0)

        assert controller.state is SessionState.PICKING
        assert not controller.can_pick
        assert await controller.request_pick() is None

        release.set()
        report = await first

        assert report.succeeded
        assert gate.request_access.await_count == 1
        selector.pick_file.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_trigger_disabled_while_uploading(self, controller):
        enabled = []
        controller.on('progress', lambda p: enabled.append(controller.can_pick))

        await controller.request_pick()

        assert enabled and not any(enabled)
        assert controller.can_pick

    @pytest.mark.asyncio
    async def test_reenterable_after_failure(self, controller, gate):
        gate.request_access.return_value = PermissionStatus.DENIED
        await controller.request_pick()

        gate.request_access.return_value = PermissionStatus.GRANTED
        report = await controller.request_pick()

        assert report.succeeded

    @pytest.mark.asyncio
    async def test_failing_observer_ignored(self, controller):
        def broken(_):
            raise RuntimeError("render failed")

        controller.on('progress', broken).on('state', broken)

        report = await controller.request_pick()

        assert report.succeeded
        assert controller.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_to_idle(self, controller, validator):
        validator.validate.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await controller.request_pick()

        assert controller.state is SessionState.IDLE
        assert controller.session is None

    @pytest.mark.asyncio
    async def test_custom_limit(self, remote_config, gate, selector, uploader):
        controller = UploadController(remote_config, gate, selector, uploader=uploader,
                                      max_size_bytes=2 * MB)

        report = await controller.request_pick()

        assert report.error is ErrorKind.FILE_TOO_LARGE
        assert report.notification.message == 'File size must be less than 2MB'


class TestEndToEnd:
    """Controller with the real uploader against a stub endpoint."""

    @pytest.mark.asyncio
    async def test_pdf_upload(self, gate, make_file):
        file = make_file("thesis.pdf", size=5 * MB)
        selector = AsyncMock()
        selector.pick_file = AsyncMock(return_value=file)

        async def send_document(request):
            form = await request.post()
            assert form['chat_id'] == "42"
            return web.json_response({'ok': True, 'result': {'message_id': 9}})

        app = web.Application(client_max_size=32 * MB)
        app.router.add_post('/bot{token}/sendDocument', send_document)

        async with TestServer(app) as server:
            config = RemoteConfig(auth_token="1:ABC", target_chat_id="42",
                                  endpoint_base_url=str(server.make_url('')))
            async with UploadController(config, gate, selector) as controller:
                progress = []
                controller.on('progress', progress.append)

                report = await controller.request_pick()

        assert report.succeeded
        assert progress[-1] == 100
        assert progress == sorted(progress)
        assert controller.progress_percent == 0

    @pytest.mark.asyncio
    async def test_server_rejection(self, gate, make_file):
        file = make_file("report.pdf", size=64 * 1024)
        selector = AsyncMock()
        selector.pick_file = AsyncMock(return_value=file)

        async def send_document(request):
            await request.post()
            return web.json_response({'ok': False, 'error_code': 400,
                                      'description': 'chat not found'}, status=400)

        app = web.Application()
        app.router.add_post('/bot{token}/sendDocument', send_document)

        async with TestServer(app) as server:
            config = RemoteConfig(auth_token="1:ABC", target_chat_id="42",
                                  endpoint_base_url=str(server.make_url('')))
            async with UploadController(config, gate, selector) as controller:
                report = await controller.request_pick()

        assert report.error is ErrorKind.SERVER_REJECTED
        assert report.notification.message == 'chat not found'
        assert controller.progress_percent == 0


class TestNotifications:
    """Test suite for notification texts."""

    def test_cancel_is_silent(self):
        assert build_notification(ErrorKind.PICKER_CANCELLED) is None

    def test_server_description_used(self):
        notification = build_notification(ErrorKind.SERVER_REJECTED, description="Bad Request")

        assert notification.message == "Bad Request"
        assert notification.error is ErrorKind.SERVER_REJECTED

    def test_generic_upload_message(self):
        assert build_notification(ErrorKind.NETWORK_ERROR).message == GENERIC_UPLOAD_ERROR
        assert build_notification(ErrorKind.SERVER_REJECTED, description='').message == GENERIC_UPLOAD_ERROR

    @pytest.mark.parametrize("limit,text", [
        (10 * MB, '10MB'),
        (2 * MB, '2MB'),
        (MB + MB // 2, '1.5MB'),
    ])
    def test_format_limit(self, limit, text):
        assert format_limit(limit) == text
