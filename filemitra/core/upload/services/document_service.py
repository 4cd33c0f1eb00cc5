"""
Document upload service.

Sends a file to the chat platform document endpoint as multipart/form-data
and classifies the response.
"""
from typing import Any, AsyncIterator, Dict, Optional
import asyncio
import time

import aiohttp

from ..models import FileDescriptor, UploadOutcome, UploadProgress
from ..protocols import FileReaderProtocol, ProgressCallback
from .file_service import AsyncFileReader
from ...config import RemoteConfig
from ...logging import get_logger, mask_token


class ProgressReporter:
    """
    Forwards byte counts to a progress callback as whole percentages.

    Only increases are reported, so the callback sees a non-decreasing
    sequence. Callback errors are logged and dropped.
    """

    def __init__(self, total_bytes: int, callback: Optional[ProgressCallback], logger):
        self.progress = UploadProgress(total_bytes=total_bytes)
        self._callback = callback
        self._logger = logger
        self._last: Optional[int] = None

    @property
    def last_reported(self) -> Optional[int]:
        return self._last

    def add(self, sent: int) -> None:
        self.progress.sent_bytes += sent
        self._report(self.progress.percentage)

    def complete(self) -> None:
        """Report 100 once the whole body has been handed to the transport."""
        self._report(100)

    def _report(self, percent: int) -> None:
        if self._last is not None and percent <= self._last:
            return
        self._last = percent
        if self._callback is None:
            return
        try:
            self._callback(percent)
        except Exception as e:
            self._logger.warning(f"Progress callback failed at {percent}%: {e}")


class DocumentUploader:
    """
    Uploads a single document to the chat platform.

    Responsibilities:
    - Build the chat_id + document multipart body
    - Stream the file and report progress
    - Classify the response into an UploadOutcome

    One attempt per call; nothing is retried.
    """

    DEFAULT_CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        file_reader: Optional[FileReaderProtocol] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE
    ):
        """
        Initialize document uploader.

        Args:
            session: Optional shared aiohttp session
            file_reader: File reader implementation
            chunk_size: Bytes read from disk per chunk
        """
        self._session = session
        self._owns_session = False
        self._file_reader = file_reader or AsyncFileReader()
        self._chunk_size = chunk_size
        self._logger = get_logger('filemitra.upload.document')

    async def __aenter__(self) -> 'DocumentUploader':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def upload(
        self,
        file: FileDescriptor,
        config: RemoteConfig,
        on_progress: Optional[ProgressCallback] = None
    ) -> UploadOutcome:
        """
        Send a document to the configured chat.

        Args:
            file: File to send
            config: Remote endpoint configuration
            on_progress: Optional callback receiving whole percentages

        Returns:
            SUCCESS, NETWORK_ERROR or SERVER_REJECTED outcome
        """
        reporter = ProgressReporter(file.size_bytes, on_progress, self._logger)
        body = self._build_body(file, config, reporter)
        session = await self._get_session()

        self._logger.info(
            f"Uploading {file.name} ({file.size_mb:.2f} MB) to {config.masked_url()}"
        )
        upload_start = time.time()

        try:
            async with session.post(
                config.document_url,
                data=body,
                timeout=config.timeout.to_aiohttp_timeout()
            ) as response:
                status = response.status
                try:
                    payload = await response.json(content_type=None)
                except ValueError as e:
                    self._logger.warning(f"Unreadable response (HTTP {status}): {e}")
                    payload = None
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            upload_time = time.time() - upload_start
            self._logger.error(
                f"Upload error after {upload_time:.2f}s: "
                f"{mask_token(repr(e), config.auth_token)}"
            )
            return UploadOutcome.network_error()

        upload_time = time.time() - upload_start
        outcome = self._classify(payload)
        if outcome.is_success:
            self._logger.info(f"{file.name} uploaded in {upload_time:.2f}s")
        else:
            self._logger.error(f"Upload rejected (HTTP {status}): {outcome.description}")
        return outcome

    def _build_body(
        self,
        file: FileDescriptor,
        config: RemoteConfig,
        reporter: ProgressReporter
    ) -> aiohttp.MultipartWriter:
        """Build the multipart body: chat_id text part, then the document."""
        writer = aiohttp.MultipartWriter('form-data')

        chat_part = writer.append(config.target_chat_id)
        chat_part.set_content_disposition('form-data', name='chat_id')

        document_part = writer.append(
            self._stream(file, reporter),
            {aiohttp.hdrs.CONTENT_TYPE: file.mime_type}
        )
        document_part.set_content_disposition('form-data', name='document', filename=file.name)
        return writer

    async def _stream(self, file: FileDescriptor, reporter: ProgressReporter) -> AsyncIterator[bytes]:
        async for chunk in self._file_reader.iter_chunks(file.path, self._chunk_size):
            yield chunk
            # resumed only after the transport has taken the chunk
            reporter.add(len(chunk))
        reporter.complete()

    @staticmethod
    def _classify(payload: Any) -> UploadOutcome:
        """
        Classify a parsed response body.

        Args:
            payload: Parsed JSON, or None when the body was not JSON

        Returns:
            SUCCESS when ok is true, SERVER_REJECTED otherwise
        """
        if not isinstance(payload, dict):
            return UploadOutcome.server_rejected()

        if payload.get('ok') is True:
            result = payload.get('result')
            return UploadOutcome.success(result if isinstance(result, dict) else {})

        description = payload.get('description')
        if not isinstance(description, str) or not description.strip():
            description = None
        return UploadOutcome.server_rejected(description)


def describe_result(result: Dict[str, Any]) -> Optional[str]:
    """Name of the stored document in a sendDocument result, if present."""
    document = result.get('document')
    if isinstance(document, dict):
        return document.get('file_name') or document.get('file_id')
    return None
