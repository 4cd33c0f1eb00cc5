"""Pytest fixtures for FileMitra tests."""
import pytest

from filemitra.core.config import RemoteConfig
from filemitra.core.upload.models import FileDescriptor

MB = 1024 * 1024


@pytest.fixture
def remote_config():
    """Returns a config pointing at the public endpoint (never contacted)."""
    return RemoteConfig(auth_token="123456:TEST-TOKEN", target_chat_id="-1001234567890")


@pytest.fixture
def make_file(tmp_path):
    """Writes a file of the given size and returns its descriptor."""
    def _make(name="report.pdf", size=1024, mime_type="application/pdf"):
        path = tmp_path / name
        path.write_bytes((bytes(range(251)) * (size // 251 + 1))[:size])
        return FileDescriptor(uri=str(path), name=name, mime_type=mime_type, size_bytes=size)
    return _make


@pytest.fixture
def pdf_5mb():
    """Descriptor of a 5 MB PDF (no content on disk)."""
    return FileDescriptor(uri="/sdcard/Download/thesis.pdf", name="thesis.pdf",
                          mime_type="application/pdf", size_bytes=5 * MB)


@pytest.fixture
def jpeg_12mb():
    """Descriptor of a 12 MB JPEG (no content on disk)."""
    return FileDescriptor(uri="/sdcard/DCIM/photo.jpg", name="photo.jpg",
                          mime_type="image/jpeg", size_bytes=12 * MB)
