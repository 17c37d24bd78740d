"""Tests for attachment ingestion and content type inference."""

import io
import zipfile

import pytest

from mail_compose import bufpool
from mail_compose.attachment import (
    DEFAULT_CONTENT_TYPE,
    Attachment,
    DirFS,
    FileSystem,
    attachment_from_file,
    content_type_from_filename,
    new_attachment,
    read_body,
)
from mail_compose.bufpool import BufferPool


class FailingReader:
    def __init__(self, error):
        self.error = error

    def read(self, size=-1):
        raise self.error


class TrackingFS:
    """Filesystem handing out readers that record whether they were closed."""

    def __init__(self, error=None, data=b""):
        self.error = error
        self.data = data
        self.handles = []

    def open(self, name):
        handle = TrackingHandle(self.data, self.error)
        self.handles.append(handle)
        return handle


class TrackingHandle:
    def __init__(self, data, error):
        self._stream = io.BytesIO(data)
        self._error = error
        self.closed = False

    def read(self, size=-1):
        if self._error is not None:
            raise self._error
        return self._stream.read(size)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


@pytest.mark.parametrize(
    "name, expected",
    [
        ("report.pdf", "application/pdf"),
        ("docs/2025/report.pdf", "application/pdf"),
        ("logo.png", "image/png"),
        ("README", DEFAULT_CONTENT_TYPE),
        ("archive.unknownext", DEFAULT_CONTENT_TYPE),
    ],
)
def test_content_type_from_filename(name, expected):
    assert content_type_from_filename(name) == expected


def test_read_body_snapshots_bytearray():
    source = bytearray(b"hello")
    body = read_body(source)
    source[:] = b"HELLO"

    assert body == b"hello"
    assert isinstance(body, bytes)


def test_read_body_snapshots_bytesio_without_pooling():
    pool = BufferPool()
    source = io.BytesIO(b"hello")
    body = read_body(source, pool=pool)
    source.seek(0)
    source.write(b"J")

    assert body == b"hello"
    assert len(pool) == 0


def test_read_body_bytesio_starts_at_current_position():
    source = io.BytesIO(b"HEADER\nbody")
    source.readline()

    assert read_body(source) == b"body"
    assert source.tell() == len(b"HEADER\n")


def test_read_body_uses_injected_pool_only():
    pool = BufferPool()
    before = len(bufpool.get_pool())

    read_body(io.BufferedReader(io.BytesIO(b"x")), pool=pool)

    assert len(pool) == 1
    assert len(bufpool.get_pool()) == before


def test_read_body_drains_stream_through_pool():
    pool = BufferPool()
    stream = io.BufferedReader(io.BytesIO(b"streamed content"))

    assert read_body(stream, pool=pool) == b"streamed content"
    assert len(pool) == 1
    assert pool.acquire().getvalue() == b""


def test_read_body_propagates_read_error():
    error = OSError("disk gone")
    pool = BufferPool()

    with pytest.raises(OSError) as excinfo:
        read_body(FailingReader(error), pool=pool)

    assert excinfo.value is error
    assert len(pool) == 1


def test_attachment_is_immutable():
    att = new_attachment("a.txt", "text/plain", b"data")

    with pytest.raises(AttributeError):
        att.body = b"other"


def test_attachment_from_dirfs(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "report.pdf").write_bytes(b"%PDF-1.4")

    att = attachment_from_file(DirFS(tmp_path), "sub/report.pdf")

    assert att == Attachment(name="report.pdf", content_type="application/pdf", body=b"%PDF-1.4")


def test_attachment_from_zipfile():
    archive = io.BytesIO()
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("docs/notes", b"no extension")

    with zipfile.ZipFile(archive) as zf:
        assert isinstance(zf, FileSystem)
        att = attachment_from_file(zf, "docs/notes")

    assert att.name == "notes"
    assert att.content_type == DEFAULT_CONTENT_TYPE
    assert att.body == b"no extension"


def test_attachment_from_file_closes_handle_on_success():
    fs = TrackingFS(data=b"abc")
    attachment_from_file(fs, "a.txt")

    assert fs.handles[0].closed is True


def test_attachment_from_file_closes_handle_on_read_error():
    error = OSError("read failed")
    fs = TrackingFS(error=error)

    with pytest.raises(OSError) as excinfo:
        attachment_from_file(fs, "a.txt")

    assert excinfo.value is error
    assert fs.handles[0].closed is True


def test_dirfs_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DirFS(tmp_path).open("missing.txt")


def test_dirfs_rejects_traversal(tmp_path):
    root = tmp_path / "root"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("secret")

    with pytest.raises(ValueError, match="Path traversal"):
        DirFS(root).open("../secret.txt")


def test_dirfs_rejects_absolute_path(tmp_path):
    target = tmp_path / "file.txt"
    target.write_text("x")

    with pytest.raises(ValueError, match="Absolute path"):
        DirFS(tmp_path).open(str(target))


def test_dirfs_rejects_directory(tmp_path):
    (tmp_path / "folder").mkdir()

    with pytest.raises(ValueError, match="Not a regular file"):
        DirFS(tmp_path).open("folder")
