# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Attachment model and byte ingestion helpers.

Every payload handed to the message model goes through ``read_body``, which
returns a private ``bytes`` snapshot of the source. The caller may reuse,
mutate or release its buffer as soon as the call returns.

Files are loaded from a *filesystem-like resource*: any object exposing
``open(name)`` that returns a readable binary stream usable as a context
manager. ``zipfile.ZipFile`` works as-is; ``DirFS`` exposes a local directory.
"""

from __future__ import annotations

import io
import mimetypes
import posixpath
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Protocol, runtime_checkable

from . import bufpool

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@runtime_checkable
class FileSystem(Protocol):
    """Read-only resource addressed by slash-separated names."""

    def open(self, name: str) -> IO[bytes]: ...


@dataclass(frozen=True)
class Attachment:
    """Named blob with a content type.

    Attributes:
        name: Display file name; for inline parts also the content identifier.
        content_type: MIME type, e.g. ``application/pdf``.
        body: Attachment content.
    """

    name: str
    content_type: str
    body: bytes


class DirFS:
    """Filesystem rooted at a local directory.

    Names are resolved relative to ``root``; absolute names and names that
    resolve outside the root are rejected.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def open(self, name: str) -> IO[bytes]:
        return self._resolve_and_validate(name).open("rb")

    def _resolve_and_validate(self, name: str) -> Path:
        if not name:
            raise ValueError("Empty path provided")

        path_obj = Path(name)
        if path_obj.is_absolute():
            raise ValueError(f"Absolute path '{name}' not allowed")

        resolved = (self._root / path_obj).resolve()
        try:
            resolved.relative_to(self._root)
        except ValueError:
            raise ValueError(
                f"Path traversal detected: '{name}' resolves outside base directory"
            ) from None

        if not resolved.exists():
            raise FileNotFoundError(f"File not found: {resolved}")
        if not resolved.is_file():
            raise ValueError(f"Not a regular file: {resolved}")
        return resolved


def content_type_from_filename(name: str) -> str:
    """Determine the MIME type of ``name`` from its extension.

    Falls back to ``application/octet-stream`` for extensionless names and
    extensions missing from the ``mimetypes`` table.

    Example:
        >>> content_type_from_filename("docs/report.pdf")
        'application/pdf'
    """
    ext = posixpath.splitext(name)[1]
    if not ext:
        return DEFAULT_CONTENT_TYPE
    mt, _ = mimetypes.guess_type(f"file{ext}", strict=False)
    return mt or DEFAULT_CONTENT_TYPE


def read_body(source: Any, pool: bufpool.BufferPool | None = None) -> bytes:
    """Return a private copy of the bytes held or produced by ``source``.

    Args:
        source: ``bytes``, ``bytearray``, ``memoryview``, ``io.BytesIO`` (read from
            its current position) or any binary stream with a ``read()`` method.
        pool: Buffer pool used to drain streams. Defaults to the process pool.

    Returns:
        The full content as an independent ``bytes`` object.

    Raises:
        Whatever the stream's ``read()`` raises.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, io.BytesIO):
        return source.getvalue()[source.tell():]

    if pool is None:
        pool = bufpool.get_pool()
    with pool.borrow() as buf:
        shutil.copyfileobj(source, buf)
        return buf.getvalue()


def new_attachment(name: str, content_type: str, source: Any) -> Attachment:
    return Attachment(name=name, content_type=content_type, body=read_body(source))


def attachment_from_file(fs: FileSystem, name: str) -> Attachment:
    """Load ``name`` from ``fs`` as an attachment.

    The display name is the base name of ``name`` and the content type is
    inferred from its extension. The opened handle is closed whether or not
    reading succeeds.
    """
    with fs.open(name) as handle:
        base = posixpath.basename(name.rstrip("/")) or name
        return new_attachment(base, content_type_from_filename(name), handle)
