# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTML body with inline resources.

Inline attachments are addressed from the HTML markup through ``cid:``
references whose identifier is the attachment name::

    <img src="cid:logo.png">

Nothing checks that identifiers are unique; adding two inlines with the same
name is a caller error.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .attachment import Attachment, FileSystem, attachment_from_file, new_attachment


@dataclass
class HtmlBody:
    body: bytes = b""
    inlines: list[Attachment] = field(default_factory=list)

    def inline(self, name: str, content_type: str, source: Any) -> None:
        self.inlines.append(new_attachment(name, content_type, source))

    def inline_from_file(self, fs: FileSystem, name: str) -> None:
        self.inlines.append(attachment_from_file(fs, name))

    @staticmethod
    def cid(name: str) -> str:
        """Return the reference used in markup for the inline ``name``."""
        return f"cid:{name}"


HtmlOption = Callable[[HtmlBody], None]


def inline(name: str, content_type: str, source: Any) -> HtmlOption:
    def apply(h: HtmlBody) -> None:
        h.inline(name, content_type, source)

    return apply


def inline_from_file(fs: FileSystem, name: str) -> HtmlOption:
    def apply(h: HtmlBody) -> None:
        h.inline_from_file(fs, name)

    return apply
