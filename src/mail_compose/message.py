# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Message model and options-based construction.

A message is assembled once by ``new_message`` from an ordered list of
options. Each option is a callable that mutates the partially built message
and raises to abort; the first exception propagates unchanged and the
partial message is discarded.

Example:
    Composing a message with an HTML body and an inline image::

        msg = new_message(
            "noreply@example.com",
            "Welcome",
            to("ada@example.com"),
            bcc("audit@example.com"),
            set_plain_from_string("Welcome aboard"),
            set_html_from_string(
                '<p>Welcome</p><img src="cid:logo.png">',
                inline_from_file(DirFS("static"), "img/logo.png"),
            ),
        )

Payloads are always copied into the message, so the source buffers can be
reused as soon as the option has been applied. The model is not internally
synchronized; once built it is only read.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from jinja2 import Template

from . import bufpool
from .attachment import Attachment, FileSystem, attachment_from_file, new_attachment, read_body
from .html import HtmlBody, HtmlOption
from .template import ENCODING, render_template


@dataclass
class Message:
    """Email envelope and content.

    Attributes:
        from_addr: Author address (the ``From`` header).
        subject: Subject line.
        to: Primary recipients, in insertion order, duplicates kept.
        cc: Carbon-copy recipients.
        bcc: Blind carbon-copy recipients.
        plain: Plain text body, or None.
        html: HTML body with its inline resources, or None.
        attachments: Regular attachments, in insertion order.
    """

    from_addr: str
    subject: str
    to: list[str] = field(default_factory=list)
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    plain: bytes | None = None
    html: HtmlBody | None = None
    attachments: list[Attachment] = field(default_factory=list)

    def add_to(self, *addrs: str) -> None:
        self.to.extend(addrs)

    def add_cc(self, *addrs: str) -> None:
        self.cc.extend(addrs)

    def add_bcc(self, *addrs: str) -> None:
        self.bcc.extend(addrs)

    def recipients(self) -> list[str]:
        """Return every envelope recipient: to, then cc, then bcc."""
        return [*self.to, *self.cc, *self.bcc]

    def set_plain(self, source: Any) -> None:
        self.plain = read_body(source)

    def set_plain_from_string(self, text: str) -> None:
        self.plain = text.encode(ENCODING)

    def set_plain_from_template(self, tpl: Template, tpl_name: str | None, data: Mapping[str, Any] | None) -> None:
        with bufpool.borrow() as buf:
            render_template(tpl, tpl_name, data, buf)
            buf.seek(0)
            self.set_plain(buf)

    def set_html(self, source: Any, *opts: HtmlOption) -> None:
        self._apply_html(HtmlBody(body=read_body(source)), opts)

    def set_html_from_string(self, text: str, *opts: HtmlOption) -> None:
        self._apply_html(HtmlBody(body=text.encode(ENCODING)), opts)

    def set_html_from_template(
        self, tpl: Template, tpl_name: str | None, data: Mapping[str, Any] | None, *opts: HtmlOption
    ) -> None:
        with bufpool.borrow() as buf:
            render_template(tpl, tpl_name, data, buf)
            buf.seek(0)
            self.set_html(buf, *opts)

    def _apply_html(self, h: HtmlBody, opts: tuple[HtmlOption, ...]) -> None:
        for opt in opts:
            opt(h)
        self.html = h

    def attach(self, name: str, content_type: str, source: Any) -> None:
        self.attachments.append(new_attachment(name, content_type, source))

    def attach_from_file(self, fs: FileSystem, name: str) -> None:
        self.attachments.append(attachment_from_file(fs, name))


MessageOption = Callable[[Message], None]


def new_message(from_addr: str, subject: str, *opts: MessageOption) -> Message:
    """Build a message by applying ``opts`` in order.

    Raises:
        The first exception raised by an option, unchanged.
    """
    m = Message(from_addr=from_addr, subject=subject)
    for opt in opts:
        opt(m)
    return m


def to(*addrs: str) -> MessageOption:
    def apply(m: Message) -> None:
        m.add_to(*addrs)

    return apply


def cc(*addrs: str) -> MessageOption:
    def apply(m: Message) -> None:
        m.add_cc(*addrs)

    return apply


def bcc(*addrs: str) -> MessageOption:
    def apply(m: Message) -> None:
        m.add_bcc(*addrs)

    return apply


def set_plain(source: Any) -> MessageOption:
    def apply(m: Message) -> None:
        m.set_plain(source)

    return apply


def set_plain_from_string(text: str) -> MessageOption:
    def apply(m: Message) -> None:
        m.set_plain_from_string(text)

    return apply


def set_plain_from_template(tpl: Template, tpl_name: str | None, data: Mapping[str, Any] | None) -> MessageOption:
    def apply(m: Message) -> None:
        m.set_plain_from_template(tpl, tpl_name, data)

    return apply


def set_html(source: Any, *opts: HtmlOption) -> MessageOption:
    def apply(m: Message) -> None:
        m.set_html(source, *opts)

    return apply


def set_html_from_string(text: str, *opts: HtmlOption) -> MessageOption:
    def apply(m: Message) -> None:
        m.set_html_from_string(text, *opts)

    return apply


def set_html_from_template(
    tpl: Template, tpl_name: str | None, data: Mapping[str, Any] | None, *opts: HtmlOption
) -> MessageOption:
    def apply(m: Message) -> None:
        m.set_html_from_template(tpl, tpl_name, data, *opts)

    return apply


def attach(name: str, content_type: str, source: Any) -> MessageOption:
    def apply(m: Message) -> None:
        m.attach(name, content_type, source)

    return apply


def attach_from_file(fs: FileSystem, name: str) -> MessageOption:
    def apply(m: Message) -> None:
        m.attach_from_file(fs, name)

    return apply
