# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email composition and SMTP delivery.

This package provides the pieces needed to assemble an email and hand it
to a transport:

- Message model with plain text, HTML (with inline resources) and attachments
- Options-based construction via ``new_message``
- SMTP transport over clear text, direct TLS or STARTTLS using aiosmtplib
- Mock transport for tests

Example:
    Building and sending a message::

        from mail_compose import DirFS, attach_from_file, new_message, set_plain_from_string, to
        from mail_compose.smtp import SmtpConfig

        msg = new_message(
            "noreply@example.com",
            "Monthly report",
            to("alice@example.com"),
            set_plain_from_string("See attached."),
            attach_from_file(DirFS("/var/reports"), "2025/report.pdf"),
        )

        sender = SmtpConfig(server_addr="smtp.example.com:587", username="u", password="p").new_sender()
        await sender.send(msg)
"""

from .attachment import DEFAULT_CONTENT_TYPE, Attachment, DirFS, FileSystem, content_type_from_filename
from .html import HtmlBody, HtmlOption, inline, inline_from_file
from .message import (
    Message,
    MessageOption,
    attach,
    attach_from_file,
    bcc,
    cc,
    new_message,
    set_html,
    set_html_from_string,
    set_html_from_template,
    set_plain,
    set_plain_from_string,
    set_plain_from_template,
    to,
)
from .sender import Sender

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "Attachment",
    "DirFS",
    "FileSystem",
    "content_type_from_filename",
    "HtmlBody",
    "HtmlOption",
    "inline",
    "inline_from_file",
    "Message",
    "MessageOption",
    "new_message",
    "to",
    "cc",
    "bcc",
    "set_plain",
    "set_plain_from_string",
    "set_plain_from_template",
    "set_html",
    "set_html_from_string",
    "set_html_from_template",
    "attach",
    "attach_from_file",
    "Sender",
]
