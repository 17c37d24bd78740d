# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Wire-ready email structure and its MIME rendering.

``build_email`` maps a ``Message`` onto ``OutgoingEmail``, the flat structure
the delivery step works with. ``OutgoingEmail.to_mime`` renders it with the
standard library ``email`` package:

- text and HTML bodies become a ``multipart/alternative``
- inline attachments become ``multipart/related`` parts of the HTML body,
  addressed by ``Content-ID: <name>``
- regular attachments are appended to a ``multipart/mixed`` container

Bcc recipients take part in the SMTP envelope only; no ``Bcc`` header is
written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from email.message import EmailMessage
from email.utils import formatdate, make_msgid, parseaddr

from ..attachment import DEFAULT_CONTENT_TYPE
from ..message import Message
from ..template import ENCODING


@dataclass
class OutgoingAttachment:
    filename: str
    content_type: str
    content: bytes
    inline: bool = False

    def mime_type(self) -> tuple[str, str]:
        """Split ``content_type`` into (maintype, subtype), dropping parameters."""
        maintype, sep, subtype = self.content_type.partition("/")
        subtype = subtype.split(";", 1)[0].strip()
        if not sep or not maintype.strip() or not subtype:
            return tuple(DEFAULT_CONTENT_TYPE.split("/", 1))  # type: ignore[return-value]
        return maintype.strip().lower(), subtype.lower()


@dataclass
class OutgoingEmail:
    """Flattened email handed to the SMTP client.

    Attributes:
        from_addr: ``From`` header value.
        subject: ``Subject`` header value.
        sender: Envelope sender override; ``from_addr`` is used when empty.
        to: ``To`` recipients.
        cc: ``Cc`` recipients.
        bcc: Envelope-only recipients.
        text: Plain text part, or None.
        html: HTML part, or None.
        attachments: Inline attachments first, then regular ones.
    """

    from_addr: str
    subject: str
    sender: str | None = None
    to: list[str] = field(default_factory=list)
    cc: list[str] = field(default_factory=list)
    bcc: list[str] = field(default_factory=list)
    text: bytes | None = None
    html: bytes | None = None
    attachments: list[OutgoingAttachment] = field(default_factory=list)

    def envelope_sender(self) -> str:
        return self.sender or self.from_addr

    def recipients(self) -> list[str]:
        return [*self.to, *self.cc, *self.bcc]

    def to_mime(self) -> EmailMessage:
        """Render the email as a MIME message.

        Raises:
            ValueError: If there is no From address or no recipient.
        """
        if not self.from_addr or not self.recipients():
            raise ValueError("Must specify at least one From address and one recipient")

        msg = EmailMessage()
        msg["From"] = self.from_addr
        if self.to:
            msg["To"] = ", ".join(self.to)
        if self.cc:
            msg["Cc"] = ", ".join(self.cc)
        msg["Subject"] = self.subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid(domain=parseaddr(self.from_addr)[1].rpartition("@")[2] or None)

        html_part = None
        if self.text is not None:
            msg.set_content(_decode(self.text), subtype="plain")
            if self.html is not None:
                msg.add_alternative(_decode(self.html), subtype="html")
                html_part = msg.get_payload()[-1]
        elif self.html is not None:
            msg.set_content(_decode(self.html), subtype="html")
            html_part = msg

        for att in self.attachments:
            maintype, subtype = att.mime_type()
            if att.inline and html_part is not None:
                html_part.add_related(
                    att.content,
                    maintype=maintype,
                    subtype=subtype,
                    cid=f"<{att.filename}>",
                    disposition="inline",
                    filename=att.filename,
                )

        for att in self.attachments:
            if att.inline and html_part is not None:
                continue
            maintype, subtype = att.mime_type()
            msg.add_attachment(att.content, maintype=maintype, subtype=subtype, filename=att.filename)
        return msg


def _decode(body: bytes) -> str:
    return body.decode(ENCODING, errors="replace")


def build_email(msg: Message, sender: str | None = None) -> OutgoingEmail:
    """Convert a ``Message`` into an ``OutgoingEmail``.

    Recipients keep their order. Inline attachments of the HTML body come
    first, flagged as inline, followed by the regular attachments.
    """
    email = OutgoingEmail(
        from_addr=msg.from_addr,
        subject=msg.subject,
        sender=sender,
        to=list(msg.to),
        cc=list(msg.cc),
        bcc=list(msg.bcc),
        text=msg.plain,
    )
    if msg.html is not None:
        email.html = msg.html.body
        for a in msg.html.inlines:
            email.attachments.append(
                OutgoingAttachment(filename=a.name, content_type=a.content_type, content=a.body, inline=True)
            )
    for a in msg.attachments:
        email.attachments.append(OutgoingAttachment(filename=a.name, content_type=a.content_type, content=a.body))
    return email
