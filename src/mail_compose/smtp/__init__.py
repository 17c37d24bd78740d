# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SMTP delivery subsystem.

- SmtpSender: per-call SMTP session over plain, TLS or STARTTLS
- SmtpConfig: declarative configuration producing an SmtpSender
- PlainAuth / CramMD5Auth: authentication schemes
- OutgoingEmail / build_email: Message to MIME conversion

Usage:
    from mail_compose.smtp import SmtpConfig

    sender = SmtpConfig(server_addr="smtp.example.com:465", use_starttls=False).new_sender()
    await sender.send(msg)
"""

from .auth import CramMD5Auth, PlainAuth
from .config import SmtpConfig
from .outgoing import OutgoingAttachment, OutgoingEmail, build_email
from .sender import DEFAULT_TIMEOUT, SmtpSender, parse_address, split_host_port

__all__ = [
    "SmtpSender",
    "SmtpConfig",
    "PlainAuth",
    "CramMD5Auth",
    "OutgoingEmail",
    "OutgoingAttachment",
    "build_email",
    "split_host_port",
    "parse_address",
    "DEFAULT_TIMEOUT",
]
