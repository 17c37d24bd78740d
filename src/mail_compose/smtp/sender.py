# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SMTP transport built on aiosmtplib.

``SmtpSender`` opens one connection per ``send`` call. The connection mode is
fixed at construction time:

- no TLS context: plain SMTP
- TLS context, ``use_start_tls=False``: direct TLS (implicit TLS)
- TLS context, ``use_start_tls=True``: plain connection upgraded via STARTTLS

Example:
    Sending over STARTTLS with CRAM-MD5::

        sender = SmtpSender(
            "smtp.example.com:587",
            CramMD5Auth("user", "secret"),
            tls_context=ssl.create_default_context(),
            use_start_tls=True,
        )
        await sender.send(msg)

Errors raised by aiosmtplib or by the MIME rendering propagate unchanged;
there is no retry.
"""

from __future__ import annotations

import ssl

import aiosmtplib

from ..logger import get_logger
from ..message import Message
from .auth import Auth
from .outgoing import build_email

DEFAULT_TIMEOUT = 10.0

logger = get_logger("SmtpSender")


def split_host_port(addr: str) -> tuple[str, str]:
    """Split ``host:port`` or ``[host]:port`` into its two parts.

    Raises:
        ValueError: If ``addr`` has no port or is otherwise malformed.
    """
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0:
            raise ValueError(f"missing ']' in address: {addr}")
        rest = addr[end + 1:]
        if not rest:
            raise ValueError(f"missing port in address: {addr}")
        if not rest.startswith(":") or ":" in rest[1:]:
            raise ValueError(f"unexpected characters after ']' in address: {addr}")
        return addr[1:end], rest[1:]

    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address: {addr}")
    if ":" in host:
        raise ValueError(f"too many colons in address: {addr}")
    if "[" in host or "]" in host or "[" in port or "]" in port:
        raise ValueError(f"unexpected bracket in address: {addr}")
    return host, port


def parse_address(addr: str) -> tuple[str, int | None]:
    """Return (host, port) for ``addr``.

    When ``addr`` cannot be split the whole string is the host and the port
    is left to aiosmtplib's default for the connection mode.

    Raises:
        ValueError: If the port is present but not numeric.
    """
    try:
        host, port = split_host_port(addr)
    except ValueError:
        return addr, None
    return host, int(port)


class SmtpSender:
    """Deliver messages to a single SMTP server.

    Attributes:
        addr: Server address as configured, ``host:port``.
        host: Host portion of ``addr``, also used as TLS server name.
        port: Port portion of ``addr``, or None for the mode's default.
        auth: Authentication scheme, or None for anonymous delivery.
        sender: Envelope sender overriding the message author, or None.
        tls_context: SSL context; None means clear text.
        use_start_tls: Upgrade a plain connection instead of connecting over TLS.
        timeout: Per-command timeout in seconds passed to aiosmtplib.
    """

    def __init__(
        self,
        addr: str,
        auth: Auth | None,
        *,
        sender: str | None = None,
        tls_context: ssl.SSLContext | None = None,
        use_start_tls: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.addr = addr
        self.host, self.port = parse_address(addr)
        self.auth = auth
        self.sender = sender
        self.tls_context = tls_context
        self.use_start_tls = use_start_tls
        self.timeout = timeout

    @property
    def mode(self) -> str:
        if self.tls_context is None:
            return "plain"
        return "starttls" if self.use_start_tls else "tls"

    def _client(self) -> aiosmtplib.SMTP:
        mode = self.mode
        if mode == "tls":
            return aiosmtplib.SMTP(
                hostname=self.host,
                port=self.port,
                use_tls=True,
                start_tls=False,
                tls_context=self.tls_context,
                timeout=self.timeout,
            )
        if mode == "starttls":
            return aiosmtplib.SMTP(
                hostname=self.host,
                port=self.port,
                use_tls=False,
                start_tls=True,
                tls_context=self.tls_context,
                timeout=self.timeout,
            )
        return aiosmtplib.SMTP(
            hostname=self.host,
            port=self.port,
            use_tls=False,
            start_tls=False,
            timeout=self.timeout,
        )

    async def send(self, message: Message) -> None:
        """Render ``message`` and deliver it in a single SMTP session.

        Raises:
            ValueError: If the message has no author or no recipient.
            aiosmtplib.SMTPException: On connection, authentication or
                delivery failures.
        """
        email = build_email(message, sender=self.sender)
        mime = email.to_mime()
        recipients = email.recipients()

        smtp = self._client()
        logger.debug("Connecting to %s (mode=%s)", self.addr, self.mode)
        try:
            await smtp.connect()
            if self.auth is not None:
                if not smtp.esmtp_extensions:
                    await smtp.ehlo()
                if not smtp.supports_extension("auth"):
                    raise aiosmtplib.SMTPException("server doesn't support AUTH")
                await self.auth.login(smtp, self.host, encrypted=self.tls_context is not None)
            await smtp.send_message(mime, sender=email.envelope_sender(), recipients=recipients)
            await smtp.quit()
        except Exception as exc:
            logger.warning("Delivery via %s failed: %s", self.addr, exc)
            raise
        finally:
            if smtp.is_connected:
                smtp.close()

        logger.info("Delivered message %r to %d recipient(s) via %s", email.subject, len(recipients), self.addr)
