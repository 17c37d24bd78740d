# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SMTP authentication schemes.

Two schemes are supported, each bound to an ``aiosmtplib.SMTP`` connection
through ``login``:

- ``PlainAuth``: AUTH PLAIN with optional authorization identity. Credentials
  are only sent over an encrypted connection or to localhost, and only to
  the host the auth was configured for.
- ``CramMD5Auth``: challenge-response, the secret never crosses the wire.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Protocol

import aiosmtplib

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})
AUTH_SUCCESSFUL = 235


class Auth(Protocol):
    async def login(self, smtp: aiosmtplib.SMTP, host: str, *, encrypted: bool) -> None: ...


@dataclass
class PlainAuth:
    identity: str
    username: str
    password: str = field(repr=False)
    host: str

    async def login(self, smtp: aiosmtplib.SMTP, host: str, *, encrypted: bool) -> None:
        """Authenticate ``smtp`` using AUTH PLAIN.

        Raises:
            aiosmtplib.SMTPException: If the connection is unencrypted towards
                a remote host or the server name differs from ``self.host``.
            aiosmtplib.SMTPAuthenticationError: If the server rejects the credentials.
        """
        if not encrypted and host not in LOCAL_HOSTS:
            raise aiosmtplib.SMTPException("unencrypted connection")
        if host != self.host:
            raise aiosmtplib.SMTPException("wrong host name")

        if not self.identity:
            await smtp.auth_plain(self.username, self.password)
            return

        token = base64.b64encode(f"{self.identity}\0{self.username}\0{self.password}".encode())
        response = await smtp.execute_command(b"AUTH", b"PLAIN", token)
        if response.code != AUTH_SUCCESSFUL:
            raise aiosmtplib.SMTPAuthenticationError(response.code, response.message)


@dataclass
class CramMD5Auth:
    username: str
    secret: str = field(repr=False)

    async def login(self, smtp: aiosmtplib.SMTP, host: str, *, encrypted: bool) -> None:
        await smtp.auth_crammd5(self.username, self.secret)
