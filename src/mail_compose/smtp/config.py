# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Declarative SMTP sender configuration.

Example:
    Building a sender for a submission port::

        config = SmtpConfig(server_addr="smtp.example.com:587", username="u", password="p")
        sender = config.new_sender()   # TLS via STARTTLS, AUTH PLAIN
"""

from __future__ import annotations

import ssl
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from .auth import CramMD5Auth, PlainAuth
from .sender import SmtpSender, parse_address


class SmtpConfig(BaseModel):
    """SMTP server and credentials.

    Attributes:
        server_addr: ``host:port`` of the SMTP server.
        username: Login name.
        password: Password, or CRAM-MD5 secret.
        use_crammd5: Authenticate with CRAM-MD5 instead of PLAIN.
        use_clear: Disable TLS entirely.
        use_starttls: With TLS active, upgrade via STARTTLS instead of
            connecting over TLS directly.
    """

    model_config = ConfigDict(extra="forbid")

    server_addr: Annotated[str, Field(description="SMTP server address (host:port)")]
    username: Annotated[str, Field(default="", description="SMTP username")]
    password: Annotated[str, Field(default="", repr=False, description="SMTP password or CRAM-MD5 secret")]
    use_crammd5: Annotated[bool, Field(default=False, description="Use CRAM-MD5 authentication")]
    use_clear: Annotated[bool, Field(default=False, description="Deliver without TLS")]
    use_starttls: Annotated[bool, Field(default=True, description="Use STARTTLS when TLS is enabled")]

    def new_sender(self) -> SmtpSender:
        """Create an ``SmtpSender`` from this configuration.

        The TLS context trusts the system certificate store; failures loading
        it propagate unchanged.
        """
        host, _ = parse_address(self.server_addr)

        if self.use_crammd5:
            auth = CramMD5Auth(self.username, self.password)
        else:
            auth = PlainAuth("", self.username, self.password, host)

        tls_context = None
        use_start_tls = False
        if not self.use_clear:
            tls_context = ssl.create_default_context()
            use_start_tls = self.use_starttls

        return SmtpSender(self.server_addr, auth, tls_context=tls_context, use_start_tls=use_start_tls)
