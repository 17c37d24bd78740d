# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Load SMTP settings from INI-style configuration files.

Example:
    Configuration file format (config.ini)::

        [smtp]
        server_addr = smtp.example.com:587
        username = mailer
        password = secret
        use_crammd5 = false
        use_clear = false
        use_starttls = true

    Loading it::

        config = load_smtp_config("/etc/mailer/config.ini")
        sender = config.new_sender()
"""

from __future__ import annotations

import configparser
from pathlib import Path

from mail_compose.logger import get_logger
from mail_compose.smtp.config import SmtpConfig

logger = get_logger("SmtpConfigLoader")

BOOL_KEYS = ("use_crammd5", "use_clear", "use_starttls")
STR_KEYS = ("server_addr", "username", "password")


def load_smtp_config(config_path: str | Path, section: str = "smtp") -> SmtpConfig:
    """Read an ``SmtpConfig`` from ``section`` of an INI file.

    Missing keys take the ``SmtpConfig`` defaults.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        KeyError: If the section is missing.
        ValueError: If a boolean key holds an unrecognized value.
        pydantic.ValidationError: If ``server_addr`` is missing.
    """
    if not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    config = configparser.ConfigParser()
    config.read(config_path)

    if not config.has_section(section):
        raise KeyError(section)

    values: dict[str, object] = {}
    for key in STR_KEYS:
        value = config.get(section, key, fallback=None)
        if value is not None:
            values[key] = value.strip()
    for key in BOOL_KEYS:
        if config.has_option(section, key):
            values[key] = config.getboolean(section, key)

    unknown = set(config.options(section)) - set(STR_KEYS) - set(BOOL_KEYS)
    for key in sorted(unknown):
        logger.warning(f"Ignoring unknown key in [{section}] section: {key}")

    logger.info(f"Loaded SMTP configuration for {values.get('server_addr')} from {config_path}")
    return SmtpConfig(**values)
