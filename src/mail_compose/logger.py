"""Package loggers.

Every module logs under the ``mail_compose`` namespace so an application can
tune the whole library with a single ``logging.getLogger("mail_compose")``.
The library never installs handlers; that is left to the entry point.
"""

import logging

ROOT_LOGGER = "mail_compose"


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the package logger, or the child logger for ``component``.

    >>> get_logger("SmtpSender").name
    'mail_compose.SmtpSender'
    """
    if not component:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
