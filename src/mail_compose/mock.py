# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""In-memory transport for tests.

``MockSender`` satisfies the ``Sender`` interface without any network. It
counts calls, can fail every call with a fixed error, and can run a
validator that rejects messages by raising.

Example:
    Asserting on what a component sends::

        def require_plain(msg):
            if msg.plain is None:
                raise ValueError("plain body required")

        sender = MockSender(validator=require_plain)
        await notifier.run(sender)
        assert sender.message_count == 1
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from .logger import get_logger
from .message import Message

Validator = Callable[[Message], None]

_UNSET = object()

logger = get_logger("MockSender")


class MockSender:
    """Counting, optionally failing, ``Sender`` implementation.

    Attributes:
        lock: Lock guarding counter, configuration and ``sent``.
        sent: Messages that passed error and validator checks, in call order.
    """

    def __init__(self, validator: Validator | None = None, error: BaseException | None = None):
        self.lock = threading.Lock()
        self._counter = 0
        self._validator = validator
        self._error = error
        self.sent: list[Message] = []

    async def send(self, message: Message) -> None:
        with self.lock:
            self._counter += 1
            error = self._error
            validator = self._validator

        if error is not None:
            logger.debug("Rejecting message %r with configured error", message.subject)
            raise error
        if validator is not None:
            validator(message)

        with self.lock:
            self.sent.append(message)

    @property
    def message_count(self) -> int:
        with self.lock:
            return self._counter

    def set_error(self, error: BaseException | None) -> None:
        with self.lock:
            self._error = error

    def reset(self, validator: Validator | None = _UNSET, error: BaseException | None = _UNSET) -> None:  # type: ignore[assignment]
        """Zero the counter and apply any replacement configuration given.

        Arguments left out keep their current value; pass ``None`` to clear.
        """
        with self.lock:
            self._counter = 0
            self.sent.clear()
            if validator is not _UNSET:
                self._validator = validator
            if error is not _UNSET:
                self._error = error
