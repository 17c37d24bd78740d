# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Transport interface consumed by message producers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .message import Message


@runtime_checkable
class Sender(Protocol):
    """Anything able to deliver a ``Message``.

    ``send`` returns once delivery has succeeded and raises otherwise.
    Implementations configure themselves at construction time.
    """

    async def send(self, message: Message) -> None: ...
