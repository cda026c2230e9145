"""Client facade binding the frame splitter to a transport and a consumer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from .framing import FrameSplitter, invoke_handler
from .logs.logger import logger
from .models import IRCMessage
from .serializer import serialize_irc_message
from .transport import Transport


class MessageConsumer(Protocol):
    """Receiver of connection events and parsed messages.

    Handlers run synchronously on whatever thread the transport delivers on.
    Messages are only valid for the duration of the call; keep a copy to
    retain one.
    """

    def on_connect(self) -> None:
        """Transport connection is open."""
        ...

    def on_message(self, message: IRCMessage) -> None:
        """One structurally valid line, PINGs included."""
        ...

    def on_error(self, reason: str) -> None:
        """Transport failure with a human-readable reason."""
        ...


class CallbackConsumer:
    """Adapts plain callables to the :class:`MessageConsumer` interface."""

    def __init__(
        self,
        on_connect: Callable[[], Any] | None = None,
        on_message: Callable[[IRCMessage], Any] | None = None,
        on_error: Callable[[str], Any] | None = None,
    ) -> None:
        self._on_connect = on_connect
        self._on_message = on_message
        self._on_error = on_error

    def on_connect(self) -> None:
        if self._on_connect:
            self._on_connect()

    def on_message(self, message: IRCMessage) -> None:
        if self._on_message:
            self._on_message(message)

    def on_error(self, reason: str) -> None:
        if self._on_error:
            self._on_error(reason)


class IRCClient:
    """Drives a consumer from transport events and writes messages out.

    The transport calls :meth:`handle_open`, :meth:`handle_batch` and
    :meth:`handle_error`; outbound traffic goes through :meth:`write`.
    """

    def __init__(
        self,
        transport: Transport,
        consumer: MessageConsumer,
        *,
        buffered: bool = False,
        peer: str | None = None,
    ) -> None:
        self.transport = transport
        self.consumer = consumer
        self.peer = peer
        self.splitter = FrameSplitter(
            transport.send_raw, consumer.on_message, buffered=buffered, peer=peer
        )

    def write(self, message: str | IRCMessage) -> str:
        """Send a raw line or a structured message; returns the line sent."""
        line = message if isinstance(message, str) else serialize_irc_message(message)
        logger.log_event("irc", "write", level=logging.DEBUG, peer=self.peer, line=line)
        self.transport.send_raw(line)
        return line

    def handle_open(self) -> None:
        invoke_handler("on_connect", self.consumer.on_connect, peer=self.peer)

    def handle_batch(self, payload: str | bytes) -> None:
        self.splitter.on_batch(payload)

    def handle_error(self, reason: str) -> None:
        # A partial line cannot be completed by a later connection.
        self.splitter.flush()
        invoke_handler("on_error", self.consumer.on_error, reason, peer=self.peer)


__all__ = ["CallbackConsumer", "IRCClient", "MessageConsumer"]
