"""Websocket transport collaborator.

Opens a single websocket, feeds every received frame to the bound sink as a
batch and drains a send queue for outbound lines. Reconnection is left to the
caller: :meth:`WebSocketTransport.run` returns after the first failure.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Protocol

import websockets

from .constants import IRCWIRE_OPEN_TIMEOUT, IRCWIRE_SEND_QUEUE_SIZE, IRCWIRE_WS_URL
from .errors import TransportError
from .logging_config import log_structured_error
from .logs.logger import logger


class Transport(Protocol):
    """What the codec needs from a transport: a fire-and-forget send."""

    def send_raw(self, line: str) -> None:
        """Hand one outbound line to the transport."""
        ...


class TransportSink(Protocol):
    """Receiver of transport events (normally an ``IRCClient``)."""

    def handle_open(self) -> None:
        """Connection established."""
        ...

    def handle_batch(self, payload: str | bytes) -> None:
        """One delivery containing zero or more CRLF-delimited lines."""
        ...

    def handle_error(self, reason: str) -> None:
        """Transport failure with a human-readable reason."""
        ...


class WebSocketTransport:
    """Websocket transport built on the ``websockets`` library.

    Attributes:
        url (str): Websocket URL (``ws://`` or ``wss://``).
        open_timeout (float): Seconds allowed for the opening handshake.
        ws: Active websocket connection, None when not connected.
    """

    def __init__(
        self,
        url: str = IRCWIRE_WS_URL,
        *,
        open_timeout: float = IRCWIRE_OPEN_TIMEOUT,
        queue_size: int = IRCWIRE_SEND_QUEUE_SIZE,
    ) -> None:
        self.url = url
        self.open_timeout = open_timeout
        self.ws: Any = None
        self._queue: asyncio.Queue[str] = asyncio.Queue(maxsize=queue_size)
        self._sink: TransportSink | None = None
        self._closing = False

    def bind(self, sink: TransportSink) -> None:
        self._sink = sink

    @property
    def is_connected(self) -> bool:
        return self.ws is not None

    def send_raw(self, line: str) -> None:
        """Queue ``line`` for the writer task without blocking."""
        try:
            self._queue.put_nowait(line)
        except asyncio.QueueFull:
            logger.log_event(
                "transport", "send_queue_full", level=logging.WARNING, peer=self.url
            )
            self._report(TransportError("Send queue full", operation_type="send"))

    async def run(self) -> None:
        """Connect and pump frames until the connection ends.

        Every failure (handshake, network, close by the peer) is reported
        once through the sink's ``handle_error`` and ends the run.
        """
        if self._sink is None:
            raise RuntimeError("WebSocketTransport.run() called before bind()")
        sink = self._sink
        self._closing = False
        self._discard_stale_lines()
        logger.log_event("transport", "connect_start", peer=self.url, url=self.url)
        try:
            async with websockets.connect(self.url, open_timeout=self.open_timeout) as ws:
                self.ws = ws
                logger.log_event("transport", "connected", peer=self.url)
                sink.handle_open()
                writer = asyncio.create_task(self._drain_queue(ws))
                try:
                    async for frame in ws:
                        sink.handle_batch(frame)
                finally:
                    writer.cancel()
                    with contextlib.suppress(asyncio.CancelledError):
                        await writer
                if not self._closing:
                    self._report(
                        TransportError(
                            f"Connection closed by peer: code={ws.close_code}, reason={ws.close_reason}",
                            operation_type="receive",
                        )
                    )
        except (websockets.exceptions.WebSocketException, OSError, TimeoutError) as e:
            if not self._closing:
                self._report(
                    TransportError(
                        f"WebSocket connection failed: {str(e)}",
                        operation_type="connect" if self.ws is None else "receive",
                    )
                )
        finally:
            self.ws = None

    async def close(self) -> None:
        """Close the connection; ``run()`` returns without reporting an error."""
        self._closing = True
        if self.ws is not None:
            await self.ws.close()
            logger.log_event(
                "transport",
                "closed",
                peer=self.url,
                code=getattr(self.ws, "close_code", None),
                reason=getattr(self.ws, "close_reason", None),
            )

    async def _drain_queue(self, ws: Any) -> None:
        while True:
            line = await self._queue.get()
            try:
                await ws.send(line)
            except websockets.exceptions.ConnectionClosed:
                # The receive loop observes the closure and reports it.
                return
            except (websockets.exceptions.WebSocketException, OSError) as e:
                self._report(
                    TransportError(f"WebSocket send failed: {str(e)}", operation_type="send")
                )
                # Already reported; end the receive loop without a second report.
                self._closing = True
                with contextlib.suppress(websockets.exceptions.WebSocketException, OSError):
                    await ws.close()
                return

    def _discard_stale_lines(self) -> None:
        # Lines queued while disconnected belong to no connection.
        dropped = 0
        while not self._queue.empty():
            self._queue.get_nowait()
            dropped += 1
        if dropped:
            logger.log_event(
                "transport",
                "stale_lines_dropped",
                level=logging.WARNING,
                peer=self.url,
                count=dropped,
            )

    def _report(self, error: TransportError) -> None:
        log_structured_error(
            error_type="network",
            message="Transport failure",
            exception=error,
            context={"url": self.url, "operation": error.operation_type},
        )
        if self._sink is not None:
            self._sink.handle_error(str(error))


__all__ = ["Transport", "TransportSink", "WebSocketTransport"]
