"""Batch framing: split transport deliveries into lines and dispatch them."""

from __future__ import annotations

import codecs
import logging
from collections.abc import Callable
from typing import Any

from .constants import IRCWIRE_MAX_PARTIAL_LINE, KEEPALIVE_REQUEST, LINE_TERMINATOR
from .errors import MessageParseError
from .logs.logger import logger
from .models import IRCMessage
from .parser import parse_irc_message
from .serializer import build_pong
from .tokenizer import split


def invoke_handler(
    handler_name: str,
    handler: Callable[..., Any],
    *args: Any,
    peer: str | None = None,
) -> bool:
    """Call a consumer handler; its exceptions are logged, never propagated."""
    try:
        handler(*args)
    except Exception as e:  # noqa: BLE001
        logger.log_event(
            "irc",
            "message_handler_error",
            level=logging.ERROR,
            peer=peer,
            handler=handler_name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return False
    return True


class FrameSplitter:
    """Turns one transport delivery into an ordered stream of messages.

    Lines of a batch are handled strictly in arrival order. A ``PING`` that
    carries a trailing token is answered with ``PONG :<token>`` through
    ``send_raw`` before the PING itself is forwarded to ``on_message``.

    With ``buffered=True`` text after the last CRLF is held back and joined
    with the next delivery, for transports whose chunks may split a line.
    Buffered mode keeps state, so deliveries must not overlap.
    """

    def __init__(
        self,
        send_raw: Callable[[str], Any],
        on_message: Callable[[IRCMessage], Any],
        *,
        buffered: bool = False,
        max_partial_line: int = IRCWIRE_MAX_PARTIAL_LINE,
        peer: str | None = None,
    ) -> None:
        self.send_raw = send_raw
        self.on_message = on_message
        self.buffered = buffered
        self.max_partial_line = max_partial_line
        self.peer = peer
        self._partial = ""
        # Set after an oversized partial line; cleared at its terminator.
        self._discarding = False
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def on_batch(self, payload: str | bytes) -> int:
        """Process one delivery; returns the number of messages forwarded."""
        if isinstance(payload, bytes | bytearray):
            if self.buffered:
                # A multi-byte character may straddle two chunks.
                text = self._decoder.decode(bytes(payload))
            else:
                text = bytes(payload).decode("utf-8", errors="replace")
        else:
            text = payload

        if self.buffered:
            text = self._partial + text
            if self._discarding:
                text = self._skip_discarded(text)
        lines = split(text, LINE_TERMINATOR)
        if self.buffered:
            self._partial = self._hold_partial(lines.pop())

        forwarded = 0
        for line in lines:
            if line and self._handle_line(line):
                forwarded += 1
        return forwarded

    def flush(self) -> str:
        """Drop and return any partial line held back in buffered mode."""
        partial, self._partial = self._partial, ""
        self._discarding = False
        self._decoder.reset()
        return partial

    @property
    def pending(self) -> str:
        return self._partial

    def _hold_partial(self, partial: str) -> str:
        if len(partial) > self.max_partial_line:
            logger.log_event(
                "irc",
                "partial_line_overflow",
                level=logging.WARNING,
                peer=self.peer,
                size=len(partial),
                limit=self.max_partial_line,
            )
            self._discarding = True
            return self._keep_split_terminator(partial)
        return partial

    def _skip_discarded(self, text: str) -> str:
        """Drop the rest of an oversized line up to and including its CRLF."""
        end = text.find(LINE_TERMINATOR)
        if end == -1:
            return self._keep_split_terminator(text)
        self._discarding = False
        return text[end + len(LINE_TERMINATOR) :]

    @staticmethod
    def _keep_split_terminator(text: str) -> str:
        # A lone CR may be the first half of the terminator in the next chunk.
        return LINE_TERMINATOR[0] if text.endswith(LINE_TERMINATOR[0]) else ""

    def _handle_line(self, line: str) -> bool:
        try:
            message = parse_irc_message(line)
        except MessageParseError as e:
            logger.log_event(
                "irc",
                "parse_failed",
                level=logging.DEBUG,
                peer=self.peer,
                reason=e.reason,
                line=e.line,
            )
            return False

        if message.command == KEEPALIVE_REQUEST and message.params.trailing is not None:
            token = message.params.trailing
            self.send_raw(build_pong(token))
            logger.log_event(
                "irc", "keepalive_reply", level=logging.DEBUG, peer=self.peer, token=token
            )

        invoke_handler("on_message", self.on_message, message, peer=self.peer)
        return True


__all__ = ["FrameSplitter", "invoke_handler"]
