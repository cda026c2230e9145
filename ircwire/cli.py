"""Command-line tap: connect, send a few raw lines, log every parsed message."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .client import IRCClient
from .constants import IRCWIRE_WS_URL
from .logging_config import LoggerConfigurator
from .logs.logger import logger
from .models import IRCMessage
from .transport import WebSocketTransport


class TapConsumer:
    """Sends the configured lines on connect and logs inbound traffic."""

    def __init__(self, send_lines: list[str]) -> None:
        self.send_lines = send_lines
        self.client: IRCClient | None = None
        self.errors: list[str] = []

    def on_connect(self) -> None:
        for line in self.send_lines:
            self.client.write(line)  # type: ignore[union-attr]

    def on_message(self, message: IRCMessage) -> None:
        logger.log_event(
            "irc",
            "message",
            peer=message.prefix,
            line=message.raw,
            command=message.command,
        )

    def on_error(self, reason: str) -> None:
        self.errors.append(reason)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ircwire-tap",
        description="Connect to an IRC-over-websocket server and log parsed messages.",
    )
    parser.add_argument("url", nargs="?", default=IRCWIRE_WS_URL)
    parser.add_argument(
        "--send",
        action="append",
        default=[],
        metavar="LINE",
        help="raw line to send once connected (repeatable, sent in order)",
    )
    parser.add_argument("--debug", action="store_true", help="enable DEBUG logging")
    return parser


async def run_tap(url: str, send_lines: list[str]) -> int:
    transport = WebSocketTransport(url)
    consumer = TapConsumer(send_lines)
    client = IRCClient(transport, consumer, peer=url)
    consumer.client = client
    transport.bind(client)
    await transport.run()
    return 1 if consumer.errors else 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    LoggerConfigurator(debug=True if args.debug else None).configure()
    logger.log_event("app", "start", url=args.url)
    try:
        return asyncio.run(run_tap(args.url, args.send))
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        return 0
    finally:
        logger.log_event("app", "shutdown")


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
