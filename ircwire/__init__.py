"""ircwire: IRC wire-format codec and framing layer.

Parses RFC 1459 / RFC 2812 lines (with IRCv3 message tags) into structured
messages, serializes them back, and splits transport deliveries into lines
while answering server PINGs.
"""

from .client import CallbackConsumer, IRCClient, MessageConsumer  # noqa: F401
from .errors import (  # noqa: F401
    InternalError,
    MessageParseError,
    NetworkError,
    ParsingError,
    TransportError,
)
from .framing import FrameSplitter  # noqa: F401
from .models import IRCMessage, IRCParams, TagValue  # noqa: F401
from .parser import parse_irc_message, try_parse_irc_message  # noqa: F401
from .serializer import build_pong, serialize_irc_message  # noqa: F401
from .tokenizer import split, split_first  # noqa: F401
from .transport import Transport, TransportSink, WebSocketTransport  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "CallbackConsumer",
    "FrameSplitter",
    "IRCClient",
    "IRCMessage",
    "IRCParams",
    "InternalError",
    "MessageConsumer",
    "MessageParseError",
    "NetworkError",
    "ParsingError",
    "TagValue",
    "Transport",
    "TransportError",
    "TransportSink",
    "WebSocketTransport",
    "build_pong",
    "parse_irc_message",
    "serialize_irc_message",
    "split",
    "split_first",
    "try_parse_irc_message",
]
