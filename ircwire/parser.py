"""IRC message parsing (RFC 1459 / RFC 2812 with IRCv3 message tags)."""

from __future__ import annotations

import re

from .constants import TAG_SEPARATOR, TAG_VALUE_SEPARATOR
from .errors import MessageParseError
from .models import IRCMessage, IRCParams, TagValue
from .tokenizer import split, split_first

# RFC 1459 §2.3.1: command = 1*letter / 3digit
_COMMAND_RE = re.compile(r"[A-Za-z]+|[0-9]{3}")


def parse_irc_message(line: str) -> IRCMessage:
    """Parse a single IRC line (CRLF already removed by the framing layer).

    Every read is bounds-checked: empty input, lines of only spaces and lines
    truncated inside the tag block or prefix raise instead of over-reading.

    Raises:
        MessageParseError: The line is structurally malformed.
    """
    raw = line.split("\r", 1)[0]
    length = len(raw)
    tags: dict[str, TagValue] = {}
    prefix: str | None = None
    position = 0

    if raw.startswith("@"):
        nextspace = raw.find(" ")
        if nextspace == -1:
            raise MessageParseError("truncated_tags", raw)
        tags = _parse_tags(raw[1:nextspace])
        position = nextspace + 1

    position = _skip_spaces(raw, position)

    if position < length and raw[position] == ":":
        nextspace = raw.find(" ", position)
        if nextspace == -1:
            raise MessageParseError("truncated_prefix", raw)
        prefix = raw[position + 1 : nextspace]
        position = _skip_spaces(raw, nextspace + 1)

    nextspace = raw.find(" ", position)
    command = raw[position:] if nextspace == -1 else raw[position:nextspace]
    if not command:
        raise MessageParseError("missing_command", raw)
    if not _COMMAND_RE.fullmatch(command):
        raise MessageParseError("invalid_command", raw)

    params = IRCParams()
    message = IRCMessage(command=command, params=params, tags=tags, prefix=prefix, raw=raw)
    if nextspace == -1:
        return message

    position = _skip_spaces(raw, nextspace + 1)
    while position < length:
        if raw[position] == ":":
            params.trailing = raw[position + 1 :]
            break
        nextspace = raw.find(" ", position)
        if nextspace == -1:
            params.middle.append(raw[position:])
            break
        params.middle.append(raw[position:nextspace])
        position = _skip_spaces(raw, nextspace + 1)

    return message


def try_parse_irc_message(line: str) -> IRCMessage | None:
    """Like :func:`parse_irc_message` but returns None for malformed lines."""
    try:
        return parse_irc_message(line)
    except MessageParseError:
        return None


def _skip_spaces(raw: str, position: int) -> int:
    while position < len(raw) and raw[position] == " ":
        position += 1
    return position


def _parse_tags(raw_tags: str) -> dict[str, TagValue]:
    tags: dict[str, TagValue] = {}
    for piece in split(raw_tags, TAG_SEPARATOR):
        key, value = split_first(piece, TAG_VALUE_SEPARATOR)
        if not key:
            continue
        tags[key] = True if value is None else value
    return tags


__all__ = ["parse_irc_message", "try_parse_irc_message"]
