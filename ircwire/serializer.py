"""IRC message serialization."""

from __future__ import annotations

from .constants import KEEPALIVE_REPLY, TAG_SEPARATOR, TAG_VALUE_SEPARATOR
from .models import IRCMessage, IRCParams, TagValue


def serialize_irc_message(message: IRCMessage) -> str:
    """Render ``message`` as a wire line without the CRLF terminator.

    A message carrying ``raw`` is returned unchanged. Otherwise the output is
    ``@tags :prefix command middle... :trailing`` where every emitted field
    except the trailing one is followed by a single space. Parameter text is
    not escaped; callers must not embed CR/LF or ambiguous leading colons.
    """
    if message.raw is not None:
        return message.raw

    parts: list[str] = []
    rendered_tags = [
        tag
        for key, value in message.tags.items()
        if (tag := _format_tag(key, value)) is not None
    ]
    if rendered_tags:
        parts.append(f"@{TAG_SEPARATOR.join(rendered_tags)} ")
    if message.prefix is not None:
        parts.append(f":{message.prefix} ")
    parts.append(f"{message.command} ")
    parts.extend(f"{param} " for param in message.params.middle)
    if message.params.trailing is not None:
        parts.append(f":{message.params.trailing}")
    return "".join(parts)


def build_pong(token: str) -> str:
    """Keepalive reply echoing the PING token."""
    return serialize_irc_message(
        IRCMessage(command=KEEPALIVE_REPLY, params=IRCParams(trailing=token))
    )


def _format_tag(key: str, value: TagValue) -> str | None:
    if value is True:
        return key
    if value is False:
        return None
    return f"{key}{TAG_VALUE_SEPARATOR}{value}"


__all__ = ["serialize_irc_message", "build_pong"]
