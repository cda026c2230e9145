"""
Configuration constants for the ircwire codec and transport

Each tunable constant can be overridden by setting an environment variable
with the same name. Protocol constants are fixed by the IRC wire format.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Args:
        name: The name of the environment variable to read.
        default: The default float value to return if parsing fails.

    Returns:
        The parsed float value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Wire format
LINE_TERMINATOR = "\r\n"
TAG_SEPARATOR = ";"
TAG_VALUE_SEPARATOR = "="
KEEPALIVE_REQUEST = "PING"
KEEPALIVE_REPLY = "PONG"

# Websocket transport
IRCWIRE_WS_URL = os.getenv("IRCWIRE_WS_URL", "wss://irc-ws.chat.twitch.tv:443")
IRCWIRE_OPEN_TIMEOUT = _get_env_float(
    "IRCWIRE_OPEN_TIMEOUT", 10.0
)  # Seconds allowed for the websocket opening handshake
IRCWIRE_SEND_QUEUE_SIZE = _get_env_int(
    "IRCWIRE_SEND_QUEUE_SIZE", 256
)  # Outbound lines waiting for the writer task

# Framing
IRCWIRE_MAX_PARTIAL_LINE = _get_env_int(
    "IRCWIRE_MAX_PARTIAL_LINE", 8703
)  # IRCv3: 8191 bytes of tags + 512 bytes of message
