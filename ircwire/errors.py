"""Centralized error hierarchy.

Classes:
  InternalError        – Base for all internal errors.
  ParsingError         – Wire text that does not follow the message grammar.
  NetworkError         – Transport/IO issues.
  MessageParseError    – One line failed structural parsing.
  TransportError       – The transport collaborator failed an operation.

Parse failures never escape the frame splitter; transport failures are
reported to the consumer through ``on_error``.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all ircwire errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class ParsingError(InternalError):
    """Raised when wire text does not follow the message grammar."""


class NetworkError(InternalError):
    """Raised for network or transport layer errors."""


class MessageParseError(ParsingError):
    """A single line could not be parsed into a message.

    Args:
        reason: Short machine-friendly failure reason (e.g. ``truncated_prefix``).
        line: The offending line, CR already stripped.
    """

    def __init__(self, reason: str, line: str) -> None:
        super().__init__(
            f"Malformed IRC line ({reason}): {line!r}",
            data={"reason": reason, "line": line},
        )
        self.reason = reason
        self.line = line


class TransportError(NetworkError):
    """Raised when the transport collaborator fails.

    Args:
        message: Human-readable reason, forwarded verbatim to ``on_error``.
        operation_type: Optional operation type (e.g. 'connect', 'send').
    """

    def __init__(self, message: str, operation_type: str | None = None) -> None:
        super().__init__(message, data={"operation_type": operation_type})
        self.operation_type = operation_type


__all__ = [
    "InternalError",
    "ParsingError",
    "NetworkError",
    "MessageParseError",
    "TransportError",
]
