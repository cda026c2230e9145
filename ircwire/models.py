"""IRC message data model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

# A tag is either a bare flag (``vip``) or carries text (``badge=1``, ``x=``).
TagValue = bool | str


@dataclass(slots=True)
class IRCParams:
    middle: list[str] = field(default_factory=list)
    # None means no trailing parameter; "" is a present but empty one.
    trailing: str | None = None


@dataclass(slots=True)
class IRCMessage:
    """A single IRC protocol line in structured form.

    ``raw`` holds the original text for parsed messages. When it is set on an
    outbound message the serializer emits it verbatim; use :meth:`without_raw`
    before editing a parsed message that should be re-serialized.
    """

    command: str
    params: IRCParams = field(default_factory=IRCParams)
    tags: dict[str, TagValue] = field(default_factory=dict)
    prefix: str | None = None
    raw: str | None = None

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("IRCMessage.command must be a non-empty string")

    @property
    def arguments(self) -> list[str]:
        """Middle parameters followed by the trailing one, if present."""
        if self.params.trailing is None:
            return list(self.params.middle)
        return [*self.params.middle, self.params.trailing]

    def without_raw(self) -> IRCMessage:
        return replace(
            self,
            raw=None,
            tags=dict(self.tags),
            params=IRCParams(list(self.params.middle), self.params.trailing),
        )


__all__ = ["IRCMessage", "IRCParams", "TagValue"]
