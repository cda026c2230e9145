"""Delimiter-based string splitting shared by the parser and the frame splitter."""

from __future__ import annotations


def split(text: str, separator: str) -> list[str]:
    """Split ``text`` around every occurrence of ``separator``.

    The separator never appears in the output, ``split("", sep)`` is ``[""]``
    and a trailing separator yields a trailing empty element, so joining the
    result with ``separator`` always reconstructs ``text``.

    Raises:
        ValueError: If ``separator`` is empty.
    """
    if not separator:
        raise ValueError("separator must not be empty")
    return text.split(separator)


def split_first(text: str, separator: str) -> tuple[str, str | None]:
    """Split ``text`` at the first ``separator`` only.

    Returns ``(head, None)`` when the separator does not occur, which keeps
    "absent" distinct from "present but empty" (``"key="`` -> ``("key", "")``).
    """
    if not separator:
        raise ValueError("separator must not be empty")
    head, found, tail = text.partition(separator)
    return head, (tail if found else None)


__all__ = ["split", "split_first"]
