"""Event logger used across the codec, framing and transport layers."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

EVENT_TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")


def load_event_templates(
    path: Path = EVENT_TEMPLATES_PATH,
) -> dict[tuple[str, str], str]:
    """Read the `{domain: {action: template}}` catalog into a flat lookup.

    Raises:
        OSError: The catalog file cannot be read.
        ValueError: The file is not JSON or an entry is not a string template.
    """
    catalog = json.loads(path.read_text(encoding="utf-8"))
    templates: dict[tuple[str, str], str] = {}
    for domain, actions in catalog.items():
        for action, template in actions.items():
            if not isinstance(template, str):
                raise ValueError(f"Template for {domain}.{action} must be a string")
            templates[(domain, action)] = template
    return templates


EVENT_TEMPLATES = load_event_templates()


class WireLogger:
    def __init__(
        self,
        name: str = "ircwire",
        templates: dict[tuple[str, str], str] | None = None,
    ) -> None:
        self.templates = EVENT_TEMPLATES if templates is None else templates
        # Handlers belong to the application (see logging_config); records
        # propagate to the root logger.
        self.logger = logging.getLogger(name)

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        event_name = f"{domain}_{action}".lower()
        human_text = human
        derived = False
        if human_text is None:
            template = self.templates.get((domain, action))
            if template:
                try:
                    human_text = template.format(**kwargs)
                except (KeyError, IndexError, ValueError):
                    human_text = template
            else:
                human_text = f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
                derived = True
        kwargs.setdefault("_human_text", human_text)
        if derived:
            kwargs.setdefault("derived", True)
        self._log(level, event_name, exc_info=exc_info, **kwargs)

    def _log(
        self, level: int, event_name: str, exc_info: bool = False, **kwargs: object
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        kw: dict[str, object] = dict(kwargs)  # copy for mutation in extract
        peer, human_text = self._extract_reserved(kw)
        prefix = self._build_prefix(peer)
        msg = (
            self._build_debug_message(event_name, prefix, human_text, kw)
            if self._is_debug_enabled()
            else self._build_concise_message(event_name, prefix, human_text)
        )
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _is_debug_enabled() -> bool:
        return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def _extract_reserved(
        kwargs: dict[str, object],
    ) -> tuple[str | None, str | None]:
        peer_o = kwargs.pop("peer", None)
        human_text_o = kwargs.pop("_human_text", None)
        peer = peer_o if isinstance(peer_o, str) else None
        human_text = human_text_o if isinstance(human_text_o, str) else None
        return peer, human_text

    @staticmethod
    def _build_prefix(peer: str | None) -> str:
        # Pad to fixed width for alignment
        padded = (peer or "local").ljust(24)[:24]
        return f"[{padded}]"

    @staticmethod
    def _build_debug_message(
        event_name: str,
        prefix: str,
        human_text: str | None,
        kwargs: dict[str, object],
    ) -> str:
        context = ", ".join(f"{k}={v}" for k, v in kwargs.items())
        width = 32
        if len(event_name) <= width:
            ev = event_name.ljust(width)
        else:  # truncate but keep rightmost indicator
            ev = event_name[: width - 1] + "…"
        base = f"{ev} {prefix}"
        if human_text:
            base = f"{base} {human_text}"
        if context:
            base = f"{base} ({context})"
        return base

    @staticmethod
    def _build_concise_message(
        event_name: str, prefix: str, human_text: str | None
    ) -> str:
        return f"{prefix} {human_text or event_name}"


logger = WireLogger()
