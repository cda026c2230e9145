"""Project logging package.

Contains the event logger and its JSON template catalog. Avoid importing
stdlib logging through this package name externally.
"""

from .logger import EVENT_TEMPLATES, WireLogger, load_event_templates, logger  # noqa: F401

__all__ = ["WireLogger", "logger", "EVENT_TEMPLATES", "load_event_templates"]
