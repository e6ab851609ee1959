"""
common.py

Pair formatting shared by the display and syslog renderers.
"""

from events.base import SecurityEvent


def join_fields(event: SecurityEvent) -> str:
    """Space-separated ``name=value`` pairs in the event's canonical order."""
    return " ".join(f"{name}={text}" for name, text in event.fields())
