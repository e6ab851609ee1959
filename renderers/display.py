"""
display.py

Renders an event as one human-readable line:

    PortScan { category=Reconnaissance sensor="s1" orig_addr=10.0.0.1 ... }
"""

from events.base import SecurityEvent
from renderers.common import join_fields


class DisplayRenderer:
    """
    Formats events for interactive viewers. Holds no state.
    """

    def render(self, event: SecurityEvent) -> str:
        """
        Render ``event`` as ``<KindName> { name=value ... }``.

        The result has no trailing newline and is identical for repeated
        calls on the same event.
        """
        return f"{event.kind_name} {{ {join_fields(event)} }}"


_renderer = DisplayRenderer()


def render_display(event: SecurityEvent) -> str:
    return _renderer.render(event)
