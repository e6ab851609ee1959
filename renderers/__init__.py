"""
renderers package

Display and RFC5424 syslog renderers for detection events.
"""

from renderers.display import DisplayRenderer, render_display
from renderers.syslog import (
    Facility,
    Severity,
    SyslogHeader,
    SyslogHeaderError,
    SyslogRenderer,
    render_syslog,
)

__all__ = [
    "DisplayRenderer",
    "Facility",
    "Severity",
    "SyslogHeader",
    "SyslogHeaderError",
    "SyslogRenderer",
    "render_display",
    "render_syslog",
]
