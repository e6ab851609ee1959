"""
syslog.py

Renders an event as an RFC5424 syslog line:

    <PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID STRUCTURED-DATA MSG

The header comes from the caller; MSG is the event's ordered field list.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Optional

from events.base import SecurityEvent
from events.values import format_timestamp
from renderers.common import join_fields

SYSLOG_VERSION = 1
NILVALUE = "-"

# Header field limits from RFC5424 section 6
MAX_HOSTNAME = 255
MAX_APP_NAME = 48
MAX_PROCID = 128
MAX_MSGID = 32

_LINE_ESCAPES = str.maketrans({"\n": "\\n", "\r": "\\r", "\x00": "\\u0000"})


class SyslogHeaderError(ValueError):
    """Raised when header material cannot be framed as RFC5424."""
    pass


class Facility(IntEnum):
    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    SECURITY = 13
    CONSOLE = 14
    SOLARIS_CRON = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23


class Severity(IntEnum):
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7


def _check_token(name: str, value: Optional[str], max_length: int) -> None:
    if value is None:
        return
    if not value or len(value) > max_length:
        raise SyslogHeaderError(f"{name} must be 1 to {max_length} characters, got {len(value)}")
    if any(not 33 <= ord(char) <= 126 for char in value):
        raise SyslogHeaderError(f"{name} must be printable US-ASCII without spaces: {value!r}")


@dataclass(frozen=True)
class SyslogHeader:
    """
    RFC5424 header material supplied by the transport side.

    Fields left as None render as the NILVALUE "-".
    """
    facility: Facility = Facility.LOCAL0
    severity: Severity = Severity.WARNING
    timestamp: Optional[datetime] = None
    hostname: Optional[str] = None
    app_name: Optional[str] = None
    procid: Optional[str] = None
    msgid: Optional[str] = None
    structured_data: str = NILVALUE

    def __post_init__(self) -> None:
        object.__setattr__(self, "facility", Facility(self.facility))
        object.__setattr__(self, "severity", Severity(self.severity))
        _check_token("hostname", self.hostname, MAX_HOSTNAME)
        _check_token("app_name", self.app_name, MAX_APP_NAME)
        _check_token("procid", self.procid, MAX_PROCID)
        _check_token("msgid", self.msgid, MAX_MSGID)

        sd = self.structured_data
        if sd != NILVALUE and not (sd.startswith("[") and sd.endswith("]")):
            raise SyslogHeaderError(f"structured_data must be '-' or bracketed elements: {sd!r}")
        if any(char in sd for char in "\n\r\x00"):
            raise SyslogHeaderError("structured_data must not contain line breaks or NUL")

    @property
    def priority(self) -> int:
        return self.facility * 8 + self.severity

    def prefix(self) -> str:
        """Everything before MSG, ending with the structured data element."""
        timestamp = format_timestamp(self.timestamp) if self.timestamp is not None else NILVALUE
        return " ".join([
            f"<{self.priority}>{SYSLOG_VERSION}",
            timestamp,
            self.hostname or NILVALUE,
            self.app_name or NILVALUE,
            self.procid or NILVALUE,
            self.msgid or NILVALUE,
            self.structured_data,
        ])


class SyslogRenderer:
    """
    Formats events as RFC5424 lines. Holds no state.
    """

    def render(self, event: SecurityEvent, header: SyslogHeader) -> str:
        """
        Render ``event`` under ``header``.

        The MSG part carries the same pairs, in the same order, as the
        display form. The returned line never contains a raw newline,
        carriage return or NUL.
        """
        line = f"{header.prefix()} {join_fields(event)}"
        return line.translate(_LINE_ESCAPES)


_renderer = SyslogRenderer()


def render_syslog(event: SecurityEvent, header: SyslogHeader) -> str:
    return _renderer.render(event, header)
