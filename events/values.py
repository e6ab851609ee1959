"""
values.py

Text conversion for field values. Both renderers use these functions, so a
value always reads the same in the display line and in the syslog line.
"""

import json
import re
from datetime import datetime, timezone
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Any, Iterable

# Rendered for optional fields that carry no value
ABSENT = "-"

# A bare token must stay a single name=value pair on one line
_UNSAFE_BARE = re.compile(r'[\s"=\x00-\x1f\x7f]')


def quote(text: str) -> str:
    """Double-quote ``text``, escaping quotes, backslashes and control characters."""
    return json.dumps(text, ensure_ascii=False)


def bare(text: str) -> str:
    """Emit ``text`` unquoted unless it would break the pair framing."""
    if not text or _UNSAFE_BARE.search(text):
        return quote(text)
    return text


def format_timestamp(value: datetime) -> str:
    """RFC3339 text; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def format_list(items: Iterable[Any]) -> str:
    return "[" + ",".join(format_value(item) for item in items) + "]"


def format_value(value: Any) -> str:
    """
    Convert one field value to its text form.

    Strings and byte payloads are quoted; numbers, booleans, enums,
    addresses and timestamps use their native form. Sequences become
    bracketed lists and None becomes the absent marker.
    """
    if value is None:
        return ABSENT
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return bare(str(value.value) if isinstance(value.value, str) else value.name)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, (bytes, bytearray)):
        return quote(bytes(value).decode("utf-8", errors="replace"))
    if isinstance(value, (IPv4Address, IPv6Address)):
        return str(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, (list, tuple)):
        return format_list(value)
    # Small value types (TriageScore, FtpCommand) define their own text form
    return bare(str(value))
