"""
coercion.py

Annotated field types shared by the event kinds.

Python callers pass ready-made values and the annotations have no effect.
When events are loaded from JSON, pydantic validates each annotated field
with the function attached to it, so the wire forms below are accepted:

    addresses       "10.0.0.1", "2001:db8::1"
    timestamps      ISO-8601 text or integer nanoseconds since the epoch
    country codes   2-character text, a list of byte values, or null
    byte payloads   text or a list of byte values

Every other type is rejected with a ``ValueError``, which pydantic reports
against the offending field.
"""

from datetime import datetime, timedelta, timezone
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Annotated, Any, Optional, Union

from pydantic import PlainValidator

from events.country import encode

NANOS_PER_SECOND = 1_000_000_000


def _to_ip_address(value: Any) -> Union[IPv4Address, IPv6Address]:
    if isinstance(value, (IPv4Address, IPv6Address)):
        return value
    if isinstance(value, str):
        return ip_address(value)
    raise ValueError(f"expected an IP address as text, got {type(value).__name__}")


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        seconds, nanos = divmod(value, NANOS_PER_SECOND)
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(microseconds=nanos // 1000)
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp {value} is out of range: {e}") from e
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"expected ISO-8601 text or nanoseconds, got {type(value).__name__}")


def _to_country_code(value: Any) -> Optional[bytes]:
    """Text goes through the encoder; byte lists are kept as-is, even if not UTF-8."""
    if value is None or isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return encode(value)
    if isinstance(value, list):
        return _byte_list(value)
    raise ValueError(f"expected country code text or byte list, got {type(value).__name__}")


def _to_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, list):
        return _byte_list(value)
    raise ValueError(f"expected text or byte list, got {type(value).__name__}")


def _byte_list(values: list) -> bytes:
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in values):
        raise ValueError("expected a list of byte values")
    try:
        return bytes(values)
    except ValueError as e:
        raise ValueError(f"expected a list of byte values: {e}") from e


IpAddress = Annotated[Union[IPv4Address, IPv6Address], PlainValidator(_to_ip_address)]
Timestamp = Annotated[datetime, PlainValidator(_to_datetime)]
CountryCode = Annotated[Optional[bytes], PlainValidator(_to_country_code)]
Payload = Annotated[bytes, PlainValidator(_to_bytes)]
