"""
country.py

Decodes the 2-byte country codes attached to events by geo-IP enrichment.
Decoding never fails: anything that is not valid UTF-8 becomes "XX".
"""

from typing import Iterable, List, Optional

from utils import app_logger


# Used when lookup failed upstream or the bytes are not valid text
UNKNOWN_COUNTRY_CODE = "XX"


def decode(raw: Optional[bytes]) -> str:
    """
    Decode a raw 2-byte country code into its text form.

    Args:
        raw: The two bytes supplied by enrichment, or None when the event
            carries no code.

    Returns:
        The UTF-8 text of ``raw``, or ``UNKNOWN_COUNTRY_CODE``.
    """
    if not isinstance(raw, (bytes, bytearray)) or len(raw) != 2:
        app_logger.debug(f"Country code {raw!r} is not 2 bytes, using {UNKNOWN_COUNTRY_CODE}")
        return UNKNOWN_COUNTRY_CODE

    try:
        return bytes(raw).decode("utf-8")
    except UnicodeDecodeError:
        app_logger.debug(f"Country code {bytes(raw)!r} is not UTF-8, using {UNKNOWN_COUNTRY_CODE}")
        return UNKNOWN_COUNTRY_CODE


def decode_all(raws: Iterable[Optional[bytes]]) -> List[str]:
    """Decode every code in order; the result has the same length as the input."""
    return [decode(raw) for raw in raws]


def encode(code: str) -> bytes:
    """Convert 2-character text to the raw form; anything else becomes b"XX"."""
    encoded = code.encode("utf-8") if isinstance(code, str) else b""
    if len(encoded) == 2:
        return encoded
    return UNKNOWN_COUNTRY_CODE.encode("ascii")
