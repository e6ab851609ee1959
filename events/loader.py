"""
loader.py

Builds events from plain dictionaries, as handed over in JSON by the
detection engine.

Each kind's dataclass is validated by a pydantic ``TypeAdapter`` in strict
mode, so integers, floats, booleans and strings must arrive with their JSON
types. Addresses, timestamps, country codes, byte payloads and categories
accept the wire forms listed in ``events.coercion``.
"""

import json
import keyword
from dataclasses import fields as dataclass_fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from events.base import SecurityEvent
from events.endpoints import MisalignedEndpointsError
from events.registry import get_event_class
from utils import app_logger


class EventLoadError(Exception):
    """Raised when a dictionary cannot be turned into an event."""
    pass


@lru_cache(maxsize=None)
def _adapter(cls: type) -> TypeAdapter:
    return TypeAdapter(cls)


def _describe(cls: type, error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        loc = ".".join(str(part) for part in detail["loc"])
        parts.append(f"{cls.__name__}.{loc}: {detail['msg']}" if loc else f"{cls.__name__}: {detail['msg']}")
    return "; ".join(parts)


def _build(cls: type, data: Dict[str, Any]) -> Any:
    """Instantiate the event dataclass ``cls`` from ``data``."""
    init_names = {f.name for f in dataclass_fields(cls) if f.init}

    payload: Dict[str, Any] = {}
    for key, value in data.items():
        attr = f"{key}_" if keyword.iskeyword(key) else key
        if attr not in init_names:
            raise EventLoadError(f"{cls.__name__} has no field {key!r}")
        payload[attr] = value

    # Strict validation only accepts an object for a dataclass in JSON mode
    try:
        document = json.dumps(payload, default=to_jsonable_python)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EventLoadError(f"{cls.__name__}: {e}") from e

    try:
        return _adapter(cls).validate_json(document, strict=True)
    except ValidationError as e:
        for detail in e.errors():
            cause = detail.get("ctx", {}).get("error")
            if isinstance(cause, MisalignedEndpointsError):
                raise cause from None
        raise EventLoadError(_describe(cls, e)) from e

def event_from_dict(data: Dict[str, Any]) -> SecurityEvent:
    """
    Build one event from a dictionary whose "kind" key names the event kind.

    Raises:
        EventLoadError: If the kind is unknown or a value cannot be converted
        MisalignedEndpointsError: If aggregate sequences differ in length
    """
    if not isinstance(data, dict):
        raise EventLoadError(f"Event must be an object, got {type(data).__name__}")

    payload = dict(data)
    kind = payload.pop("kind", None)
    if kind is None:
        raise EventLoadError("Event is missing its 'kind'")

    try:
        cls = get_event_class(kind)
    except LookupError as e:
        raise EventLoadError(str(e)) from e

    return _build(cls, payload)


def load_events(path: str) -> List[SecurityEvent]:
    """
    Read events from a JSON file holding one object or a list of objects.

    Raises:
        FileNotFoundError: If the file doesn't exist
        EventLoadError: If the JSON is malformed or an event is invalid
    """
    events_file = Path(path)

    if not events_file.exists():
        error_msg = f"Events file not found: {path}"
        app_logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    try:
        with open(events_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        error_msg = f"Invalid JSON in {events_file.name}: {e}"
        app_logger.error(error_msg)
        raise EventLoadError(error_msg) from e

    records = data if isinstance(data, list) else [data]
    events = [event_from_dict(record) for record in records]

    app_logger.info(f"Loaded {len(events)} events from {events_file.name}")
    return events
