"""
events package

The detection event taxonomy, the field-ordering contract every kind
follows, and the country code decoding used while building field sequences.
"""

from events.base import (
    EventCategory,
    EventLevel,
    FieldBuilder,
    FieldOrderError,
    FieldSequence,
    LearningMethod,
    SecurityEvent,
    TriageScore,
)
from events.country import UNKNOWN_COUNTRY_CODE, decode, decode_all
from events.endpoints import Endpoint, EndpointGroup, MisalignedEndpointsError, MultiPortEndpoint
from events.registry import EVENT_KINDS, UnknownEventKindError, get_event_class

__all__ = [
    "EVENT_KINDS",
    "Endpoint",
    "EndpointGroup",
    "EventCategory",
    "EventLevel",
    "FieldBuilder",
    "FieldOrderError",
    "FieldSequence",
    "LearningMethod",
    "MisalignedEndpointsError",
    "MultiPortEndpoint",
    "SecurityEvent",
    "TriageScore",
    "UNKNOWN_COUNTRY_CODE",
    "UnknownEventKindError",
    "decode",
    "decode_all",
    "get_event_class",
]
