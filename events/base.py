"""
base.py

The contract every detection event kind implements.

An event exposes its content as an ordered sequence of (name, text) pairs.
The sequence is assembled by ``FieldBuilder``, which only accepts fields in
the canonical order:

    category sensor
    -> originator address, port, country code(s)
    -> responder address, port, country code(s)
    -> proto
    -> kind-specific fields
    -> confidence triage_scores

Both renderers consume this sequence, so the display and syslog forms can
never disagree on field values or order.
"""

from dataclasses import dataclass, fields as dataclass_fields
from enum import Enum, IntEnum
from typing import Annotated, Any, Callable, ClassVar, Iterator, List, Optional, Set, Tuple, Union

from pydantic import PlainValidator

from events.coercion import CountryCode, IpAddress, Timestamp
from events.country import decode_all
from events.endpoints import Endpoint, EndpointGroup, MultiPortEndpoint
from events.values import bare, format_list, format_value
from utils import app_logger

Field = Tuple[str, str]
Side = Union[Endpoint, MultiPortEndpoint, EndpointGroup]

UNSPECIFIED_CATEGORY = "Unspecified"

CANONICAL_NAMES = frozenset(
    f"{side}_{name}"
    for side in ("orig", "resp")
    for name in ("addr", "addrs", "port", "ports", "country_code", "country_codes")
) | {"proto"}


class FieldOrderError(RuntimeError):
    """Raised when an event supplies its fields out of the canonical order."""
    pass


class EventCategory(Enum):
    """MITRE ATT&CK tactic an event is classified under."""
    RECONNAISSANCE = "Reconnaissance"
    INITIAL_ACCESS = "InitialAccess"
    EXECUTION = "Execution"
    CREDENTIAL_ACCESS = "CredentialAccess"
    DISCOVERY = "Discovery"
    LATERAL_MOVEMENT = "LateralMovement"
    COMMAND_AND_CONTROL = "CommandAndControl"
    EXFILTRATION = "Exfiltration"
    IMPACT = "Impact"
    COLLECTION = "Collection"
    DEFENSE_EVASION = "DefenseEvasion"
    PERSISTENCE = "Persistence"
    PRIVILEGE_ESCALATION = "PrivilegeEscalation"
    RESOURCE_DEVELOPMENT = "ResourceDevelopment"


def _to_category(value: Any) -> Optional[EventCategory]:
    if value is None or isinstance(value, EventCategory):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected an event category as text, got {type(value).__name__}")
    try:
        return EventCategory(value)
    except ValueError:
        pass
    try:
        return EventCategory[value]
    except KeyError:
        raise ValueError(f"unknown event category {value!r}") from None


Category = Annotated[Optional[EventCategory], PlainValidator(_to_category)]


class EventLevel(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class LearningMethod(Enum):
    UNSUPERVISED = "Unsupervised"
    SEMI_SUPERVISED = "SemiSupervised"


@dataclass(frozen=True)
class TriageScore:
    """Score assigned to an event by one triage policy."""
    policy_id: int
    score: float

    def __str__(self) -> str:
        return f"{self.policy_id}:{self.score!r}"


class _Phase(IntEnum):
    LEAD = 0
    ORIGINATOR = 1
    RESPONDER = 2
    PROTO = 3
    KIND = 4


class FieldBuilder:
    """
    Collects the rendered fields of one event in canonical order.

    The builder moves through fixed phases. Leading fields come first, then
    exactly one originator, one responder and the protocol, then any number
    of kind-specific fields. Anything else raises ``FieldOrderError``.
    """

    def __init__(self, kind_name: str) -> None:
        self.kind_name = kind_name
        self._phase = _Phase.LEAD
        self._fields: List[Field] = []
        self._names: Set[str] = set()

    def lead(self, name: str, value: Any, absent: Optional[str] = None) -> "FieldBuilder":
        if self._phase != _Phase.LEAD:
            self._fail(f"leading field {name!r} supplied after the endpoints")
        self._add(name, self._text(value, absent))
        return self

    def originator(self, side: Side) -> "FieldBuilder":
        self._advance(_Phase.ORIGINATOR)
        self._add_side("orig", side)
        return self

    def responder(self, side: Side) -> "FieldBuilder":
        self._advance(_Phase.RESPONDER)
        self._add_side("resp", side)
        return self

    def proto(self, proto: int) -> "FieldBuilder":
        self._advance(_Phase.PROTO)
        self._append("proto", format_value(proto))
        return self

    def field(self, name: str, value: Any, absent: Optional[str] = None) -> "FieldBuilder":
        if self._phase < _Phase.PROTO:
            self._fail(f"field {name!r} supplied before the endpoints and proto")
        self._phase = _Phase.KIND
        self._add(name, self._text(value, absent))
        return self

    def build(self) -> List[Field]:
        if self._phase < _Phase.PROTO:
            missing = [phase.name.lower() for phase in _Phase
                       if self._phase < phase <= _Phase.PROTO]
            self._fail(f"missing canonical fields: {', '.join(missing)}")
        return list(self._fields)

    @staticmethod
    def _text(value: Any, absent: Optional[str]) -> str:
        if value is None and absent is not None:
            return bare(absent)
        return format_value(value)

    def _advance(self, phase: _Phase) -> None:
        if self._phase != phase - 1:
            self._fail(f"{phase.name.lower()} supplied out of order")
        self._phase = phase

    def _add_side(self, prefix: str, side: Side) -> None:
        # A single host is a code sequence of length one, rendered without brackets
        if isinstance(side, EndpointGroup):
            codes = decode_all(side.country_codes)
            self._append(f"{prefix}_addrs", format_list(side.addrs))
            self._append(f"{prefix}_ports", format_list(side.ports))
            self._append(f"{prefix}_country_codes", "[" + ",".join(bare(code) for code in codes) + "]")
        elif isinstance(side, (Endpoint, MultiPortEndpoint)):
            self._append(f"{prefix}_addr", format_value(side.addr))
            if isinstance(side, MultiPortEndpoint):
                self._append(f"{prefix}_ports", format_list(side.ports))
            else:
                self._append(f"{prefix}_port", format_value(side.port))
            (code,) = decode_all([side.country_code])
            self._append(f"{prefix}_country_code", bare(code))
        else:
            self._fail(f"{prefix} side must be an Endpoint, MultiPortEndpoint or EndpointGroup, got {type(side).__name__}")

    def _add(self, name: str, text: str) -> None:
        if name in CANONICAL_NAMES:
            self._fail(f"{name!r} is a canonical field and cannot be added directly")
        self._append(name, text)

    def _append(self, name: str, text: str) -> None:
        if name in self._names:
            self._fail(f"duplicate field {name!r}")
        self._names.add(name)
        self._fields.append((name, text))

    def _fail(self, reason: str) -> None:
        error_msg = f"{self.kind_name}: {reason}"
        app_logger.error(error_msg)
        raise FieldOrderError(error_msg)


class FieldSequence:
    """
    Lazily built, re-iterable sequence of (name, text) pairs.

    Every iteration rebuilds the pairs from the immutable event, so the
    same sequence can feed both renderers.
    """

    def __init__(self, kind_name: str, producer: Callable[[], List[Field]]) -> None:
        self.kind_name = kind_name
        self._producer = producer

    def __iter__(self) -> Iterator[Field]:
        return iter(self._producer())

    def names(self) -> List[str]:
        return [name for name, _ in self]

    def as_dict(self) -> dict:
        return dict(self)


@dataclass(frozen=True, kw_only=True)
class SecurityEvent:
    """
    Base class for all detection events.

    Subclasses provide the two sides through ``_originator`` and
    ``_responder`` and append their own fields in ``_kind_fields``.
    Instances are immutable; list arguments are stored as tuples.
    """
    KIND: ClassVar[str] = "security event"
    LEVEL: ClassVar[EventLevel] = EventLevel.MEDIUM
    LEARNING_METHOD: ClassVar[LearningMethod] = LearningMethod.SEMI_SUPERVISED

    time: Timestamp
    sensor: str
    proto: int
    confidence: float
    category: Category = None
    triage_scores: Optional[Tuple[TriageScore, ...]] = None

    def __post_init__(self) -> None:
        for field in dataclass_fields(self):
            value = getattr(self, field.name)
            if isinstance(value, list):
                object.__setattr__(self, field.name, tuple(value))
        # Building the sides checks aggregate alignment at construction
        self._originator()
        self._responder()

    @property
    def kind_name(self) -> str:
        return type(self).__name__

    @property
    def kind(self) -> str:
        return self.KIND

    def fields(self) -> FieldSequence:
        return FieldSequence(self.kind_name, self._build_fields)

    def _build_fields(self) -> List[Field]:
        builder = FieldBuilder(self.kind_name)
        builder.lead("category", self.category, absent=UNSPECIFIED_CATEGORY)
        builder.lead("sensor", self.sensor)
        builder.originator(self._originator())
        builder.responder(self._responder())
        builder.proto(self.proto)
        self._kind_fields(builder)
        builder.field("confidence", self.confidence)
        builder.field("triage_scores", self.triage_scores)
        return builder.build()

    def _originator(self) -> Side:
        raise NotImplementedError

    def _responder(self) -> Side:
        raise NotImplementedError

    def _kind_fields(self, builder: FieldBuilder) -> None:
        pass


@dataclass(frozen=True, kw_only=True)
class SingleHostEvent(SecurityEvent):
    """An event between one originator host and one responder host."""
    orig_addr: IpAddress
    orig_port: Optional[int] = None
    orig_country_code: CountryCode = None
    resp_addr: IpAddress
    resp_port: Optional[int] = None
    resp_country_code: CountryCode = None

    def _originator(self) -> Side:
        return Endpoint(self.orig_addr, self.orig_port, self.orig_country_code)

    def _responder(self) -> Side:
        return Endpoint(self.resp_addr, self.resp_port, self.resp_country_code)


@dataclass(frozen=True, kw_only=True)
class SessionEvent(SingleHostEvent):
    """
    An event built from one observed session, carrying its traffic counters
    ahead of the protocol-specific fields.
    """
    start_time: Timestamp
    duration: int = 0
    orig_pkts: int = 0
    resp_pkts: int = 0
    orig_l2_bytes: int = 0
    resp_l2_bytes: int = 0

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("start_time", self.start_time)
        builder.field("duration", self.duration)
        builder.field("orig_pkts", self.orig_pkts)
        builder.field("resp_pkts", self.resp_pkts)
        builder.field("orig_l2_bytes", self.orig_l2_bytes)
        builder.field("resp_l2_bytes", self.resp_l2_bytes)
        self._protocol_fields(builder)

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        pass
