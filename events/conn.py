"""
conn.py

Connection-level detections: port scans, external DDoS and blocklisted
connections. The scan and DDoS kinds are aggregates over many hosts.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from events.base import FieldBuilder, SecurityEvent, SessionEvent, Side
from events.coercion import CountryCode, IpAddress, Timestamp
from events.endpoints import Endpoint, EndpointGroup, MultiPortEndpoint


@dataclass(frozen=True, kw_only=True)
class PortScan(SecurityEvent):
    """
    Emitted when one host scans many ports of another host.
    """
    KIND = "port scan"

    orig_addr: IpAddress
    orig_port: Optional[int] = None
    orig_country_code: CountryCode = None
    resp_addr: IpAddress
    resp_ports: Optional[Tuple[int, ...]] = ()
    resp_country_code: CountryCode = None
    start_time: Timestamp
    end_time: Timestamp

    def __post_init__(self) -> None:
        if self.resp_ports is None:
            object.__setattr__(self, "resp_ports", ())
        super().__post_init__()

    def _originator(self) -> Side:
        return Endpoint(self.orig_addr, self.orig_port, self.orig_country_code)

    def _responder(self) -> Side:
        return MultiPortEndpoint(self.resp_addr, self.resp_ports, self.resp_country_code)

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)


@dataclass(frozen=True, kw_only=True)
class MultiHostPortScan(SecurityEvent):
    """
    Emitted when scanning sources sweep the same service across many hosts.

    Both sides are aggregates. Index i of each ``orig_*`` tuple describes
    scanning host i, index j of each ``resp_*`` tuple describes target j.
    """
    KIND = "multi host port scan"

    orig_addrs: Tuple[IpAddress, ...]
    orig_ports: Tuple[int, ...]
    orig_country_codes: Tuple[CountryCode, ...]
    resp_addrs: Tuple[IpAddress, ...]
    resp_ports: Tuple[int, ...]
    resp_country_codes: Tuple[CountryCode, ...]
    start_time: Timestamp
    end_time: Timestamp

    def _originator(self) -> Side:
        return EndpointGroup(self.orig_addrs, self.orig_ports, self.orig_country_codes)

    def _responder(self) -> Side:
        return EndpointGroup(self.resp_addrs, self.resp_ports, self.resp_country_codes)

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)


@dataclass(frozen=True, kw_only=True)
class ExternalDdos(SecurityEvent):
    """
    Emitted when many external hosts flood a single responder.
    """
    KIND = "external ddos"

    orig_addrs: Tuple[IpAddress, ...]
    orig_ports: Tuple[int, ...]
    orig_country_codes: Tuple[CountryCode, ...]
    resp_addr: IpAddress
    resp_port: Optional[int] = None
    resp_country_code: CountryCode = None
    start_time: Timestamp
    end_time: Timestamp

    def _originator(self) -> Side:
        return EndpointGroup(self.orig_addrs, self.orig_ports, self.orig_country_codes)

    def _responder(self) -> Side:
        return Endpoint(self.resp_addr, self.resp_port, self.resp_country_code)

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)


@dataclass(frozen=True, kw_only=True)
class BlocklistConn(SessionEvent):
    """
    Emitted for a connection to or from a blocklisted address.

    ``service`` is None when the detector could not identify the service.
    """
    KIND = "blocklist conn"

    conn_state: str = ""
    service: Optional[str] = None
    orig_bytes: int = 0
    resp_bytes: int = 0

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("conn_state", self.conn_state)
        builder.field("service", self.service)
        builder.field("orig_bytes", self.orig_bytes)
        builder.field("resp_bytes", self.resp_bytes)
