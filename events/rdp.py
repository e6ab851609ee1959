"""
rdp.py

RDP detections.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from events.base import FieldBuilder, SecurityEvent, SessionEvent, Side
from events.coercion import CountryCode, IpAddress, Timestamp
from events.endpoints import Endpoint, EndpointGroup


@dataclass(frozen=True, kw_only=True)
class RdpBruteForce(SecurityEvent):
    """
    Emitted when one client attempts RDP logins against many servers.
    The responder side is an aggregate of the targeted servers.
    """
    KIND = "rdp brute force"

    orig_addr: IpAddress
    orig_port: Optional[int] = None
    orig_country_code: CountryCode = None
    resp_addrs: Tuple[IpAddress, ...]
    resp_ports: Tuple[int, ...]
    resp_country_codes: Tuple[CountryCode, ...]
    start_time: Timestamp
    end_time: Timestamp

    def _originator(self) -> Side:
        return Endpoint(self.orig_addr, self.orig_port, self.orig_country_code)

    def _responder(self) -> Side:
        return EndpointGroup(self.resp_addrs, self.resp_ports, self.resp_country_codes)

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)


@dataclass(frozen=True, kw_only=True)
class BlocklistRdp(SessionEvent):
    KIND = "blocklist rdp"

    cookie: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("cookie", self.cookie)
