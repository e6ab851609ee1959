"""
dns.py

Detections raised on DNS exchanges: covert channels, ransomware beacons,
mining pool lookups and blocklisted names.
"""

from dataclasses import dataclass
from typing import Tuple

from events.base import FieldBuilder, SessionEvent


@dataclass(frozen=True, kw_only=True)
class DnsEvent(SessionEvent):
    """
    Base for detections carrying one DNS query and its answer.
    """
    query: str = ""
    answer: Tuple[str, ...] = ()
    trans_id: int = 0
    rtt: int = 0
    qclass: int = 0
    qtype: int = 0
    rcode: int = 0
    aa_flag: bool = False
    tc_flag: bool = False
    rd_flag: bool = False
    ra_flag: bool = False
    ttl: Tuple[int, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("query", self.query)
        builder.field("answer", self.answer)
        builder.field("trans_id", self.trans_id)
        builder.field("rtt", self.rtt)
        builder.field("qclass", self.qclass)
        builder.field("qtype", self.qtype)
        builder.field("rcode", self.rcode)
        builder.field("aa_flag", self.aa_flag)
        builder.field("tc_flag", self.tc_flag)
        builder.field("rd_flag", self.rd_flag)
        builder.field("ra_flag", self.ra_flag)
        builder.field("ttl", self.ttl)


@dataclass(frozen=True, kw_only=True)
class DnsCovertChannel(DnsEvent):
    """
    Emitted when DNS queries appear to tunnel data.
    """
    KIND = "dns covert channel"


@dataclass(frozen=True, kw_only=True)
class LockyRansomware(DnsEvent):
    """
    Emitted when a lookup matches Locky ransomware infrastructure.
    """
    KIND = "locky ransomware"


@dataclass(frozen=True, kw_only=True)
class CryptocurrencyMiningPool(DnsEvent):
    """
    Emitted when a host resolves a known mining pool.
    """
    KIND = "cryptocurrency mining pool"

    coins: Tuple[str, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        super()._protocol_fields(builder)
        builder.field("coins", self.coins)


@dataclass(frozen=True, kw_only=True)
class BlocklistDns(DnsEvent):
    KIND = "blocklist dns"
