"""
registry.py

The closed set of event kinds, keyed by kind name.
"""

from typing import Dict, Type

from events.base import SecurityEvent
from events.blocklist import (
    BlocklistBootp,
    BlocklistDceRpc,
    BlocklistDhcp,
    BlocklistKerberos,
    BlocklistMqtt,
    BlocklistNfs,
    BlocklistNtlm,
    BlocklistRadius,
    BlocklistSmb,
    BlocklistSmtp,
    BlocklistSsh,
    BlocklistTls,
)
from events.conn import BlocklistConn, ExternalDdos, MultiHostPortScan, PortScan
from events.dns import BlocklistDns, CryptocurrencyMiningPool, DnsCovertChannel, LockyRansomware
from events.ftp import BlocklistFtp, FtpBruteForce, FtpPlainText
from events.http import (
    BlocklistHttp,
    DomainGenerationAlgorithm,
    HttpThreat,
    NonBrowser,
    RepeatedHttpSessions,
)
from events.ldap import BlocklistLdap, LdapBruteForce, LdapPlainText
from events.network import NetworkThreat
from events.rdp import BlocklistRdp, RdpBruteForce


class UnknownEventKindError(LookupError):
    """Raised when a kind name does not match any registered event kind."""
    pass


EVENT_KINDS: Dict[str, Type[SecurityEvent]] = {
    cls.__name__: cls
    for cls in (
        PortScan,
        MultiHostPortScan,
        ExternalDdos,
        BlocklistConn,
        NetworkThreat,
        HttpThreat,
        DomainGenerationAlgorithm,
        NonBrowser,
        BlocklistHttp,
        RepeatedHttpSessions,
        DnsCovertChannel,
        LockyRansomware,
        CryptocurrencyMiningPool,
        BlocklistDns,
        FtpBruteForce,
        FtpPlainText,
        BlocklistFtp,
        LdapBruteForce,
        LdapPlainText,
        BlocklistLdap,
        RdpBruteForce,
        BlocklistRdp,
        BlocklistTls,
        BlocklistSmtp,
        BlocklistSsh,
        BlocklistKerberos,
        BlocklistNtlm,
        BlocklistSmb,
        BlocklistMqtt,
        BlocklistNfs,
        BlocklistRadius,
        BlocklistBootp,
        BlocklistDhcp,
        BlocklistDceRpc,
    )
}

_ALIASES: Dict[str, str] = {"Dga": "DomainGenerationAlgorithm"}


def get_event_class(name: str) -> Type[SecurityEvent]:
    """
    Look up an event kind by class name ("PortScan"), short alias ("Dga")
    or description ("port scan").

    Raises:
        UnknownEventKindError: If nothing matches
    """
    name = _ALIASES.get(name, name)
    if name in EVENT_KINDS:
        return EVENT_KINDS[name]

    for cls in EVENT_KINDS.values():
        if cls.KIND == name:
            return cls

    raise UnknownEventKindError(f"Unknown event kind: {name}")
