"""
blocklist.py

Sessions with a blocklisted peer, one kind per application protocol.
Each kind appends the protocol summary of the offending session after
the common session counters.
"""

from dataclasses import dataclass
from ipaddress import IPv4Address
from typing import Tuple

from events.base import FieldBuilder, SessionEvent
from events.coercion import IpAddress, Payload

UNSPECIFIED_ADDR = IPv4Address("0.0.0.0")


def _hex(raw: bytes) -> str:
    """Hardware addresses and client ids read as colon-separated hex."""
    return ":".join(f"{byte:02x}" for byte in raw)


@dataclass(frozen=True, kw_only=True)
class BlocklistTls(SessionEvent):
    KIND = "blocklist tls"

    server_name: str = ""
    alpn_protocol: str = ""
    ja3: str = ""
    version: str = ""
    client_cipher_suites: Tuple[int, ...] = ()
    client_extensions: Tuple[int, ...] = ()
    cipher: int = 0
    extensions: Tuple[int, ...] = ()
    ja3s: str = ""
    serial: str = ""
    subject_country: str = ""
    subject_org_name: str = ""
    subject_common_name: str = ""
    validity_not_before: int = 0
    validity_not_after: int = 0
    subject_alt_name: str = ""
    issuer_country: str = ""
    issuer_org_name: str = ""
    issuer_org_unit_name: str = ""
    issuer_common_name: str = ""
    last_alert: int = 0

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("server_name", self.server_name)
        builder.field("alpn_protocol", self.alpn_protocol)
        builder.field("ja3", self.ja3)
        builder.field("version", self.version)
        builder.field("client_cipher_suites", self.client_cipher_suites)
        builder.field("client_extensions", self.client_extensions)
        builder.field("cipher", self.cipher)
        builder.field("extensions", self.extensions)
        builder.field("ja3s", self.ja3s)
        builder.field("serial", self.serial)
        builder.field("subject_country", self.subject_country)
        builder.field("subject_org_name", self.subject_org_name)
        builder.field("subject_common_name", self.subject_common_name)
        builder.field("validity_not_before", self.validity_not_before)
        builder.field("validity_not_after", self.validity_not_after)
        builder.field("subject_alt_name", self.subject_alt_name)
        builder.field("issuer_country", self.issuer_country)
        builder.field("issuer_org_name", self.issuer_org_name)
        builder.field("issuer_org_unit_name", self.issuer_org_unit_name)
        builder.field("issuer_common_name", self.issuer_common_name)
        builder.field("last_alert", self.last_alert)


@dataclass(frozen=True, kw_only=True)
class BlocklistSmtp(SessionEvent):
    """
    ``from_`` is rendered under the header name ``from``.
    """
    KIND = "blocklist smtp"

    mailfrom: str = ""
    date: str = ""
    from_: str = ""
    to: str = ""
    subject: str = ""
    agent: str = ""
    state: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("mailfrom", self.mailfrom)
        builder.field("date", self.date)
        builder.field("from", self.from_)
        builder.field("to", self.to)
        builder.field("subject", self.subject)
        builder.field("agent", self.agent)
        builder.field("state", self.state)


@dataclass(frozen=True, kw_only=True)
class BlocklistSsh(SessionEvent):
    KIND = "blocklist ssh"

    client: str = ""
    server: str = ""
    cipher_alg: str = ""
    mac_alg: str = ""
    compression_alg: str = ""
    kex_alg: str = ""
    host_key_alg: str = ""
    hassh_algorithms: str = ""
    hassh: str = ""
    hassh_server_algorithms: str = ""
    hassh_server: str = ""
    client_shka: str = ""
    server_shka: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("client", self.client)
        builder.field("server", self.server)
        builder.field("cipher_alg", self.cipher_alg)
        builder.field("mac_alg", self.mac_alg)
        builder.field("compression_alg", self.compression_alg)
        builder.field("kex_alg", self.kex_alg)
        builder.field("host_key_alg", self.host_key_alg)
        builder.field("hassh_algorithms", self.hassh_algorithms)
        builder.field("hassh", self.hassh)
        builder.field("hassh_server_algorithms", self.hassh_server_algorithms)
        builder.field("hassh_server", self.hassh_server)
        builder.field("client_shka", self.client_shka)
        builder.field("server_shka", self.server_shka)


@dataclass(frozen=True, kw_only=True)
class BlocklistKerberos(SessionEvent):
    KIND = "blocklist kerberos"

    client_time: int = 0
    server_time: int = 0
    error_code: int = 0
    client_realm: str = ""
    cname_type: int = 0
    client_name: Tuple[str, ...] = ()
    realm: str = ""
    sname_type: int = 0
    service_name: Tuple[str, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("client_time", self.client_time)
        builder.field("server_time", self.server_time)
        builder.field("error_code", self.error_code)
        builder.field("client_realm", self.client_realm)
        builder.field("cname_type", self.cname_type)
        builder.field("client_name", self.client_name)
        builder.field("realm", self.realm)
        builder.field("sname_type", self.sname_type)
        builder.field("service_name", self.service_name)


@dataclass(frozen=True, kw_only=True)
class BlocklistNtlm(SessionEvent):
    KIND = "blocklist ntlm"

    protocol: str = ""
    username: str = ""
    hostname: str = ""
    domainname: str = ""
    success: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("protocol", self.protocol)
        builder.field("username", self.username)
        builder.field("hostname", self.hostname)
        builder.field("domainname", self.domainname)
        builder.field("success", self.success)


@dataclass(frozen=True, kw_only=True)
class BlocklistSmb(SessionEvent):
    KIND = "blocklist smb"

    command: int = 0
    path: str = ""
    service: str = ""
    file_name: str = ""
    file_size: int = 0
    resource_type: int = 0
    fid: int = 0
    create_time: int = 0
    access_time: int = 0
    write_time: int = 0
    change_time: int = 0

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("command", self.command)
        builder.field("path", self.path)
        builder.field("service", self.service)
        builder.field("file_name", self.file_name)
        builder.field("file_size", self.file_size)
        builder.field("resource_type", self.resource_type)
        builder.field("fid", self.fid)
        builder.field("create_time", self.create_time)
        builder.field("access_time", self.access_time)
        builder.field("write_time", self.write_time)
        builder.field("change_time", self.change_time)


@dataclass(frozen=True, kw_only=True)
class BlocklistMqtt(SessionEvent):
    KIND = "blocklist mqtt"

    protocol: str = ""
    version: int = 0
    client_id: str = ""
    connack_reason: int = 0
    subscribe: Tuple[str, ...] = ()
    suback_reason: Tuple[int, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("protocol", self.protocol)
        builder.field("version", self.version)
        builder.field("client_id", self.client_id)
        builder.field("connack_reason", self.connack_reason)
        builder.field("subscribe", self.subscribe)
        builder.field("suback_reason", self.suback_reason)


@dataclass(frozen=True, kw_only=True)
class BlocklistNfs(SessionEvent):
    KIND = "blocklist nfs"

    read_files: Tuple[str, ...] = ()
    write_files: Tuple[str, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("read_files", self.read_files)
        builder.field("write_files", self.write_files)


@dataclass(frozen=True, kw_only=True)
class BlocklistRadius(SessionEvent):
    """
    RADIUS attributes that are raw octets upstream are rendered as
    lossy UTF-8 text.
    """
    KIND = "blocklist radius"

    id: int = 0
    code: int = 0
    resp_code: int = 0
    auth: str = ""
    resp_auth: str = ""
    user_name: Payload = b""
    user_passwd: Payload = b""
    chap_passwd: Payload = b""
    nas_ip: IpAddress = UNSPECIFIED_ADDR
    nas_port: int = 0
    state: Payload = b""
    nas_id: Payload = b""
    nas_port_type: int = 0
    message: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("id", self.id)
        builder.field("code", self.code)
        builder.field("resp_code", self.resp_code)
        builder.field("auth", self.auth)
        builder.field("resp_auth", self.resp_auth)
        builder.field("user_name", self.user_name)
        builder.field("user_passwd", self.user_passwd)
        builder.field("chap_passwd", self.chap_passwd)
        builder.field("nas_ip", self.nas_ip)
        builder.field("nas_port", self.nas_port)
        builder.field("state", self.state)
        builder.field("nas_id", self.nas_id)
        builder.field("nas_port_type", self.nas_port_type)
        builder.field("message", self.message)


@dataclass(frozen=True, kw_only=True)
class BlocklistBootp(SessionEvent):
    KIND = "blocklist bootp"

    op: int = 0
    htype: int = 0
    hops: int = 0
    xid: int = 0
    ciaddr: IpAddress = UNSPECIFIED_ADDR
    yiaddr: IpAddress = UNSPECIFIED_ADDR
    siaddr: IpAddress = UNSPECIFIED_ADDR
    giaddr: IpAddress = UNSPECIFIED_ADDR
    chaddr: Payload = b""
    sname: str = ""
    file: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("op", self.op)
        builder.field("htype", self.htype)
        builder.field("hops", self.hops)
        builder.field("xid", self.xid)
        builder.field("ciaddr", self.ciaddr)
        builder.field("yiaddr", self.yiaddr)
        builder.field("siaddr", self.siaddr)
        builder.field("giaddr", self.giaddr)
        builder.field("chaddr", _hex(self.chaddr))
        builder.field("sname", self.sname)
        builder.field("file", self.file)


@dataclass(frozen=True, kw_only=True)
class BlocklistDhcp(SessionEvent):
    KIND = "blocklist dhcp"

    msg_type: int = 0
    ciaddr: IpAddress = UNSPECIFIED_ADDR
    yiaddr: IpAddress = UNSPECIFIED_ADDR
    siaddr: IpAddress = UNSPECIFIED_ADDR
    giaddr: IpAddress = UNSPECIFIED_ADDR
    subnet_mask: IpAddress = UNSPECIFIED_ADDR
    router: Tuple[IpAddress, ...] = ()
    domain_name_server: Tuple[IpAddress, ...] = ()
    req_ip_addr: IpAddress = UNSPECIFIED_ADDR
    lease_time: int = 0
    server_id: IpAddress = UNSPECIFIED_ADDR
    param_req_list: Tuple[int, ...] = ()
    message: str = ""
    renewal_time: int = 0
    rebinding_time: int = 0
    class_id: Payload = b""
    client_id_type: int = 0
    client_id: Payload = b""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("msg_type", self.msg_type)
        builder.field("ciaddr", self.ciaddr)
        builder.field("yiaddr", self.yiaddr)
        builder.field("siaddr", self.siaddr)
        builder.field("giaddr", self.giaddr)
        builder.field("subnet_mask", self.subnet_mask)
        builder.field("router", self.router)
        builder.field("domain_name_server", self.domain_name_server)
        builder.field("req_ip_addr", self.req_ip_addr)
        builder.field("lease_time", self.lease_time)
        builder.field("server_id", self.server_id)
        builder.field("param_req_list", self.param_req_list)
        builder.field("message", self.message)
        builder.field("renewal_time", self.renewal_time)
        builder.field("rebinding_time", self.rebinding_time)
        builder.field("class_id", _hex(self.class_id))
        builder.field("client_id_type", self.client_id_type)
        builder.field("client_id", _hex(self.client_id))


@dataclass(frozen=True, kw_only=True)
class BlocklistDceRpc(SessionEvent):
    KIND = "blocklist dcerpc"

    rtt: int = 0
    named_pipe: str = ""
    endpoint: str = ""
    operation: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("rtt", self.rtt)
        builder.field("named_pipe", self.named_pipe)
        builder.field("endpoint", self.endpoint)
        builder.field("operation", self.operation)
