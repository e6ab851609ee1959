"""
ldap.py

LDAP detections: brute force, plain-text binds and blocklisted peers.
"""

from dataclasses import dataclass
from typing import Tuple

from events.base import FieldBuilder, SessionEvent, SingleHostEvent
from events.coercion import Timestamp


@dataclass(frozen=True, kw_only=True)
class LdapBruteForce(SingleHostEvent):
    """
    Emitted when one client tries many user/password pairs against a
    directory server. Each pair is rendered as ``user:password``.
    """
    KIND = "ldap brute force"

    user_pw_list: Tuple[Tuple[str, str], ...] = ()
    start_time: Timestamp
    end_time: Timestamp

    def __post_init__(self) -> None:
        object.__setattr__(self, "user_pw_list", tuple(tuple(pair) for pair in self.user_pw_list))
        super().__post_init__()

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("user_pw_list", [f"{user}:{password}" for user, password in self.user_pw_list])
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)


@dataclass(frozen=True, kw_only=True)
class LdapEvent(SessionEvent):
    """
    Base for detections carrying one LDAP operation.
    """
    message_id: int = 0
    version: int = 0
    opcode: Tuple[str, ...] = ()
    result: Tuple[str, ...] = ()
    diagnostic_message: Tuple[str, ...] = ()
    object: Tuple[str, ...] = ()
    argument: Tuple[str, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("message_id", self.message_id)
        builder.field("version", self.version)
        builder.field("opcode", self.opcode)
        builder.field("result", self.result)
        builder.field("diagnostic_message", self.diagnostic_message)
        builder.field("object", self.object)
        builder.field("argument", self.argument)


@dataclass(frozen=True, kw_only=True)
class LdapPlainText(LdapEvent):
    KIND = "ldap plain text"


@dataclass(frozen=True, kw_only=True)
class BlocklistLdap(LdapEvent):
    KIND = "blocklist ldap"
