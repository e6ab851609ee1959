"""
ftp.py

FTP detections: brute force, plain-text credentials and blocklisted peers.
"""

from dataclasses import dataclass
from typing import Tuple

from events.base import FieldBuilder, SessionEvent, SingleHostEvent
from events.coercion import Timestamp


@dataclass(frozen=True)
class FtpCommand:
    """One command of an FTP control session and the server's reply."""
    command: str
    reply_code: str = ""
    reply_msg: str = ""

    def __str__(self) -> str:
        return f"{self.command}:{self.reply_code}:{self.reply_msg}"


@dataclass(frozen=True, kw_only=True)
class FtpBruteForce(SingleHostEvent):
    """
    Emitted when one client tries many FTP user names against a server.
    The originator port is not tracked across the attempts.
    """
    KIND = "ftp brute force"

    user_list: Tuple[str, ...] = ()
    start_time: Timestamp
    end_time: Timestamp
    is_internal: bool = False

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("user_list", self.user_list)
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)
        builder.field("is_internal", self.is_internal)


@dataclass(frozen=True, kw_only=True)
class FtpEvent(SessionEvent):
    """
    Base for detections carrying one FTP control session.
    """
    user: str = ""
    password: str = ""
    commands: Tuple[FtpCommand, ...] = ()

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("user", self.user)
        builder.field("password", self.password)
        # Commands read as one "command:code:message;..." string
        builder.field("commands", ";".join(str(command) for command in self.commands))


@dataclass(frozen=True, kw_only=True)
class FtpPlainText(FtpEvent):
    KIND = "ftp plain text"


@dataclass(frozen=True, kw_only=True)
class BlocklistFtp(FtpEvent):
    KIND = "blocklist ftp"
