"""
http.py

Detections raised on HTTP sessions. Most kinds carry the full request and
response summary of the session that triggered them.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from events.base import FieldBuilder, SessionEvent, SingleHostEvent
from events.coercion import Payload, Timestamp


@dataclass(frozen=True, kw_only=True)
class HttpSessionEvent(SessionEvent):
    """
    Base for detections carrying one HTTP request/response summary.
    """
    method: str = ""
    host: str = ""
    uri: str = ""
    referer: str = ""
    version: str = ""
    user_agent: str = ""
    request_len: int = 0
    response_len: int = 0
    status_code: int = 0
    status_msg: str = ""
    username: str = ""
    password: str = ""
    cookie: str = ""
    content_encoding: str = ""
    content_type: str = ""
    cache_control: str = ""
    filenames: Tuple[str, ...] = ()
    mime_types: Tuple[str, ...] = ()
    body: Payload = b""
    state: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("method", self.method)
        builder.field("host", self.host)
        builder.field("uri", self.uri)
        builder.field("referer", self.referer)
        builder.field("version", self.version)
        builder.field("user_agent", self.user_agent)
        builder.field("request_len", self.request_len)
        builder.field("response_len", self.response_len)
        builder.field("status_code", self.status_code)
        builder.field("status_msg", self.status_msg)
        builder.field("username", self.username)
        builder.field("password", self.password)
        builder.field("cookie", self.cookie)
        builder.field("content_encoding", self.content_encoding)
        builder.field("content_type", self.content_type)
        builder.field("cache_control", self.cache_control)
        builder.field("filenames", self.filenames)
        builder.field("mime_types", self.mime_types)
        builder.field("body", self.body)
        builder.field("state", self.state)


@dataclass(frozen=True, kw_only=True)
class HttpThreat(HttpSessionEvent):
    """
    Emitted when an HTTP request matches a threat signature.
    """
    KIND = "http threat"

    db_name: str = ""
    rule_id: int
    matched_to: str = ""
    cluster_id: Optional[int] = None
    attack_kind: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        super()._protocol_fields(builder)
        builder.field("db_name", self.db_name)
        builder.field("rule_id", self.rule_id)
        builder.field("matched_to", self.matched_to)
        builder.field("cluster_id", self.cluster_id)
        builder.field("attack_kind", self.attack_kind)


@dataclass(frozen=True, kw_only=True)
class DomainGenerationAlgorithm(HttpSessionEvent):
    """
    Emitted when the requested host name looks algorithmically generated.
    ``confidence`` is the classifier score.
    """
    KIND = "dga"


@dataclass(frozen=True, kw_only=True)
class NonBrowser(HttpSessionEvent):
    """
    Emitted when an HTTP client does not behave like a web browser.
    """
    KIND = "non browser"


@dataclass(frozen=True, kw_only=True)
class BlocklistHttp(HttpSessionEvent):
    KIND = "blocklist http"


@dataclass(frozen=True, kw_only=True)
class RepeatedHttpSessions(SingleHostEvent):
    """
    Emitted when the same client keeps opening HTTP sessions to one server.
    """
    KIND = "repeated http sessions"

    start_time: Timestamp
    end_time: Timestamp

    def _kind_fields(self, builder: FieldBuilder) -> None:
        builder.field("start_time", self.start_time)
        builder.field("end_time", self.end_time)


# Short name used by detectors
Dga = DomainGenerationAlgorithm
