"""
network.py

Signature matches against session payloads.
"""

from dataclasses import dataclass
from typing import Optional

from events.base import FieldBuilder, SessionEvent


@dataclass(frozen=True, kw_only=True)
class NetworkThreat(SessionEvent):
    """
    Emitted when a session payload matches a threat signature.

    ``cluster_id`` is None for matches that were not clustered.
    """
    KIND = "network threat"

    service: str = ""
    content: str = ""
    db_name: str = ""
    rule_id: int
    matched_to: str = ""
    cluster_id: Optional[int] = None
    attack_kind: str = ""

    def _protocol_fields(self, builder: FieldBuilder) -> None:
        builder.field("service", self.service)
        builder.field("content", self.content)
        builder.field("db_name", self.db_name)
        builder.field("rule_id", self.rule_id)
        builder.field("matched_to", self.matched_to)
        builder.field("cluster_id", self.cluster_id)
        builder.field("attack_kind", self.attack_kind)
