"""
Session Partitioner

Splits messages into session-layer and application (non-session) subsets,
resolves each subset separately and attributes fields shared by both to the
session subset.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Tuple

from .model import Group, Message
from .resolver import Closure, MissingReference, ReferenceResolver

logger = logging.getLogger(__name__)


def split_messages(messages: Iterable[Message]) -> Tuple[List[Message], List[Message]]:
    """Stable split into ``(session, non_session)`` by exact category ``Session``."""
    session: List[Message] = []
    non_session: List[Message] = []
    for message in messages:
        (session if message.is_session else non_session).append(message)
    return session, non_session


@dataclass
class Partition:
    session_messages: List[Message] = field(default_factory=list)
    non_session_messages: List[Message] = field(default_factory=list)
    session_field_ids: Set[int] = field(default_factory=set)
    non_session_field_ids: Set[int] = field(default_factory=set)
    session_groups: Dict[int, Group] = field(default_factory=dict)
    non_session_groups: Dict[int, Group] = field(default_factory=dict)
    missing: List[MissingReference] = field(default_factory=list)


class SessionPartitioner:
    def __init__(self, resolver: ReferenceResolver):
        self.resolver = resolver

    def partition(self, messages: Iterable[Message]) -> Partition:
        session, non_session = split_messages(messages)

        # Both closures are computed in full before the subtraction
        non_session_closure: Closure = self.resolver.resolve_messages(
            non_session, include_header_trailer=False
        )
        session_closure: Closure = self.resolver.resolve_messages(
            session, include_header_trailer=True
        )

        result = Partition(
            session_messages=session,
            non_session_messages=non_session,
            session_field_ids=set(session_closure.field_ids),
            non_session_field_ids=non_session_closure.field_ids - session_closure.field_ids,
            session_groups=session_closure.groups,
            non_session_groups=non_session_closure.groups,
            missing=list(dict.fromkeys(non_session_closure.missing + session_closure.missing)),
        )

        logger.info(
            f"Partitioned {len(session)} session and {len(non_session)} non-session messages: "
            f"{len(result.session_field_ids)} session fields, "
            f"{len(result.non_session_field_ids)} non-session fields"
        )
        return result
