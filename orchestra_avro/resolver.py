"""
Reference Resolver

Walks member lists depth-first, expanding component and group references,
and collects the field ids and groups reachable from a set of roots.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .index import EntityIndex
from .model import Group, MemberKind, MemberRef, Message, RESERVED_COMPONENT_IDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MissingReference:
    """A member whose target id is absent from its index."""

    kind: MemberKind
    target_id: int
    context: str = ""

    def __str__(self) -> str:
        where = f" in {self.context}" if self.context else ""
        return f"{self.kind.value.capitalize()} missing from repository; id={self.target_id}{where}"


@dataclass
class Closure:
    """Field ids and groups reachable from the resolved roots.

    ``groups`` keeps first-seen order so each group is emitted once, in a
    stable order.
    """

    field_ids: Set[int] = field(default_factory=set)
    groups: Dict[int, Group] = field(default_factory=dict)
    missing: List[MissingReference] = field(default_factory=list)


class ReferenceResolver:
    """Computes transitive field and group closures over an ``EntityIndex``."""

    def __init__(self, index: EntityIndex):
        self.index = index
        self.reported: List[MissingReference] = []

    def resolve(
        self,
        members: Iterable[MemberRef],
        include_header_trailer: bool = False,
        context: str = "",
        closure: Optional[Closure] = None,
    ) -> Closure:
        """
        Resolve one member list.

        Args:
            members: Root member list
            include_header_trailer: Descend into the standard header and
                trailer components (session resolution only)
            context: Description of the root, used in diagnostics
            closure: Existing closure to extend
        """
        closure = closure if closure is not None else Closure()
        visited: Set[Tuple[MemberKind, int]] = set()
        self._walk(members, closure, include_header_trailer, context, visited)
        return closure

    def resolve_messages(
        self,
        messages: Iterable[Message],
        include_header_trailer: bool = False,
    ) -> Closure:
        closure = Closure()
        for message in messages:
            self.resolve(
                message.members,
                include_header_trailer,
                context=f"message {message.name}",
                closure=closure,
            )
        return closure

    def _walk(
        self,
        members: Iterable[MemberRef],
        closure: Closure,
        include_header_trailer: bool,
        context: str,
        visited: Set[Tuple[MemberKind, int]],
    ) -> None:
        for member in members:
            if member.kind is MemberKind.FIELD:
                self._add_field(member.target_id, closure, context)

            elif member.kind is MemberKind.GROUP:
                group = self.index.groups.get(member.target_id)
                if group is None:
                    self._report(closure, member, context)
                    continue
                key = (MemberKind.GROUP, group.id)
                if key in visited:
                    continue
                visited.add(key)
                closure.groups.setdefault(group.id, group)
                self._add_field(group.num_in_group_id, closure, f"group {group.name}")
                self._walk(
                    group.members, closure, include_header_trailer,
                    f"group {group.name}", visited,
                )

            elif member.kind is MemberKind.COMPONENT:
                component = self.index.components.get(member.target_id)
                if component is None:
                    self._report(closure, member, context)
                    continue
                if component.id in RESERVED_COMPONENT_IDS and not include_header_trailer:
                    continue
                key = (MemberKind.COMPONENT, component.id)
                if key in visited:
                    continue
                visited.add(key)
                self._walk(
                    component.members, closure, include_header_trailer,
                    f"component {component.name}", visited,
                )

    def _add_field(self, field_id: int, closure: Closure, context: str) -> None:
        if field_id not in self.index.fields:
            self._report(closure, MemberRef(MemberKind.FIELD, field_id), context)
            return
        closure.field_ids.add(field_id)

    def _report(self, closure: Closure, member: MemberRef, context: str) -> None:
        missing = MissingReference(member.kind, member.target_id, context)
        if missing not in closure.missing:
            closure.missing.append(missing)
        if missing not in self.reported:
            self.reported.append(missing)
            logger.warning(str(missing))
