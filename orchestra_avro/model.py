"""
Orchestra Repository Model

Read-only records for the entities of a FIX Orchestra repository. The reader
in ``orchestra_avro.repository`` produces them; the resolver, type mapper and
emitter only ever read them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


# Reserved component ids of the standard session header and trailer
COMPONENT_ID_STANDARD_HEADER = 1024
COMPONENT_ID_STANDARD_TRAILER = 1025
RESERVED_COMPONENT_IDS = frozenset(
    {COMPONENT_ID_STANDARD_HEADER, COMPONENT_ID_STANDARD_TRAILER}
)

SESSION_CATEGORY = "Session"


class MemberKind(str, Enum):
    """Kinds of member reference inside a structure."""

    FIELD = "field"
    GROUP = "group"
    COMPONENT = "component"


class Presence(str, Enum):
    """Presence requirement of a member reference."""

    REQUIRED = "required"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class MemberRef:
    """A fieldRef, groupRef or componentRef, discriminated by ``kind``."""

    kind: MemberKind
    target_id: int
    presence: Presence = Presence.OPTIONAL
    documentation: Tuple[str, ...] = ()

    @property
    def is_optional(self) -> bool:
        return self.presence is Presence.OPTIONAL


@dataclass(frozen=True)
class Field:
    id: int
    name: str
    type: str
    documentation: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Code:
    name: str
    value: str = ""
    documentation: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CodeSet:
    """A named enumeration; fields whose type equals ``name`` are enumerated."""

    name: str
    type: str
    codes: Tuple[Code, ...] = ()
    id: Optional[int] = None
    documentation: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Component:
    id: int
    name: str
    members: Tuple[MemberRef, ...] = ()
    documentation: Tuple[str, ...] = ()

    @property
    def is_reserved(self) -> bool:
        """True for the standard header and trailer components."""
        return self.id in RESERVED_COMPONENT_IDS


@dataclass(frozen=True)
class Group:
    """A repeating group; ``num_in_group_id`` is its implicit count field."""

    id: int
    name: str
    num_in_group_id: int
    members: Tuple[MemberRef, ...] = ()
    documentation: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Message:
    name: str
    category: str = ""
    msg_type: str = ""
    members: Tuple[MemberRef, ...] = ()
    documentation: Tuple[str, ...] = ()

    @property
    def is_session(self) -> bool:
        return self.category == SESSION_CATEGORY


@dataclass(frozen=True)
class LogicalType:
    """Logical type carried in a mapped datatype extension."""

    name: str
    key_values: Tuple[Tuple[str, str], ...] = ()


@dataclass(frozen=True)
class MappedDatatype:
    """Mapping of a FIX datatype onto another standard, e.g. ``AVRO_V1``."""

    standard: str
    base: Optional[str] = None
    logical_type: Optional[LogicalType] = None


@dataclass(frozen=True)
class Datatype:
    name: str
    base_type: Optional[str] = None
    mappings: Tuple[MappedDatatype, ...] = ()

    def mapping_for(self, standard: str) -> Optional[MappedDatatype]:
        for mapping in self.mappings:
            if mapping.standard == standard:
                return mapping
        return None


@dataclass(frozen=True)
class Section:
    name: str
    documentation: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Category:
    name: str
    section: str = ""
    documentation: Tuple[str, ...] = ()


@dataclass
class Repository:
    """All entity lists of one Orchestra document."""

    name: str = ""
    version: str = ""
    datatypes: List[Datatype] = field(default_factory=list)
    code_sets: List[CodeSet] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    components: List[Component] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    def summary(self) -> Dict[str, int]:
        return {
            "datatypes": len(self.datatypes),
            "code_sets": len(self.code_sets),
            "fields": len(self.fields),
            "components": len(self.components),
            "groups": len(self.groups),
            "messages": len(self.messages),
        }
