"""
Schema Emitter

Renders one Avro schema document per code set, field, component, group and
message. Members of records reference other generated documents by their
full name rather than inlining them; only the entry record of a repeating
group is inlined.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .index import EntityIndex
from .model import (
    CodeSet,
    Component,
    Field,
    Group,
    MemberKind,
    MemberRef,
    Message,
    RESERVED_COMPONENT_IDS,
)
from .naming import namespace_path, qualified_name, to_title_case, unknown_symbol
from .resolver import MissingReference
from .type_mapper import AvroType, TypeMapper

logger = logging.getLogger(__name__)

AVSC = ".avsc"
ENTRY_SUFFIX = "Entry"


class DocumentKind(str, Enum):
    """Entity kinds; the value is both the sub-namespace and the directory name."""

    CODE_SET = "codeset"
    FIELD = "field"
    COMPONENT = "component"
    GROUP = "group"
    MESSAGE = "message"


@dataclass
class SchemaDocument:
    """A generated schema, addressed by kind, base namespace and name."""

    kind: DocumentKind
    name: str
    namespace: str
    schema: Dict[str, Any]

    @property
    def full_name(self) -> str:
        return qualified_name(self.namespace, self.kind.value, self.name)

    @property
    def relative_path(self) -> Path:
        return namespace_path(Path(), self.namespace, self.kind.value) / f"{self.name}{AVSC}"


def join_docs(parts: Iterable[str], separator: str = ",") -> str:
    return separator.join(p for p in parts if p).strip()


@dataclass
class SchemaEmitter:
    """Builds schema documents for the entities of one repository."""

    index: EntityIndex
    type_mapper: TypeMapper
    namespace: str
    missing: List[MissingReference] = field(default_factory=list)

    def kind_namespace(self, kind: DocumentKind) -> str:
        return f"{self.namespace}.{kind.value}"

    def type_name(self, kind: DocumentKind, entity_name: str) -> str:
        return qualified_name(self.namespace, kind.value, to_title_case(entity_name))

    def field_type(self, fld: Field) -> AvroType:
        """Code set reference for enumerated fields, mapped primitive otherwise."""
        code_set = self.index.code_set_for(fld)
        if code_set is not None:
            return self.type_name(DocumentKind.CODE_SET, code_set.name)
        return self.type_mapper.map_field(fld)

    def _document(
        self,
        kind: DocumentKind,
        entity_name: str,
        schema_type: str,
        doc: str,
        body: Dict[str, Any],
    ) -> SchemaDocument:
        name = to_title_case(entity_name)
        schema: Dict[str, Any] = {
            "name": name,
            "namespace": self.kind_namespace(kind),
            "type": schema_type,
            "doc": doc,
        }
        schema.update(body)
        return SchemaDocument(kind=kind, name=name, namespace=self.namespace, schema=schema)

    def emit_code_set(self, code_set: CodeSet) -> SchemaDocument:
        unknown = unknown_symbol(code_set.name)
        symbols = [code.name for code in code_set.codes]
        symbols.append(unknown)
        return self._document(
            DocumentKind.CODE_SET,
            code_set.name,
            "enum",
            join_docs(code_set.documentation),
            {"symbols": symbols, "default": unknown},
        )

    def emit_field(self, fld: Field) -> SchemaDocument:
        doc = join_docs([f"FIX datatype : {fld.type.strip()}", *fld.documentation])
        return self._document(
            DocumentKind.FIELD,
            fld.name,
            "record",
            doc,
            {"fields": [{"name": "value", "type": self.field_type(fld)}]},
        )

    def emit_component(self, component: Component) -> SchemaDocument:
        return self._document(
            DocumentKind.COMPONENT,
            component.name,
            "record",
            join_docs(component.documentation),
            {"fields": self.member_fields(component.members, False, f"component {component.name}")},
        )

    def emit_message(self, message: Message) -> SchemaDocument:
        return self._document(
            DocumentKind.MESSAGE,
            message.name,
            "record",
            join_docs(message.documentation),
            {"fields": self.member_fields(message.members, message.is_session, f"message {message.name}")},
        )

    def emit_group(self, group: Group, session: bool = False) -> SchemaDocument:
        """
        Render a group as a record holding one array of ``<Name>Entry`` records.

        Args:
            group: Group to render
            session: Whether the group was collected from session messages
        """
        name = to_title_case(group.name)
        entry = {
            "name": f"{name}{ENTRY_SUFFIX}",
            "type": "record",
            "fields": self.member_fields(group.members, session, f"group {group.name}"),
        }
        return self._document(
            DocumentKind.GROUP,
            group.name,
            "record",
            join_docs(group.documentation),
            {"fields": [{"name": name, "type": {"type": "array", "items": entry}}]},
        )

    def member_fields(
        self,
        members: Sequence[MemberRef],
        session: bool,
        context: str = "",
    ) -> List[Dict[str, Any]]:
        """
        Resolve one level of members into record field descriptors.

        The standard header and trailer have no document of their own: in
        session mode their members are expanded in place, otherwise they are
        left out.
        """
        result: List[Dict[str, Any]] = []
        self._collect_members(members, session, context, result, set(), set())
        return result

    def _collect_members(
        self,
        members: Sequence[MemberRef],
        session: bool,
        context: str,
        result: List[Dict[str, Any]],
        names: Set[str],
        expanded: Set[int],
    ) -> None:
        for member in members:
            if member.kind is MemberKind.COMPONENT and member.target_id in RESERVED_COMPONENT_IDS:
                component = self.index.components.get(member.target_id)
                if component is None:
                    self._report(member, context)
                elif session and component.id not in expanded:
                    expanded.add(component.id)
                    self._collect_members(
                        component.members, session, f"component {component.name}",
                        result, names, expanded,
                    )
                continue

            descriptor = self._member_descriptor(member, context)
            if descriptor is None:
                continue
            if descriptor["name"] in names:
                logger.debug(f"Skipping duplicate member {descriptor['name']} in {context}")
                continue
            names.add(descriptor["name"])
            result.append(descriptor)

    def _member_descriptor(self, member: MemberRef, context: str) -> Optional[Dict[str, Any]]:
        target_doc: Tuple[str, ...]
        if member.kind is MemberKind.FIELD:
            fld = self.index.fields.get(member.target_id)
            if fld is None:
                return self._report(member, context)
            name = to_title_case(fld.name)
            avro_type = self.field_type(fld)
            marker = f"FIX datatype : {fld.type}"
            target_doc = fld.documentation
        elif member.kind is MemberKind.GROUP:
            group = self.index.groups.get(member.target_id)
            if group is None:
                return self._report(member, context)
            name = to_title_case(group.name)
            avro_type = self.type_name(DocumentKind.GROUP, group.name)
            marker = f"Group : {group.name}"
            target_doc = group.documentation
        else:
            component = self.index.components.get(member.target_id)
            if component is None:
                return self._report(member, context)
            name = to_title_case(component.name)
            avro_type = self.type_name(DocumentKind.COMPONENT, component.name)
            marker = f"Component : {component.name}"
            target_doc = component.documentation

        descriptor: Dict[str, Any] = {"name": name}
        if member.is_optional:
            descriptor["type"] = ["null", avro_type]
            descriptor["default"] = None
        else:
            descriptor["type"] = avro_type
        descriptor["doc"] = join_docs([*member.documentation, marker, *target_doc], ", ")
        return descriptor

    def _report(self, member: MemberRef, context: str) -> None:
        missing = MissingReference(member.kind, member.target_id, context)
        if missing in self.missing:
            return None
        self.missing.append(missing)
        logger.warning(str(missing))
        return None
