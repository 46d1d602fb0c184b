"""
Orchestra Repository Reader

Builds a ``Repository`` from a FIX Orchestra XML document. Elements are
matched by local name so the 2016 and 2020 repository namespaces are both
accepted.
"""

import logging
import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .exceptions import RepositoryLoadException
from .model import (
    Category,
    Code,
    CodeSet,
    Component,
    Datatype,
    Field,
    Group,
    LogicalType,
    MappedDatatype,
    MemberKind,
    MemberRef,
    Message,
    Presence,
    Repository,
    Section,
)

logger = logging.getLogger(__name__)

_MEMBER_TAGS = {
    "fieldRef": MemberKind.FIELD,
    "groupRef": MemberKind.GROUP,
    "componentRef": MemberKind.COMPONENT,
}


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def clean_text(text: Optional[str]) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def _children(node: ET.Element, name: str) -> Iterator[ET.Element]:
    for child in node:
        if local_name(child.tag) == name:
            yield child


def _child(node: ET.Element, name: str) -> Optional[ET.Element]:
    return next(_children(node, name), None)


def _entries(root: ET.Element, container: str, entry: str) -> Iterator[ET.Element]:
    parent = _child(root, container)
    if parent is None:
        return iter(())
    return _children(parent, entry)


def _int_attr(node: ET.Element, name: str) -> int:
    raw = node.get(name)
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise RepositoryLoadException(
            f"Element <{local_name(node.tag)}> has invalid {name}={raw!r}"
        ) from e


def _documentation(node: ET.Element) -> Tuple[str, ...]:
    docs: List[str] = []
    for annotation in _children(node, "annotation"):
        for doc in _children(annotation, "documentation"):
            text = clean_text(" ".join(doc.itertext()))
            if text:
                docs.append(text)
    return tuple(docs)


def _presence(node: ET.Element) -> Optional[Presence]:
    """Map an Orchestra presence attribute; None means the member is forbidden."""
    raw = (node.get("presence") or "optional").lower()
    if raw == "forbidden":
        return None
    if raw in ("required", "constant"):
        return Presence.REQUIRED
    return Presence.OPTIONAL


def _members(node: ET.Element) -> Tuple[MemberRef, ...]:
    members: List[MemberRef] = []
    for child in node:
        kind = _MEMBER_TAGS.get(local_name(child.tag))
        if kind is None:
            continue
        presence = _presence(child)
        if presence is None:
            continue
        members.append(
            MemberRef(
                kind=kind,
                target_id=_int_attr(child, "id"),
                presence=presence,
                documentation=_documentation(child),
            )
        )
    return tuple(members)


def _logical_type(mapped: ET.Element) -> Optional[LogicalType]:
    extension = _child(mapped, "extension")
    if extension is None:
        return None
    node = _child(extension, "logicalType")
    if node is None:
        return None

    key_values = []
    for kv in _children(node, "keyValue"):
        key = kv.get("key")
        value = kv.get("value")
        if key is None:
            key_node = _child(kv, "key")
            key = clean_text(key_node.text) if key_node is not None else None
        if value is None:
            value_node = _child(kv, "value")
            value = clean_text(value_node.text) if value_node is not None else ""
        if key:
            key_values.append((key, value))
    return LogicalType(name=node.get("name", ""), key_values=tuple(key_values))


def _parse_datatype(node: ET.Element) -> Datatype:
    mappings = tuple(
        MappedDatatype(
            standard=mapped.get("standard", ""),
            base=mapped.get("base"),
            logical_type=_logical_type(mapped),
        )
        for mapped in _children(node, "mappedDatatype")
    )
    return Datatype(
        name=node.get("name", ""),
        base_type=node.get("baseType"),
        mappings=mappings,
    )


def _parse_code_set(node: ET.Element) -> CodeSet:
    codes = tuple(
        Code(
            name=code.get("name", ""),
            value=code.get("value", ""),
            documentation=_documentation(code),
        )
        for code in _children(node, "code")
    )
    raw_id = node.get("id")
    return CodeSet(
        name=node.get("name", ""),
        type=node.get("type", ""),
        codes=codes,
        id=int(raw_id) if raw_id and raw_id.isdigit() else None,
        documentation=_documentation(node),
    )


def _parse_group(node: ET.Element) -> Group:
    num_in_group = _child(node, "numInGroup")
    if num_in_group is None:
        raise RepositoryLoadException(
            f"Group {node.get('name')} (id={node.get('id')}) has no numInGroup"
        )
    return Group(
        id=_int_attr(node, "id"),
        name=node.get("name", ""),
        num_in_group_id=_int_attr(num_in_group, "id"),
        members=_members(node),
        documentation=_documentation(node),
    )


def _parse_message(node: ET.Element) -> Message:
    structure = _child(node, "structure")
    return Message(
        name=node.get("name", ""),
        category=node.get("category", ""),
        msg_type=node.get("msgType", ""),
        members=_members(structure) if structure is not None else (),
        documentation=_documentation(node),
    )


def build_repository(root: ET.Element) -> Repository:
    """Convert a parsed ``<repository>`` element into a ``Repository``."""
    if local_name(root.tag) != "repository":
        raise RepositoryLoadException(
            f"Expected <repository> root element, found <{local_name(root.tag)}>"
        )

    repository = Repository(
        name=root.get("name", ""),
        version=root.get("version", ""),
        datatypes=[_parse_datatype(n) for n in _entries(root, "datatypes", "datatype")],
        code_sets=[_parse_code_set(n) for n in _entries(root, "codeSets", "codeSet")],
        fields=[
            Field(
                id=_int_attr(n, "id"),
                name=n.get("name", ""),
                type=n.get("type", ""),
                documentation=_documentation(n),
            )
            for n in _entries(root, "fields", "field")
        ],
        components=[
            Component(
                id=_int_attr(n, "id"),
                name=n.get("name", ""),
                members=_members(n),
                documentation=_documentation(n),
            )
            for n in _entries(root, "components", "component")
        ],
        groups=[_parse_group(n) for n in _entries(root, "groups", "group")],
        messages=[_parse_message(n) for n in _entries(root, "messages", "message")],
        sections=[
            Section(name=n.get("name", ""), documentation=_documentation(n))
            for n in _entries(root, "sections", "section")
        ],
        categories=[
            Category(
                name=n.get("name", ""),
                section=n.get("section", ""),
                documentation=_documentation(n),
            )
            for n in _entries(root, "categories", "category")
        ],
    )
    logger.debug(f"Parsed repository {repository.name} {repository.version}: {repository.summary()}")
    return repository


def parse_repository(content: Union[str, bytes]) -> Repository:
    """Parse an Orchestra document held in memory."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise RepositoryLoadException(f"Invalid Orchestra XML: {e}") from e
    return build_repository(root)


def load_repository(path: Union[str, Path]) -> Repository:
    """Read and parse an Orchestra document from disk."""
    path = Path(path)
    try:
        root = ET.parse(path).getroot()
    except ET.ParseError as e:
        raise RepositoryLoadException(f"Invalid Orchestra XML: {e}", path=str(path)) from e
    except OSError as e:
        raise RepositoryLoadException(
            f"Cannot read Orchestra file: {e}", path=str(path)
        ) from e

    repository = build_repository(root)
    logger.info(f"Loaded Orchestra repository {path}: {repository.summary()}")
    return repository
