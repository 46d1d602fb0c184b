"""
Schema validation with the Apache Avro parser.

Documents are parsed into one shared name registry, dependencies first, so
cross-document references resolve the same way an Avro consumer would
resolve them.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Set

import avro.errors
import avro.name
import avro.schema

from .emitter import SchemaDocument

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationProblem:
    name: str
    message: str

    def __str__(self) -> str:
        return f"{self.name}: {self.message}"


def referenced_names(schema: Any) -> Set[str]:
    """Named type references found in ``type`` and ``items`` positions."""
    found: Set[str] = set()

    def visit(node: Any) -> None:
        if isinstance(node, str):
            if "." in node:
                found.add(node)
        elif isinstance(node, list):
            for item in node:
                visit(item)
        elif isinstance(node, dict):
            visit(node.get("type"))
            visit(node.get("items"))
            for fld in node.get("fields", []) or []:
                visit(fld.get("type"))

    for fld in schema.get("fields", []) or []:
        visit(fld.get("type"))
    return found


class SchemaValidator:
    def validate(self, documents: Sequence[SchemaDocument]) -> List[ValidationProblem]:
        by_name: Dict[str, SchemaDocument] = {d.full_name: d for d in documents}
        problems: List[ValidationProblem] = []
        ordered = self._order(by_name, problems)

        names = avro.name.Names()
        for document in ordered:
            try:
                avro.schema.make_avsc_object(document.schema, names)
            except avro.errors.AvroException as e:
                problems.append(ValidationProblem(document.full_name, str(e)))

        for problem in problems:
            logger.warning(f"Schema validation failed: {problem}")
        return problems

    def _order(
        self,
        by_name: Dict[str, SchemaDocument],
        problems: List[ValidationProblem],
    ) -> List[SchemaDocument]:
        """Depth-first topological order; cycles are reported, not followed."""
        ordered: List[SchemaDocument] = []
        done: Set[str] = set()
        active: Set[str] = set()

        def visit(name: str) -> None:
            if name in done:
                return
            if name in active:
                problems.append(ValidationProblem(name, "cyclic schema reference"))
                return
            active.add(name)
            for dependency in sorted(referenced_names(by_name[name].schema)):
                if dependency in by_name:
                    visit(dependency)
            active.discard(name)
            done.add(name)
            ordered.append(by_name[name])

        for name in by_name:
            visit(name)
        return ordered
