"""
Schema writers.

The generator hands every ``SchemaDocument`` to a ``SchemaWriter``. The
filesystem writer lays documents out as
``<output>/<namespace as path>/<kind>/<Name>.avsc``.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Union

from .emitter import SchemaDocument
from .exceptions import OutputDirectoryException, SchemaWriteException

logger = logging.getLogger(__name__)


def render(document: SchemaDocument) -> str:
    return json.dumps(document.schema, indent=2, ensure_ascii=False) + "\n"


class SchemaWriter:
    """Base class for document sinks."""

    def write(self, document: SchemaDocument) -> str:
        """Write one document and return where it went."""
        raise NotImplementedError


class FileSystemSchemaWriter(SchemaWriter):
    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)
        self.written: List[Path] = []

    def prepare(self) -> None:
        """Create the output root, which must be a directory if it exists."""
        if self.output_dir.exists() and not self.output_dir.is_dir():
            raise OutputDirectoryException(
                f"{self.output_dir} must be a directory.", path=str(self.output_dir)
            )
        try:
            self._ensure_dir(self.output_dir)
        except OSError as e:
            raise OutputDirectoryException(
                f"Cannot create output directory: {e}", path=str(self.output_dir)
            ) from e

    def _ensure_dir(self, path: Path) -> None:
        """Ensure directory exists."""
        path.mkdir(parents=True, exist_ok=True)

    def write(self, document: SchemaDocument) -> str:
        path = self.output_dir / document.relative_path
        try:
            self._ensure_dir(path.parent)
            with open(path, "w", encoding="utf-8") as f:
                f.write(render(document))
        except OSError as e:
            raise SchemaWriteException(f"Failed to write schema: {e}", path=str(path)) from e
        self.written.append(path)
        logger.debug(f"Generated: {path}")
        return str(path)


class InMemorySchemaWriter(SchemaWriter):
    """Keeps rendered documents keyed by their relative path."""

    def __init__(self):
        self.documents: Dict[str, SchemaDocument] = {}

    def write(self, document: SchemaDocument) -> str:
        key = document.relative_path.as_posix()
        self.documents[key] = document
        return key

    def get(self, full_name: str) -> SchemaDocument:
        for document in self.documents.values():
            if document.full_name == full_name:
                return document
        raise KeyError(full_name)
