"""
Schema Generator Core

Runs one full generation: load the Orchestra repository, index it, partition
session and application messages, then emit and write one Avro schema per
entity.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .config import GeneratorConfig
from .emitter import DocumentKind, SchemaDocument, SchemaEmitter
from .exceptions import ConfigurationException, RepositoryLoadException, SchemaValidationException
from .index import EntityIndex
from .model import Repository
from .naming import invalid_namespace_segments, resolve_namespace
from .partition import Partition, SessionPartitioner
from .repository import load_repository
from .resolver import Closure, MissingReference, ReferenceResolver
from .type_mapper import TypeMapper
from .validation import SchemaValidator, ValidationProblem
from .writer import FileSystemSchemaWriter, SchemaWriter

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Outcome of one generation run."""

    namespace: str
    counts: Dict[DocumentKind, int] = field(default_factory=dict)
    written: List[str] = field(default_factory=list)
    missing_references: List[MissingReference] = field(default_factory=list)
    validation_problems: List[ValidationProblem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())


class SchemaGenerator:
    """
    Generates Apache Avro schemas from a FIX Orchestra repository.

    Example:
        config = GeneratorConfig(orchestration_file="OrchestraFIXLatest.xml",
                                 namespace="io.fixprotocol")
        report = SchemaGenerator(config).generate()
    """

    def __init__(
        self,
        config: GeneratorConfig,
        writer: Optional[SchemaWriter] = None,
    ):
        """
        Initialize schema generator.

        Args:
            config: Run configuration
            writer: Document sink, a filesystem writer on
                ``config.output_directory`` if None
        """
        self.config = config
        self.writer = writer or FileSystemSchemaWriter(config.output_directory)

    def check_paths(self) -> None:
        """Fail before any work when the input or output location is unusable."""
        source = Path(self.config.orchestration_file or "")
        if not source.is_file():
            raise RepositoryLoadException(
                f"{source} must exist and be a file.", path=str(source)
            )
        logger.info(f"Orchestration : {source.resolve()}")

        if isinstance(self.writer, FileSystemSchemaWriter):
            self.writer.prepare()
            logger.info(f"Output Directory : {self.writer.output_dir.resolve()}")

    def generate(self) -> GenerationReport:
        """Generate schemas for ``config.orchestration_file``."""
        self.config.validate()
        self.check_paths()
        repository = load_repository(self.config.orchestration_file)
        return self.generate_from_repository(repository)

    def generate_from_repository(self, repository: Repository) -> GenerationReport:
        """Generate schemas for an already loaded repository."""
        self.config.validate(require_input=False)
        if isinstance(self.writer, FileSystemSchemaWriter):
            self.writer.prepare()

        index = EntityIndex.build(repository)
        namespace = resolve_namespace(
            self.config.namespace,
            repository.version,
            self.config.append_repo_fix_version_to_namespace,
        )
        invalid = invalid_namespace_segments(namespace)
        if invalid:
            raise ConfigurationException(
                f"Namespace {namespace} has invalid segment(s): {', '.join(invalid) or '(empty)'}",
                config_key="namespace",
            )
        logger.info(f"Generating Avro schemas for {repository.name} {repository.version} in {namespace}")

        resolver = ReferenceResolver(index)
        partition = SessionPartitioner(resolver).partition(index.messages)
        self._collect_component_groups(repository, resolver, partition)
        emitter = SchemaEmitter(
            index=index,
            type_mapper=TypeMapper(self.config, index.datatypes),
            namespace=namespace,
            missing=list(resolver.reported),
        )

        documents = self._emit_all(repository, index, partition, emitter)

        report = GenerationReport(namespace=namespace)
        counts: Counter = Counter()
        for document in documents:
            report.written.append(self.writer.write(document))
            counts[document.kind] += 1
        report.counts = {kind: counts.get(kind, 0) for kind in DocumentKind}
        report.missing_references = emitter.missing

        for kind, count in report.counts.items():
            logger.info(f"Generated {count} {kind.value} schemas")

        if self.config.validate_schemas:
            report.validation_problems = SchemaValidator().validate(documents)
            if report.validation_problems:
                raise SchemaValidationException(
                    f"{len(report.validation_problems)} generated schemas failed validation",
                    documents=[p.name for p in report.validation_problems],
                )
        return report

    def _collect_component_groups(
        self,
        repository: Repository,
        resolver: ReferenceResolver,
        partition: Partition,
    ) -> None:
        """Add groups reachable only through components to the non-session set."""
        closure = Closure()
        for component in repository.components:
            if not component.is_reserved:
                resolver.resolve(
                    component.members, context=f"component {component.name}", closure=closure
                )

        for group_id, group in closure.groups.items():
            if group_id in partition.non_session_groups:
                continue
            if group_id in partition.session_groups and not self.config.exclude_session:
                continue
            partition.non_session_groups[group_id] = group
            logger.debug(f"Group {group.name} is referenced only by components")
        for missing in closure.missing:
            if missing not in partition.missing:
                partition.missing.append(missing)

    def _emit_all(
        self,
        repository: Repository,
        index: EntityIndex,
        partition: Partition,
        emitter: SchemaEmitter,
    ) -> List[SchemaDocument]:
        exclude_session = self.config.exclude_session
        documents: List[SchemaDocument] = []

        for code_set in index.code_sets.values():
            documents.append(emitter.emit_code_set(code_set))

        for fld in repository.fields:
            if exclude_session and fld.id not in partition.non_session_field_ids:
                continue
            documents.append(emitter.emit_field(fld))

        for group in partition.non_session_groups.values():
            documents.append(emitter.emit_group(group, session=False))
        if not exclude_session:
            for group_id, group in partition.session_groups.items():
                if group_id not in partition.non_session_groups:
                    documents.append(emitter.emit_group(group, session=True))

        for component in repository.components:
            if not component.is_reserved:
                documents.append(emitter.emit_component(component))

        for message in partition.non_session_messages:
            documents.append(emitter.emit_message(message))
        if not exclude_session:
            for message in partition.session_messages:
                documents.append(emitter.emit_message(message))

        return documents
