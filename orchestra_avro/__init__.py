"""
Orchestra Avro Schema Generator

Generates Apache Avro schemas from a FIX Orchestra repository:
- one enum per code set, with an ``UNKNOWN_<NAME>`` default symbol
- one single-value record per field
- one record per component, repeating group and message, referring to the
  other generated schemas by full name
- optional split of the session layer from application messages

Usage:
    from orchestra_avro import SchemaGenerator, GeneratorConfig

    config = GeneratorConfig(
        orchestration_file="OrchestraFIXLatest.xml",
        namespace="io.fixprotocol",
        output_directory="target/generated-sources",
    )
    report = SchemaGenerator(config).generate()
"""

from orchestra_avro.config import GeneratorConfig, TypeMappingStrategy
from orchestra_avro.emitter import DocumentKind, SchemaDocument, SchemaEmitter
from orchestra_avro.exceptions import (
    ConfigurationException,
    MissingDatatypeException,
    OrchestraAvroException,
    OutputDirectoryException,
    RepositoryLoadException,
    SchemaValidationException,
    SchemaWriteException,
)
from orchestra_avro.generator import GenerationReport, SchemaGenerator
from orchestra_avro.index import EntityIndex
from orchestra_avro.partition import Partition, SessionPartitioner
from orchestra_avro.repository import load_repository, parse_repository
from orchestra_avro.resolver import Closure, MissingReference, ReferenceResolver
from orchestra_avro.type_mapper import TypeMapper
from orchestra_avro.writer import FileSystemSchemaWriter, InMemorySchemaWriter, SchemaWriter

__all__ = [
    "SchemaGenerator",
    "GenerationReport",
    "GeneratorConfig",
    "TypeMappingStrategy",
    "EntityIndex",
    "ReferenceResolver",
    "Closure",
    "MissingReference",
    "SessionPartitioner",
    "Partition",
    "TypeMapper",
    "SchemaEmitter",
    "SchemaDocument",
    "DocumentKind",
    "SchemaWriter",
    "FileSystemSchemaWriter",
    "InMemorySchemaWriter",
    "load_repository",
    "parse_repository",
    "OrchestraAvroException",
    "ConfigurationException",
    "RepositoryLoadException",
    "OutputDirectoryException",
    "MissingDatatypeException",
    "SchemaWriteException",
    "SchemaValidationException",
]
