"""
Orchestra Avro - Custom Exceptions

This module defines the exception classes raised while generating Avro
schemas from a FIX Orchestra repository. Missing member references are not
exceptions; they are reported as diagnostics by the resolver and emitter.
"""

from typing import Any, Dict, List, Optional


class OrchestraAvroException(Exception):
    """Base exception for all schema generation errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "ORCHESTRA_AVRO_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


class ConfigurationException(OrchestraAvroException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class RepositoryLoadException(OrchestraAvroException):
    """Exception raised when the Orchestra document cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message,
            error_code="REPOSITORY_LOAD_ERROR",
            context={"path": path} if path else {},
        )


class OutputDirectoryException(OrchestraAvroException):
    """Exception raised when the output root is unusable."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message,
            error_code="OUTPUT_DIRECTORY_ERROR",
            context={"path": path} if path else {},
        )


class MissingDatatypeException(OrchestraAvroException):
    """Exception raised when a field's FIX datatype has no repository metadata."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        datatype: Optional[str] = None,
    ):
        context = {}
        if field_name:
            context["field_name"] = field_name
        if datatype:
            context["datatype"] = datatype

        super().__init__(message, error_code="MISSING_DATATYPE", context=context)


class SchemaWriteException(OrchestraAvroException):
    """Exception raised when a generated document cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message,
            error_code="SCHEMA_WRITE_ERROR",
            context={"path": path} if path else {},
        )


class SchemaValidationException(OrchestraAvroException):
    """Exception raised when generated documents are rejected by the Avro parser."""

    def __init__(self, message: str, documents: Optional[List[str]] = None):
        super().__init__(
            message,
            error_code="SCHEMA_VALIDATION_ERROR",
            context={"documents": documents} if documents else {},
        )
