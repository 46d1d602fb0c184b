"""
Orchestra Avro - Configuration Management

Run configuration for schema generation. A ``GeneratorConfig`` is immutable
and passed explicitly to every component, so several runs in one process do
not share state.
"""

import dataclasses
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .exceptions import ConfigurationException
from .naming import invalid_namespace_segments

logger = logging.getLogger(__name__)

AVRO_V1 = "AVRO_V1"
DEFAULT_OUTPUT_DIRECTORY = "target/generated-sources"


class TypeMappingStrategy(str, Enum):
    """How FIX datatypes are mapped to Avro types."""

    AUTO = "auto"
    STATIC = "static"
    METADATA = "metadata"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# camelCase option names accepted in configuration files
_CAMEL_CASE_KEYS = {
    "orchestrationFile": "orchestration_file",
    "orchestration": "orchestration_file",
    "outputDirectory": "output_directory",
    "generateStringForDecimal": "generate_string_for_decimal",
    "excludeSession": "exclude_session",
    "appendRepoFixVersionToNamespace": "append_repo_fix_version_to_namespace",
    "typeMapping": "type_mapping",
    "datatypeStandard": "datatype_standard",
    "validateSchemas": "validate_schemas",
    "logLevel": "log_level",
}

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def _to_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigurationException(f"Invalid boolean value: {value!r}", config_key=key)


@dataclass(frozen=True)
class GeneratorConfig:
    """Configuration for one schema generation run."""

    orchestration_file: Optional[str] = None
    namespace: Optional[str] = None
    output_directory: str = DEFAULT_OUTPUT_DIRECTORY

    # Generation options
    generate_string_for_decimal: bool = True
    exclude_session: bool = False
    append_repo_fix_version_to_namespace: bool = True

    # Type mapping
    type_mapping: TypeMappingStrategy = TypeMappingStrategy.AUTO
    datatype_standard: str = AVRO_V1

    validate_schemas: bool = False
    log_level: LogLevel = LogLevel.INFO

    @property
    def decimal_type(self) -> str:
        """Avro type used for decimal-like FIX types in the static table."""
        return "string" if self.generate_string_for_decimal else "double"

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "GeneratorConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}") from e
        except OSError as e:
            raise ConfigurationException(f"Error loading configuration file: {e}") from e

        if not isinstance(config_data, dict):
            raise ConfigurationException(
                f"Configuration file must contain a mapping: {config_path}"
            )
        return cls.from_dict(config_data)

    @classmethod
    def load_from_env(cls, prefix: str = "ORCHESTRA_AVRO_") -> "GeneratorConfig":
        """Load configuration from environment variables."""
        data: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            value = os.getenv(f"{prefix}{f.name.upper()}")
            if value is not None:
                data[f.name] = value
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        """Create configuration from dictionary."""
        known = {f.name for f in dataclasses.fields(cls)}
        values: Dict[str, Any] = {}

        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            values[name] = value

        for key in (
            "generate_string_for_decimal",
            "exclude_session",
            "append_repo_fix_version_to_namespace",
            "validate_schemas",
        ):
            if key in values:
                values[key] = _to_bool(values[key], key)

        try:
            if "type_mapping" in values:
                values["type_mapping"] = TypeMappingStrategy(
                    str(values["type_mapping"]).lower()
                )
        except ValueError as e:
            raise ConfigurationException(
                f"Unknown type mapping strategy: {values['type_mapping']}",
                config_key="type_mapping",
            ) from e
        try:
            if "log_level" in values:
                values["log_level"] = LogLevel(str(values["log_level"]).upper())
        except ValueError as e:
            raise ConfigurationException(
                f"Unknown log level: {values['log_level']}", config_key="log_level"
            ) from e

        for key in ("orchestration_file", "output_directory"):
            if key in values and values[key] is not None:
                values[key] = str(values[key])

        return cls(**values)

    def with_overrides(self, **changes: Any) -> "GeneratorConfig":
        """Return a copy with the given non-None values replaced."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "orchestration_file": self.orchestration_file,
            "namespace": self.namespace,
            "output_directory": self.output_directory,
            "generate_string_for_decimal": self.generate_string_for_decimal,
            "exclude_session": self.exclude_session,
            "append_repo_fix_version_to_namespace": self.append_repo_fix_version_to_namespace,
            "type_mapping": self.type_mapping.value,
            "datatype_standard": self.datatype_standard,
            "validate_schemas": self.validate_schemas,
            "log_level": self.log_level.value,
        }

    def validate(self, require_input: bool = True) -> None:
        """Validate configuration settings."""
        errors = []

        if require_input and not self.orchestration_file:
            errors.append("orchestration_file is required")
        if not self.namespace:
            errors.append("namespace is required")
        else:
            invalid = invalid_namespace_segments(self.namespace)
            if invalid:
                errors.append(f"Invalid namespace segment(s): {', '.join(invalid) or '(empty)'}")
        if not self.output_directory:
            errors.append("output_directory must not be empty")
        if not self.datatype_standard:
            errors.append("datatype_standard must not be empty")
        try:
            TypeMappingStrategy(self.type_mapping)
        except ValueError:
            errors.append(f"Unknown type mapping strategy: {self.type_mapping}")

        if errors:
            raise ConfigurationException(
                f"Configuration validation failed: {'; '.join(errors)}"
            )
