"""
Orchestra Avro - Main Entry Point

Generates Apache Avro schemas from a FIX Orchestra repository file.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import DEFAULT_OUTPUT_DIRECTORY, GeneratorConfig, LogLevel, TypeMappingStrategy
from .exceptions import OrchestraAvroException
from .generator import SchemaGenerator


def _flag(value: str) -> bool:
    text = value.strip().lower()
    if text in ("true", "1", "yes", "on"):
        return True
    if text in ("false", "0", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orchestra-avro",
        description="Options for generation of Apache Avro schema from a FIX Orchestra Repository",
    )

    parser.add_argument(
        "-i", "--orchestra-file", dest="orchestration_file",
        help="The path/name of the FIX OrchestraFile",
    )
    parser.add_argument(
        "-o", "--output-dir", dest="output_directory",
        help=f"The output directory, Default : {DEFAULT_OUTPUT_DIRECTORY}",
    )
    parser.add_argument(
        "-n", "--namespace",
        help="The namespace for the generated schema, include version if required.",
    )
    parser.add_argument(
        "--generate-string-for-decimal", dest="generate_string_for_decimal",
        type=_flag, nargs="?", const=True, metavar="BOOL",
        help="Use String type for Decimal Fields instead of double, Default : true",
    )
    parser.add_argument(
        "--append-repo-fix-version-to-namespace", dest="append_repo_fix_version_to_namespace",
        type=_flag, nargs="?", const=True, metavar="BOOL",
        help="Append the FIX version specified in the repository to the namespace, Default : true",
    )
    parser.add_argument(
        "--excludeSession", "--exclude-session", dest="exclude_session",
        type=_flag, nargs="?", const=True, metavar="BOOL",
        help="Excludes Session Category Messages, Components and Groups exclusive to Session Layer "
             "and Fields used by Session Layer from the generated code, Default : false",
    )
    parser.add_argument(
        "--type-mapping", dest="type_mapping",
        choices=[s.value for s in TypeMappingStrategy],
        help="Datatype mapping strategy, Default : auto",
    )
    parser.add_argument(
        "--datatype-standard", dest="datatype_standard",
        help="Mapped datatype standard to look up, Default : AVRO_V1",
    )
    parser.add_argument(
        "--validate", dest="validate_schemas", action="store_const", const=True,
        help="Parse generated schemas with the Avro library",
    )
    parser.add_argument("--config", type=str, help="Configuration file path (YAML)")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level",
    )
    return parser


def load_config(args: argparse.Namespace) -> GeneratorConfig:
    """Configuration file (environment when none is given), overridden by command line options."""
    if args.config:
        config = GeneratorConfig.load_from_file(args.config)
    else:
        config = GeneratorConfig.load_from_env()

    overrides = {
        key: getattr(args, key)
        for key in (
            "orchestration_file",
            "output_directory",
            "namespace",
            "generate_string_for_decimal",
            "append_repo_fix_version_to_namespace",
            "exclude_session",
            "datatype_standard",
            "validate_schemas",
        )
    }
    if args.type_mapping:
        overrides["type_mapping"] = TypeMappingStrategy(args.type_mapping)
    if args.log_level:
        overrides["log_level"] = LogLevel(args.log_level)
    config = config.with_overrides(**overrides)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for schema generation."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, (args.log_level or "INFO").upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args)
        logging.getLogger().setLevel(config.log_level.value)

        report = SchemaGenerator(config).generate()

        logger.info(f"Generated {report.total} schemas in namespace {report.namespace}")
        if report.missing_references:
            logger.warning(f"{len(report.missing_references)} missing references were skipped")
        return 0
    except OrchestraAvroException as e:
        logger.error(f"Schema generation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
