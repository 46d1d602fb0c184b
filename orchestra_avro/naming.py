"""
Naming helpers for generated schema names and namespaces.
"""

import re
from pathlib import Path
from typing import List


_WORD_SEPARATOR = "_ "
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_AVRO_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def to_title_case(text: str) -> str:
    """Capitalize the first character, keeping the rest of the name as is.

    Only the two-character separator ``"_ "`` is removed, capitalizing the
    character after it: ``noPartyIDs`` -> ``NoPartyIDs``, ``Party_ID`` stays.
    """
    parts = [part for part in (text or "").split(_WORD_SEPARATOR) if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


def to_screaming_snake_case(text: str) -> str:
    """``SideCodeSet`` -> ``SIDE_CODE_SET``."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", text).upper()


def unknown_symbol(code_set_name: str) -> str:
    """Catch-all enum symbol for a code set."""
    return f"UNKNOWN_{to_screaming_snake_case(code_set_name)}"


def version_suffix(version: str) -> str:
    """Namespace segment for a repository version.

    The extension-pack part after an underscore is dropped, then dots are
    removed: ``FIX.5.0SP2_EP254`` -> ``fix50sp2``.
    """
    base = (version or "").split("_")[0]
    return base.replace(".", "").lower()


def resolve_namespace(
    namespace: str, version: str, append_version: bool
) -> str:
    if append_version and version_suffix(version):
        return f"{namespace}.{version_suffix(version)}"
    return namespace


def qualified_name(namespace: str, kind_dir: str, name: str) -> str:
    """Full Avro name of a generated document, e.g. ``io.fix.codeset.SideCodeSet``."""
    return f"{namespace}.{kind_dir}.{name}"


def namespace_path(output_dir: Path, namespace: str, kind_dir: str) -> Path:
    return Path(output_dir).joinpath(*namespace.split("."), kind_dir)


def is_valid_avro_name(name: str) -> bool:
    return bool(_AVRO_NAME.match(name or ""))


def invalid_namespace_segments(namespace: str) -> List[str]:
    """Segments of a dotted namespace that are not valid Avro names."""
    return [segment for segment in (namespace or "").split(".") if not is_valid_avro_name(segment)]
