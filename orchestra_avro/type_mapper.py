"""
FIX datatype to Avro type mapping.

Both lookup strategies share one table, ``FIX_TYPE_CATEGORIES``, which sorts
FIX datatypes into categories:

=========  ==========================================  ==============  ==========================
Category   FIX datatypes                               Static table    Metadata fallback
=========  ==========================================  ==============  ==========================
DECIMAL    Price, PriceOffset, Amt, Qty, float         decimal type    baseType, else the name
INTEGER    int, Length, NumInGroup, SeqNum, TagNum,    ``int``         baseType, else the name
           DayOfMonth
DOUBLE     Percentage                                  ``double``      baseType, else the name
BOOLEAN    Boolean                                     ``boolean``     ``boolean``
STRING     everything else                             ``string``      ``string``
=========  ==========================================  ==============  ==========================

The decimal type is ``string`` or ``double`` depending on
``GeneratorConfig.generate_string_for_decimal``. When the repository maps a
datatype to the configured standard, that mapping wins over the fallback and
may carry a logical type.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Union

from .config import GeneratorConfig, TypeMappingStrategy
from .exceptions import ConfigurationException, MissingDatatypeException
from .model import Datatype, Field, MappedDatatype

logger = logging.getLogger(__name__)

# Either a primitive type name or a logical type descriptor
AvroType = Union[str, Dict[str, str]]

AVRO_STRING = "string"
AVRO_INT = "int"
AVRO_BOOLEAN = "boolean"
AVRO_DOUBLE = "double"


class FixTypeCategory(str, Enum):
    DECIMAL = "decimal"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    STRING = "string"


FIX_TYPE_CATEGORIES: Dict[str, FixTypeCategory] = {
    "Price": FixTypeCategory.DECIMAL,
    "PriceOffset": FixTypeCategory.DECIMAL,
    "Amt": FixTypeCategory.DECIMAL,
    "Qty": FixTypeCategory.DECIMAL,
    "float": FixTypeCategory.DECIMAL,
    "int": FixTypeCategory.INTEGER,
    "Length": FixTypeCategory.INTEGER,
    "NumInGroup": FixTypeCategory.INTEGER,
    "SeqNum": FixTypeCategory.INTEGER,
    "TagNum": FixTypeCategory.INTEGER,
    "DayOfMonth": FixTypeCategory.INTEGER,
    "Percentage": FixTypeCategory.DOUBLE,
    "Boolean": FixTypeCategory.BOOLEAN,
}

_NUMERIC = (FixTypeCategory.DECIMAL, FixTypeCategory.INTEGER, FixTypeCategory.DOUBLE)


def category_of(fix_type: str) -> FixTypeCategory:
    return FIX_TYPE_CATEGORIES.get(fix_type, FixTypeCategory.STRING)


def logical_type_descriptor(mapping: MappedDatatype) -> AvroType:
    """Render a mapped datatype, as a descriptor dict when it has a logical type."""
    if mapping.logical_type is None:
        return mapping.base
    descriptor = {
        "type": mapping.base,
        "logicalType": mapping.logical_type.name,
    }
    for key, value in mapping.logical_type.key_values:
        descriptor[key] = value
    return descriptor


class TypeMapper:
    """Maps FIX datatypes to Avro types for one generation run."""

    def __init__(
        self,
        config: GeneratorConfig,
        datatypes: Optional[Dict[str, Datatype]] = None,
    ):
        self.config = config
        self.datatypes = datatypes or {}
        self.use_metadata = self._select_strategy()

    def _select_strategy(self) -> bool:
        try:
            strategy = TypeMappingStrategy(self.config.type_mapping)
        except ValueError as e:
            raise ConfigurationException(
                f"Unknown type mapping strategy: {self.config.type_mapping}",
                config_key="type_mapping",
            ) from e
        if strategy is TypeMappingStrategy.STATIC:
            return False
        if strategy is TypeMappingStrategy.METADATA:
            return True
        standard = self.config.datatype_standard
        return any(d.mapping_for(standard) for d in self.datatypes.values())

    @staticmethod
    def static_type(fix_type: str, decimal_type: str = AVRO_STRING) -> str:
        """Static table lookup."""
        category = category_of(fix_type)
        if category is FixTypeCategory.DECIMAL:
            return decimal_type
        if category is FixTypeCategory.INTEGER:
            return AVRO_INT
        if category is FixTypeCategory.DOUBLE:
            return AVRO_DOUBLE
        if category is FixTypeCategory.BOOLEAN:
            return AVRO_BOOLEAN
        return AVRO_STRING

    def metadata_type(self, fix_type: str, field_name: str = "") -> AvroType:
        """Lookup through the repository's mapped datatypes."""
        datatype = self.datatypes.get(fix_type)
        if datatype is None:
            raise MissingDatatypeException(
                f"Orchestra datatype not found for received type: {fix_type} of Field: {field_name}",
                field_name=field_name,
                datatype=fix_type,
            )

        mapping = datatype.mapping_for(self.config.datatype_standard)
        if mapping is not None and mapping.base:
            return logical_type_descriptor(mapping)

        category = category_of(fix_type)
        if category in _NUMERIC:
            return datatype.base_type or datatype.name
        if category is FixTypeCategory.BOOLEAN:
            return AVRO_BOOLEAN
        return AVRO_STRING

    def map_type(self, fix_type: str, field_name: str = "") -> AvroType:
        if self.use_metadata:
            return self.metadata_type(fix_type, field_name)
        return self.static_type(fix_type, self.config.decimal_type)

    def map_field(self, fld: Field) -> AvroType:
        return self.map_type(fld.type, fld.name)
