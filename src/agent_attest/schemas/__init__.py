"""Attestation enumerations and schema configuration."""

from .enums import ContentType, DataType, Outcome, SignatureMode, StorageType, ValidationType
from .schema_config import SchemaConfig, core_schemas

__all__ = [
    "ContentType",
    "DataType",
    "Outcome",
    "SchemaConfig",
    "SignatureMode",
    "StorageType",
    "ValidationType",
    "core_schemas",
]
