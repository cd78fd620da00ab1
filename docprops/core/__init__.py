"""Core module for docprops."""

from docprops.core.version import __version__
from docprops.core.config import DEFAULT_CHUNK_SIZE, ExtractorConfig, parse_custom_properties
from docprops.core.models import CustomFieldMapping, FieldMapping, FieldType
from docprops.core.errors import (
    DocPropsError,
    UsageError,
    ArchiveError,
    XmlParseError,
    CustomPropertyQueryError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    "DEFAULT_CHUNK_SIZE",
    "ExtractorConfig",
    "parse_custom_properties",
    "CustomFieldMapping",
    "FieldMapping",
    "FieldType",
    "DocPropsError",
    "UsageError",
    "ArchiveError",
    "XmlParseError",
    "CustomPropertyQueryError",
    "ConfigurationError",
]
