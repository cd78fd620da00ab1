"""Configuration for document property extraction."""

from dataclasses import dataclass, field, replace
from typing import Any, Tuple

from docprops.core.errors import ConfigurationError
from docprops.core.models import CustomFieldMapping, FieldMapping
from docprops.mappings import load_builtin_mappings

DEFAULT_CHUNK_SIZE = 64 * 1024


def parse_custom_properties(table: Any) -> Tuple[CustomFieldMapping, ...]:
    """Validate a custom property mapping table.

    Args:
        table: List or tuple of dicts (``msName``, ``name``, ``type``) or
               CustomFieldMapping instances.

    Returns:
        Tuple of CustomFieldMapping in table order.

    Raises:
        ConfigurationError: If the table is not a list/tuple or an entry is invalid.
    """
    if not isinstance(table, (list, tuple)):
        raise ConfigurationError(
            "Incorrect custom properties settings",
            details=f"expected a list, got {type(table).__name__}",
        )
    return tuple(CustomFieldMapping.from_dict(entry) for entry in table)


@dataclass(frozen=True)
class ExtractorConfig:
    """Extraction settings bound to a DocPropsExtractor.

    The object is immutable; use ``with_custom_properties`` to derive a
    new configuration with a different custom property table.
    """

    # Custom properties to read from docProps/custom.xml
    custom_properties: Tuple[CustomFieldMapping, ...] = ()

    # Field tables for docProps/app.xml and docProps/core.xml
    app_mappings: Tuple[FieldMapping, ...] = field(
        default_factory=lambda: load_builtin_mappings("app")
    )
    core_mappings: Tuple[FieldMapping, ...] = field(
        default_factory=lambda: load_builtin_mappings("core")
    )

    # Bytes requested per read from an entry stream
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # Report malformed custom.xml instead of treating it as empty
    strict_custom_xml: bool = False

    def __post_init__(self):
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ConfigurationError(
                "chunk_size must be a positive integer", details=repr(self.chunk_size)
            )

    def with_custom_properties(self, table: Any) -> "ExtractorConfig":
        """Return a copy of this config with the custom property table replaced."""
        return replace(self, custom_properties=parse_custom_properties(table))
