"""Built-in field mapping tables for the standard document property parts.

``app`` covers docProps/app.xml (extended properties written by the
authoring application), ``core`` covers docProps/core.xml (Dublin Core
properties). Paths follow the xmltodict layout of each part.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from docprops.core.errors import ConfigurationError
from docprops.core.models import FieldMapping

MAPPINGS_DIR = Path(__file__).parent

BUILTIN_TABLES = ("app", "core")


@lru_cache(maxsize=None)
def load_builtin_mappings(name: str) -> Tuple[FieldMapping, ...]:
    """Load one of the packaged mapping tables.

    Args:
        name: Table name, one of ``BUILTIN_TABLES``.

    Returns:
        Tuple of FieldMapping in table order.

    Raises:
        ConfigurationError: If the table is unknown or malformed.
    """
    if name not in BUILTIN_TABLES:
        raise ConfigurationError(
            f"Unknown mapping table: '{name}'",
            details=f"Available tables: {', '.join(BUILTIN_TABLES)}",
        )

    table_path = MAPPINGS_DIR / f"{name}.json"
    try:
        with open(table_path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Could not load mapping table '{name}'", details=str(e)) from e

    if not isinstance(entries, list):
        raise ConfigurationError(f"Mapping table '{name}' must be a JSON list")

    return tuple(FieldMapping.from_dict(entry) for entry in entries)


__all__ = ["BUILTIN_TABLES", "load_builtin_mappings"]
