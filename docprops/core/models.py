"""Data models for docprops field mapping tables."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from docprops.core.errors import ConfigurationError


class FieldType(Enum):
    """Output type of a mapped field."""
    STRING = "string"
    NUMBER = "number"

    @classmethod
    def parse(cls, value: Any) -> "FieldType":
        """Resolve a type name, treating anything unrecognised as a string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.STRING


@dataclass(frozen=True)
class FieldMapping:
    """Maps a dotted path in a parsed document part to an output key."""

    path: str
    name: str
    type: FieldType = FieldType.STRING

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldMapping":
        """Create a FieldMapping from a table entry.

        Raises:
            ConfigurationError: If ``path`` or ``name`` is missing.
        """
        if not isinstance(data, dict):
            raise ConfigurationError("Invalid field mapping", details=repr(data))

        path = data.get("path")
        name = data.get("name")
        if not isinstance(path, str) or not path:
            raise ConfigurationError("Field mapping is missing 'path'", details=repr(data))
        if not isinstance(name, str) or not name:
            raise ConfigurationError("Field mapping is missing 'name'", details=repr(data))

        return cls(path=path, name=name, type=FieldType.parse(data.get("type")))

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "name": self.name, "type": self.type.value}


@dataclass(frozen=True)
class CustomFieldMapping:
    """Maps a named property in docProps/custom.xml to an output key.

    ``ms_name`` is the property name as declared by the authoring
    application (the ``name`` attribute of ``<property>``).
    """

    ms_name: str
    name: str
    type: FieldType = FieldType.STRING

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomFieldMapping":
        """Create a CustomFieldMapping from a configuration entry.

        Accepts both ``msName`` and ``ms_name`` for the property name.

        Raises:
            ConfigurationError: If the property name or output name is missing.
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            raise ConfigurationError("Invalid custom property mapping", details=repr(data))

        ms_name = data.get("msName", data.get("ms_name"))
        name = data.get("name")
        if not isinstance(ms_name, str) or not ms_name:
            raise ConfigurationError(
                "Custom property mapping is missing 'msName'", details=repr(data)
            )
        if not isinstance(name, str) or not name:
            raise ConfigurationError(
                "Custom property mapping is missing 'name'", details=repr(data)
            )

        return cls(ms_name=ms_name, name=name, type=FieldType.parse(data.get("type")))

    def to_dict(self) -> Dict[str, Any]:
        return {"msName": self.ms_name, "name": self.name, "type": self.type.value}
