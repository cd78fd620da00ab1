"""
Unit tests for the core module.
"""

import pytest

from docprops.core.config import ExtractorConfig, parse_custom_properties
from docprops.core.errors import (
    ArchiveError,
    ConfigurationError,
    CustomPropertyQueryError,
    DocPropsError,
    UsageError,
    XmlParseError,
)
from docprops.core.models import CustomFieldMapping, FieldMapping, FieldType


class TestModels:
    """Tests for mapping table models."""

    def test_field_type_parse(self):
        """Test that known type names resolve and unknown ones fall back to string."""
        assert FieldType.parse("number") is FieldType.NUMBER
        assert FieldType.parse("string") is FieldType.STRING
        assert FieldType.parse("date") is FieldType.STRING
        assert FieldType.parse(None) is FieldType.STRING
        assert FieldType.parse(FieldType.NUMBER) is FieldType.NUMBER

    def test_field_mapping_from_dict(self):
        """Test creating FieldMapping from a table entry."""
        mapping = FieldMapping.from_dict(
            {"path": "Properties.Pages", "name": "pages", "type": "number"}
        )

        assert mapping.path == "Properties.Pages"
        assert mapping.name == "pages"
        assert mapping.type is FieldType.NUMBER
        assert mapping.to_dict() == {
            "path": "Properties.Pages",
            "name": "pages",
            "type": "number",
        }

    def test_field_mapping_requires_path_and_name(self):
        """Test that incomplete entries are rejected."""
        with pytest.raises(ConfigurationError):
            FieldMapping.from_dict({"name": "pages"})
        with pytest.raises(ConfigurationError):
            FieldMapping.from_dict({"path": "Properties.Pages"})
        with pytest.raises(ConfigurationError):
            FieldMapping.from_dict(["Properties.Pages", "pages"])

    def test_custom_mapping_from_dict(self):
        """Test both spellings of the property name key."""
        camel = CustomFieldMapping.from_dict({"msName": "Dept", "name": "department"})
        snake = CustomFieldMapping.from_dict(
            {"ms_name": "Dept", "name": "department", "type": "string"}
        )

        assert camel == snake
        assert camel.type is FieldType.STRING
        assert camel.to_dict() == {"msName": "Dept", "name": "department", "type": "string"}

    def test_custom_mapping_passthrough(self):
        """Test that existing mappings are accepted as-is."""
        mapping = CustomFieldMapping("Budget", "budget", FieldType.NUMBER)
        assert CustomFieldMapping.from_dict(mapping) is mapping

    def test_custom_mapping_requires_ms_name(self):
        """Test that entries without a property name are rejected."""
        with pytest.raises(ConfigurationError):
            CustomFieldMapping.from_dict({"name": "department"})
        with pytest.raises(ConfigurationError):
            CustomFieldMapping.from_dict({"msName": "Dept"})
        with pytest.raises(ConfigurationError):
            CustomFieldMapping.from_dict("Dept")


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_all_errors_share_base(self):
        for error in (
            UsageError(),
            ArchiveError(),
            XmlParseError("docProps/core.xml"),
            CustomPropertyQueryError("Dept"),
            ConfigurationError(),
        ):
            assert isinstance(error, DocPropsError)

    def test_error_str_includes_details(self):
        error = ArchiveError("Not a valid zip archive", source="<buffer>", details="bad magic")
        assert str(error) == "Not a valid zip archive: bad magic"
        assert error.source == "<buffer>"

    def test_usage_error_default_message(self):
        assert str(UsageError()) == "Incorrect parameters."

    def test_parse_error_names_part(self):
        error = XmlParseError("docProps/app.xml")
        assert error.part_name == "docProps/app.xml"
        assert "docProps/app.xml" in str(error)


class TestConfig:
    """Tests for ExtractorConfig."""

    def test_default_tables_loaded(self):
        """Test that the built-in tables are bound by default."""
        config = ExtractorConfig()

        app_names = {mapping.name for mapping in config.app_mappings}
        core_names = {mapping.name for mapping in config.core_mappings}

        assert {"application", "pages", "words", "company"} <= app_names
        assert {"title", "creator", "created", "revision"} <= core_names
        assert config.custom_properties == ()
        assert config.strict_custom_xml is False

    def test_builtin_tables_have_unique_names(self):
        """Test that the two built-in tables never write the same key."""
        config = ExtractorConfig()
        app_names = [mapping.name for mapping in config.app_mappings]
        core_names = [mapping.name for mapping in config.core_mappings]

        assert len(set(app_names)) == len(app_names)
        assert len(set(core_names)) == len(core_names)
        assert not set(app_names) & set(core_names)

    def test_invalid_chunk_size(self):
        with pytest.raises(ConfigurationError):
            ExtractorConfig(chunk_size=0)

    def test_with_custom_properties_returns_copy(self):
        """Test that replacing the custom table leaves the original untouched."""
        config = ExtractorConfig()
        updated = config.with_custom_properties(
            [{"msName": "Dept", "name": "department", "type": "string"}]
        )

        assert config.custom_properties == ()
        assert updated.custom_properties == (
            CustomFieldMapping("Dept", "department", FieldType.STRING),
        )
        assert updated.app_mappings == config.app_mappings

    def test_parse_custom_properties_rejects_non_list(self):
        with pytest.raises(ConfigurationError):
            parse_custom_properties({"msName": "Dept", "name": "department"})
        with pytest.raises(ConfigurationError):
            parse_custom_properties("Dept")


class TestBuiltinMappings:
    """Tests for the packaged mapping tables."""

    def test_unknown_table(self):
        from docprops.mappings import load_builtin_mappings

        with pytest.raises(ConfigurationError):
            load_builtin_mappings("custom")

    def test_number_fields(self):
        from docprops.mappings import load_builtin_mappings

        numbers = {
            mapping.name
            for mapping in load_builtin_mappings("app")
            if mapping.type is FieldType.NUMBER
        }
        assert {"pages", "words", "characters", "totalTime", "slides"} <= numbers
