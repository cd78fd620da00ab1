"""Custom property projection for docProps/custom.xml.

Custom properties are user-defined name/value pairs stored as:

    <Properties xmlns="...custom-properties" xmlns:vt="...docPropsVTypes">
      <property fmtid="{D5CDD505-...}" pid="2" name="Dept">
        <vt:lpwstr>Engineering</vt:lpwstr>
      </property>
    </Properties>

Only ``vt:lpwstr`` values are read; the configured type decides how the
text is coerced.
"""

from typing import Any, Dict, Iterable, Optional

from aws_lambda_powertools import Logger
from lxml import etree

from docprops.core.errors import CustomPropertyQueryError
from docprops.core.models import CustomFieldMapping
from docprops.extraction.projector import coerce, set_path

logger = Logger(service="docprops", child=True)

NAMESPACES = {
    "cp": "http://schemas.openxmlformats.org/officeDocument/2006/custom-properties",
    "vt": "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes",
}

# The property name is bound as a variable, never interpolated
PROPERTY_TEXT_XPATH = "//cp:Properties/cp:property[@name=$ms_name]/vt:lpwstr/text()"

_select_property_text = etree.XPath(PROPERTY_TEXT_XPATH, namespaces=NAMESPACES)


def select_property_text(root: etree._Element, ms_name: str) -> list:
    """Return the lpwstr text nodes of the custom property named ``ms_name``.

    Raises:
        CustomPropertyQueryError: If the query cannot be evaluated
    """
    try:
        return _select_property_text(root, ms_name=ms_name)
    except (etree.XPathError, TypeError, ValueError) as e:
        raise CustomPropertyQueryError(ms_name, details=str(e)) from e


def project_custom_properties(
    root: Optional[etree._Element],
    mappings: Iterable[CustomFieldMapping],
) -> Dict[str, Any]:
    """Project custom properties through a caller-supplied table.

    Args:
        root: Parsed custom.xml, or None when nothing could be parsed.
        mappings: Custom property table.

    Returns:
        Dict with one entry per property found, keyed by mapping ``name``.
        Properties that are absent, have no text, or coerce to an empty
        string are left out.
    """
    data: Dict[str, Any] = {}

    if root is None:
        return data

    for mapping in mappings:
        matches = select_property_text(root, mapping.ms_name)
        if not matches:
            continue

        value, suppress = coerce(str(matches[0]), mapping.type)
        if suppress:
            continue

        set_path(data, mapping.name, value)

    logger.debug(
        f"Projected {len(data)} custom properties",
        extra={"properties": sorted(data)},
    )
    return data
