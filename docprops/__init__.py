"""docprops: document property extraction for Office Open XML containers.

Reads docProps/app.xml, docProps/core.xml and docProps/custom.xml from a
.docx, .xlsx or .pptx file and returns one sorted mapping of properties.
"""

from docprops.core.version import __version__
from docprops.extractor import (
    DocPropsExtractor,
    configure_custom_properties,
    extract,
    extract_from_buffer,
    extract_from_file_path,
    get_default_extractor,
)

__all__ = [
    "__version__",
    "DocPropsExtractor",
    "configure_custom_properties",
    "extract",
    "extract_from_buffer",
    "extract_from_file_path",
    "get_default_extractor",
]
