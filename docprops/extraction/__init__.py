"""Extraction pipeline: archive walker, part readers, projectors and assembler.

Modules:
    walker: Opens the container and routes docProps parts to their handlers
    reader: Reads an entry to completion and parses it (xmltodict or lxml)
    projector: Field table projection and type coercion
    custom_properties: XPath projection of docProps/custom.xml
    assembler: Merges part results and sorts the final mapping
"""

from docprops.extraction.assembler import ResultAccumulator, sort_by_keys
from docprops.extraction.custom_properties import project_custom_properties
from docprops.extraction.projector import coerce, project_fields, resolve_path, set_path
from docprops.extraction.reader import read_dom, read_entry_bytes, read_tree
from docprops.extraction.walker import (
    APP_PART,
    CORE_PART,
    CUSTOM_PART,
    ZipEntryWalker,
    build_part_handlers,
    open_archive,
)

__all__ = [
    "ResultAccumulator",
    "sort_by_keys",
    "project_custom_properties",
    "coerce",
    "project_fields",
    "resolve_path",
    "set_path",
    "read_dom",
    "read_entry_bytes",
    "read_tree",
    "APP_PART",
    "CORE_PART",
    "CUSTOM_PART",
    "ZipEntryWalker",
    "build_part_handlers",
    "open_archive",
]
