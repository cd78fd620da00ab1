"""
Archive traversal and part routing.

This module opens an Office container and walks its entries one at a
time, routing the three document property parts to their readers and
projectors:

- docProps/app.xml: tree reader + application property table
- docProps/core.xml: tree reader + core property table
- docProps/custom.xml: DOM reader + custom property table

Every other entry is skipped without being read.
"""

import io
import os
import zipfile
import zlib
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Mapping, Union

from aws_lambda_powertools import Logger

from docprops.core.config import ExtractorConfig
from docprops.core.errors import ArchiveError
from docprops.extraction.custom_properties import project_custom_properties
from docprops.extraction.projector import project_fields
from docprops.extraction.reader import read_dom, read_tree

logger = Logger(service="docprops", child=True)

APP_PART = "docProps/app.xml"
CORE_PART = "docProps/core.xml"
CUSTOM_PART = "docProps/custom.xml"

ArchiveSource = Union[bytes, bytearray, memoryview, str, os.PathLike]
EntryHandler = Callable[[zipfile.ZipFile, zipfile.ZipInfo], Awaitable[Dict[str, Any]]]


def open_archive(source: ArchiveSource) -> zipfile.ZipFile:
    """
    Open a zip container from memory or from the filesystem.

    Only the central directory is read here; entry content is read when
    an entry is opened.

    Args:
        source: In-memory buffer or filesystem path

    Returns:
        zipfile.ZipFile: Open archive (caller closes it)

    Raises:
        ArchiveError: If the data is not a zip archive or the path cannot be read
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        label = "<buffer>"
        file: Any = io.BytesIO(bytes(source))
    else:
        label = os.fspath(source)
        file = label

    try:
        return zipfile.ZipFile(file)
    except (zipfile.BadZipFile, zlib.error, NotImplementedError, ValueError, EOFError) as e:
        raise ArchiveError("Not a valid zip archive", source=label, details=str(e)) from e
    except OSError as e:
        raise ArchiveError("Could not open archive", source=label, details=str(e)) from e


def build_part_handlers(config: ExtractorConfig) -> Dict[str, EntryHandler]:
    """
    Build the entry-name routing table for one extraction.

    The handlers close over ``config`` so the tables in use stay fixed for
    the whole walk.
    """

    async def handle_app(archive: zipfile.ZipFile, entry: zipfile.ZipInfo) -> Dict[str, Any]:
        tree = await read_tree(archive, entry, config.chunk_size)
        return project_fields(tree, config.app_mappings)

    async def handle_core(archive: zipfile.ZipFile, entry: zipfile.ZipInfo) -> Dict[str, Any]:
        tree = await read_tree(archive, entry, config.chunk_size)
        return project_fields(tree, config.core_mappings)

    async def handle_custom(archive: zipfile.ZipFile, entry: zipfile.ZipInfo) -> Dict[str, Any]:
        root = await read_dom(
            archive, entry, config.chunk_size, strict=config.strict_custom_xml
        )
        return project_custom_properties(root, config.custom_properties)

    return {
        APP_PART: handle_app,
        CORE_PART: handle_core,
        CUSTOM_PART: handle_custom,
    }


class ZipEntryWalker:
    """
    Sequential walker over the entries of an open archive.

    ``walk`` is an async generator: it yields the projected fields of each
    routed entry and is not resumed until the consumer asks for the next
    one, so at most one entry is being read at any time.
    """

    def __init__(self, archive: zipfile.ZipFile, handlers: Mapping[str, EntryHandler]):
        self._archive = archive
        self._handlers = handlers

    async def walk(self) -> AsyncIterator[Dict[str, Any]]:
        for entry in self._archive.infolist():
            handler = self._handlers.get(entry.filename)
            if handler is None:
                logger.debug(f"Skipping entry {entry.filename}")
                continue

            fields = await handler(self._archive, entry)
            logger.debug(
                f"Projected {len(fields)} fields from {entry.filename}",
                extra={"entry": entry.filename},
            )
            yield fields
