"""
Document part readers.

This module reads a single archive entry to completion and parses it,
either into a nested dict (xmltodict) for the field projector or into an
lxml element for XPath queries on docProps/custom.xml.
"""

import zipfile
import zlib
from typing import Any, Dict, Optional
from xml.parsers.expat import ExpatError

import xmltodict
from aws_lambda_powertools import Logger
from lxml import etree

from docprops.core.config import DEFAULT_CHUNK_SIZE
from docprops.core.errors import ArchiveError, XmlParseError

logger = Logger(service="docprops", child=True)


def _dom_parser(strict: bool) -> etree.XMLParser:
    return etree.XMLParser(
        recover=not strict,
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
    )


async def read_entry_bytes(
    archive: zipfile.ZipFile,
    entry: zipfile.ZipInfo,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """
    Read an archive entry stream until it is exhausted.

    Args:
        archive: Open archive
        entry: Entry to read
        chunk_size: Bytes requested per read

    Returns:
        bytes: Full entry content

    Raises:
        ArchiveError: If the entry stream cannot be opened or decompressed
    """
    chunks = []
    try:
        with archive.open(entry) as stream:
            while True:
                chunk = stream.read(chunk_size)
                if not chunk:
                    break
                chunks.append(chunk)
    except (
        zipfile.BadZipFile,
        zlib.error,
        NotImplementedError,
        RuntimeError,
        ValueError,
        EOFError,
        OSError,
    ) as e:
        raise ArchiveError(
            f"Could not read entry {entry.filename}",
            source=entry.filename,
            details=str(e),
        ) from e

    content = b"".join(chunks)
    logger.debug(f"Read {len(content)} bytes from {entry.filename}")
    return content


async def read_tree(
    archive: zipfile.ZipFile,
    entry: zipfile.ZipInfo,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Dict[str, Any]:
    """
    Read an entry and parse it into a nested dict.

    The XML is converted with xmltodict, so:
    - Element names become dictionary keys (prefixes kept, e.g. "dc:title")
    - Attributes are prefixed with '@'
    - Text content is stored under '#text' when mixed with attributes
    - Repeated elements become lists

    Raises:
        ArchiveError: If the entry stream cannot be read
        XmlParseError: If the entry is not well-formed XML
    """
    content = await read_entry_bytes(archive, entry, chunk_size)

    try:
        parsed = xmltodict.parse(content)
    except ExpatError as e:
        raise XmlParseError(entry.filename, details=str(e)) from e

    return dict(parsed) if parsed else {}


async def read_dom(
    archive: zipfile.ZipFile,
    entry: zipfile.ZipInfo,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    strict: bool = False,
) -> Optional[etree._Element]:
    """
    Read an entry and parse it into an lxml element tree.

    In the default lenient mode a recovering parser is used and parse
    failures are never reported: whatever can be recovered is returned,
    and input with no recoverable root yields None. With ``strict`` the
    parser does not recover and failures raise XmlParseError.

    Raises:
        ArchiveError: If the entry stream cannot be read
        XmlParseError: If ``strict`` and the entry is not well-formed XML
    """
    content = await read_entry_bytes(archive, entry, chunk_size)

    try:
        return etree.fromstring(content, parser=_dom_parser(strict))
    except etree.XMLSyntaxError as e:
        if strict:
            raise XmlParseError(entry.filename, details=str(e)) from e
        logger.warning(
            f"Treating unreadable {entry.filename} as empty",
            extra={"entry": entry.filename, "error": str(e)},
        )
        return None
