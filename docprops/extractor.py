"""
Document property extractor.

Reads the metadata of an Office Open XML container (.docx, .xlsx, .pptx)
without extracting it and returns a single mapping with keys in ascending
order, e.g.::

    {"application": "Microsoft Office Word", "creator": "Jane", "pages": 3}

Two calling styles are supported:

- callback style, ``extract_from_buffer(buffer, callback)`` and
  ``extract_from_file_path(path, callback)``, where ``callback(error, result)``
  is invoked exactly once with either an error or a result;
- coroutine style, ``await DocPropsExtractor().extract(source)``, which
  raises DocPropsError subclasses instead.

The module-level functions share one process-wide extractor. Configure its
custom property table once, typically at startup, before concurrent use.
"""

import asyncio
import os
import sys
from functools import partial
from typing import Any, Callable, Coroutine, Dict, Optional, Set

from aws_lambda_powertools import Logger

from docprops.core.config import ExtractorConfig
from docprops.core.errors import ConfigurationError, DocPropsError, UsageError
from docprops.extraction.assembler import ResultAccumulator
from docprops.extraction.walker import (
    ArchiveSource,
    ZipEntryWalker,
    build_part_handlers,
    open_archive,
)

# stdout is reserved for the command-line JSON output
logger = Logger(service="docprops", stream=sys.stderr)

ExtractionCallback = Callable[[Optional[Exception], Optional[Dict[str, Any]]], Any]

BUFFER_TYPES = (bytes, bytearray, memoryview)
PATH_TYPES = (str, os.PathLike)

# Extractions scheduled on a running loop, held until they complete
_pending_tasks: Set[asyncio.Task] = set()


class DocPropsExtractor:
    """Extracts document properties using a bound ExtractorConfig.

    Each extraction captures the configuration when it is called; replacing
    the custom property table only affects extractions started afterwards.
    """

    def __init__(self, config: Optional[ExtractorConfig] = None):
        self._config = config if config is not None else ExtractorConfig()

    @property
    def config(self) -> ExtractorConfig:
        return self._config

    def configure_custom_properties(self, mapping_table: Any) -> None:
        """Replace the custom property table.

        Args:
            mapping_table: List of ``{"msName", "name", "type"}`` entries.
                           Anything else is logged and ignored, leaving the
                           current table in place.
        """
        try:
            self._config = self._config.with_custom_properties(mapping_table)
        except ConfigurationError as e:
            logger.error(f"Incorrect custom properties settings: {e}")
            return

        logger.info(f"Configured {len(self._config.custom_properties)} custom properties")

    def extract(self, source: ArchiveSource) -> Coroutine[Any, Any, Dict[str, Any]]:
        """Extract the document properties of a container.

        The configuration is captured when this method is called, not when
        the returned coroutine first runs.

        Args:
            source: In-memory buffer or filesystem path

        Returns:
            Coroutine resolving to the discovered properties, keys in
            ascending order

        Raises:
            ArchiveError: If the container cannot be opened or read
            XmlParseError: If a property part is malformed
            CustomPropertyQueryError: If a custom property query fails
        """
        return self._extract(source, self._config)

    async def _extract(self, source: ArchiveSource, config: ExtractorConfig) -> Dict[str, Any]:
        accumulator = ResultAccumulator()

        with open_archive(source) as archive:
            walker = ZipEntryWalker(archive, build_part_handlers(config))
            async for fields in walker.walk():
                accumulator.merge(fields)

        return accumulator.sorted()

    def extract_from_buffer(self, buffer: Any, callback: ExtractionCallback) -> None:
        """Extract properties from an in-memory container.

        Args:
            buffer: bytes, bytearray or memoryview holding the container
            callback: ``callback(error, result)``, invoked exactly once
        """
        if isinstance(buffer, BUFFER_TYPES) and callable(callback):
            self._run(buffer, callback)
        else:
            _report_usage_error(callback)

    def extract_from_file_path(self, path: Any, callback: ExtractionCallback) -> None:
        """Extract properties from a container on disk.

        Args:
            path: Filesystem path (str or os.PathLike)
            callback: ``callback(error, result)``, invoked exactly once
        """
        if isinstance(path, PATH_TYPES) and callable(callback):
            self._run(path, callback)
        else:
            _report_usage_error(callback)

    def _run(self, source: ArchiveSource, callback: ExtractionCallback) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            task = loop.create_task(self.extract(source))
            _pending_tasks.add(task)
            task.add_done_callback(partial(_deliver, callback))
            return

        try:
            result = asyncio.run(self.extract(source))
        except DocPropsError as e:
            logger.warning(f"Extraction failed: {e}", extra={"error_type": type(e).__name__})
            callback(e, None)
            return
        except Exception as e:
            logger.exception("Unexpected error during document property extraction")
            callback(e, None)
            raise

        callback(None, result)


def _report_usage_error(callback: Any) -> None:
    error = UsageError()
    if callable(callback):
        callback(error, None)
    else:
        logger.error(str(error))


def _deliver(callback: ExtractionCallback, task: asyncio.Task) -> None:
    _pending_tasks.discard(task)

    if task.cancelled():
        callback(asyncio.CancelledError(), None)
        return

    error = task.exception()
    if error is None:
        callback(None, task.result())
        return

    logger.warning(f"Extraction failed: {error}", extra={"error_type": type(error).__name__})
    callback(error, None)

    if not isinstance(error, DocPropsError):
        # Unexpected failures still reach the loop's exception handler
        task.get_loop().call_exception_handler(
            {
                "message": "Unexpected error during document property extraction",
                "exception": error,
                "task": task,
            }
        )


# ── process-wide extractor ─────────────────────────────────────────
_default_extractor = DocPropsExtractor()


def get_default_extractor() -> DocPropsExtractor:
    """Return the extractor used by the module-level functions."""
    return _default_extractor


def configure_custom_properties(mapping_table: Any) -> None:
    """Replace the process-wide custom property table."""
    _default_extractor.configure_custom_properties(mapping_table)


def extract_from_buffer(buffer: Any, callback: ExtractionCallback) -> None:
    """Extract properties from an in-memory container (process-wide config)."""
    _default_extractor.extract_from_buffer(buffer, callback)


def extract_from_file_path(path: Any, callback: ExtractionCallback) -> None:
    """Extract properties from a container on disk (process-wide config)."""
    _default_extractor.extract_from_file_path(path, callback)


def extract(source: ArchiveSource) -> Coroutine[Any, Any, Dict[str, Any]]:
    """Coroutine form of the extraction using the process-wide config."""
    return _default_extractor.extract(source)
