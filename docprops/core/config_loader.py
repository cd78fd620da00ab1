"""Custom property table loader.

Custom property mappings are usually kept outside the code, either as a
local JSON file or as an object in S3, and loaded once at startup.

Features:
- Load a table from a local path or an ``s3://bucket/key`` URI
- LRU caching of S3 tables across calls
- Fallback to the DOCPROPS_CUSTOM_PROPERTIES environment variable

Usage:
    from docprops import configure_custom_properties
    from docprops.core.config_loader import resolve_custom_properties

    configure_custom_properties(resolve_custom_properties())

The file must contain a JSON list of entries:
    [{"msName": "Dept", "name": "department", "type": "string"}]
"""

import json
import os
from functools import lru_cache
from typing import Any, Optional, Tuple

import boto3
from botocore.exceptions import ClientError

from docprops.core.config import parse_custom_properties
from docprops.core.errors import ConfigurationError
from docprops.core.models import CustomFieldMapping

CUSTOM_PROPERTIES_ENV = "DOCPROPS_CUSTOM_PROPERTIES"
S3_SCHEME = "s3://"

# Module-level S3 client, created on first use
_s3_client: Any = None


def get_s3_client() -> Any:
    """Get or create the S3 client (reused across calls).

    Returns:
        boto3 S3 client instance
    """
    global _s3_client
    if _s3_client is None:
        _s3_client = boto3.client("s3")
    return _s3_client


def parse_s3_uri(uri: str) -> Tuple[str, str]:
    """Split an ``s3://bucket/key`` URI into bucket and key.

    Raises:
        ConfigurationError: If bucket or key is missing.
    """
    bucket, _, key = uri[len(S3_SCHEME):].partition("/")
    if not bucket or not key:
        raise ConfigurationError("Invalid S3 location", details=uri)
    return bucket, key


@lru_cache(maxsize=10)
def load_config_from_s3(bucket: str, key: str) -> Any:
    """Load and cache a JSON document from S3.

    Args:
        bucket: S3 bucket name
        key: S3 object key (e.g., "docprops/custom-properties.json")

    Returns:
        Parsed JSON document

    Raises:
        ConfigurationError: If the object is missing or is not valid JSON
    """
    try:
        s3 = get_s3_client()
        response = s3.get_object(Bucket=bucket, Key=key)
        content = response["Body"].read().decode("utf-8")
        return json.loads(content)
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code", "Unknown")
        if error_code in ("NoSuchKey", "404"):
            raise ConfigurationError(
                f"Configuration file not found: s3://{bucket}/{key}"
            ) from e
        raise ConfigurationError(
            f"Failed to load configuration from s3://{bucket}/{key}", details=str(e)
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file s3://{bucket}/{key}", details=str(e)
        ) from e


def load_config_from_file(path: str) -> Any:
    """Load a JSON document from the local filesystem.

    Raises:
        ConfigurationError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ConfigurationError(
            f"Could not read configuration file {path}", details=str(e)
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Invalid JSON in configuration file {path}", details=str(e)
        ) from e


def load_custom_properties(location: str) -> Tuple[CustomFieldMapping, ...]:
    """Load a custom property mapping table from a path or S3 URI.

    Args:
        location: Local file path or ``s3://bucket/key``

    Returns:
        Tuple of CustomFieldMapping

    Raises:
        ConfigurationError: If the table cannot be loaded or is malformed
    """
    if location.startswith(S3_SCHEME):
        bucket, key = parse_s3_uri(location)
        table = load_config_from_s3(bucket, key)
    else:
        table = load_config_from_file(location)

    return parse_custom_properties(table)


def resolve_custom_properties(
    location: Optional[str] = None,
) -> Tuple[CustomFieldMapping, ...]:
    """Resolve the custom property table for this process.

    Resolution order:
    1. The explicit ``location`` argument
    2. The DOCPROPS_CUSTOM_PROPERTIES environment variable
    3. An empty table

    Returns:
        Tuple of CustomFieldMapping (empty when nothing is configured)
    """
    location = location or os.environ.get(CUSTOM_PROPERTIES_ENV)
    if not location:
        return ()
    return load_custom_properties(location)


def clear_config_cache() -> None:
    """Clear the LRU cache for S3 configurations.

    Useful for testing or when configurations need to be reloaded.
    """
    load_config_from_s3.cache_clear()
