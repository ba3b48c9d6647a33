"""Utility functions for loading schema documents.

This module provides functions for loading a JSON schema document from a
file or a URL and converting it into resource types.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .core.errors import GeneratorError, SchemaError
from .core.schema import ResourceType, convert_schema_document
from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(GeneratorError):
    """Raised when a schema document cannot be read or decoded."""

    pass


def load_schema_file(file_path: str | Path) -> tuple[str, dict[str, Any]]:
    """Load a schema document from a local file.

    Args:
        file_path: Path to the JSON schema document.

    Returns:
        Tuple of (source description, decoded document).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SchemaLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Loading schema from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded schema from %s", file_path)
    return str(file_path), data


def load_schema_url(url: str, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Load a schema document from a URL.

    Args:
        url: URL to fetch the schema from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, decoded document).

    Raises:
        SchemaLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Loading schema from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise SchemaLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise SchemaLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise SchemaLoaderError(f"Invalid JSON response from URL {url}: {e}") from e

    logger.info("Loaded schema from %s", url)
    return url, data


def load_schema(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, list[ResourceType], list[SchemaError]]:
    """Load a schema document from either a file or URL and convert it.

    Args:
        file_path: Path to local schema file (mutually exclusive with url).
        url: URL to fetch the schema from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, resource types, per-resource schema errors).

    Raises:
        SchemaLoaderError: If neither or both sources are given, or loading fails.
        SchemaError: If the document as a whole is malformed.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        raise SchemaLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise SchemaLoaderError("Cannot specify both file_path and url")

    if file_path:
        source, document = load_schema_file(file_path)
    else:
        source, document = load_schema_url(url, timeout)

    resources, errors = convert_schema_document(document)
    logger.info(
        "Converted %d resource type(s) from %s (%d rejected)",
        len(resources),
        source,
        len(errors),
    )
    return source, resources, errors
