"""Schema dump loading.

A schema dump is the JSON description of one database schema written by an
introspection step. It is read from a local file or fetched over HTTP and
converted into a :class:`DatabaseSchema`.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.schema import DatabaseSchema, convert_schema_dump
from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(Exception):
    """Raised when a schema dump cannot be read or decoded."""

    pass


def read_dump_file(path: str | Path) -> Any:
    """Parse the JSON document in a local schema dump file."""
    path = Path(path)
    logger.debug(f"Reading schema dump {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        logger.error(f"Schema dump not found: {path}")
        raise SchemaLoaderError(f"Schema dump not found: {path}") from e
    except OSError as e:
        logger.error(f"Cannot read schema dump {path}: {e}")
        raise SchemaLoaderError(f"Cannot read schema dump {path}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"Schema dump {path} is not valid JSON: {e}")
        raise SchemaLoaderError(f"Schema dump {path} is not valid JSON: {e}") from e


def fetch_dump(url: str, timeout: int = 30) -> Any:
    """Fetch and parse a schema dump served over HTTP(S)."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        logger.error(f"Invalid schema dump URL: {url}")
        raise SchemaLoaderError(f"Invalid schema dump URL: {url}")

    logger.debug(f"Fetching schema dump {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.HTTPError as e:
        message = f"HTTP error {e.response.status_code} fetching schema dump {url}"
        logger.error(message)
        raise SchemaLoaderError(message) from e
    except requests.exceptions.Timeout as e:
        logger.error(f"Timed out fetching schema dump {url}")
        raise SchemaLoaderError(f"Timed out fetching schema dump {url}") from e
    # requests' JSONDecodeError is both a ValueError and a RequestException
    except ValueError as e:
        logger.error(f"Schema dump at {url} is not valid JSON: {e}")
        raise SchemaLoaderError(f"Schema dump at {url} is not valid JSON: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Cannot fetch schema dump {url}: {e}")
        raise SchemaLoaderError(f"Cannot fetch schema dump {url}: {e}") from e


def load_schema(
    file_path: str | Path | None = None,
    url: str | None = None,
    schema_name: str | None = None,
    timeout: int = 30,
) -> tuple[str, DatabaseSchema]:
    """Load a schema dump from exactly one of a file or a URL.

    Args:
        file_path: Local JSON file.
        url: HTTP(S) URL of the JSON document.
        schema_name: Overrides the dump's ``schemaName``.
        timeout: Request timeout in seconds (URLs only).

    Returns:
        Tuple of (source description, converted schema).

    Raises:
        SchemaLoaderError: If the dump cannot be read or is not JSON.
        SchemaError: If the JSON document is not shaped like a schema dump.
    """
    if bool(file_path) == bool(url):
        raise SchemaLoaderError("Exactly one of file_path or url must be given")

    if file_path:
        source, dump = str(file_path), read_dump_file(file_path)
    else:
        source, dump = url, fetch_dump(url, timeout)

    schema = convert_schema_dump(dump, schema_name)
    logger.info(
        f"Loaded {len(schema.tables)} tables and {len(schema.enums)} enums "
        f"of schema '{schema.schema_name}' from {source}"
    )
    return source, schema
