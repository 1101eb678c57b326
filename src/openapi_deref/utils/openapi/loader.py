"""OpenAPI document loading.

Thin wrapper around :func:`json_load` that turns I/O and decoding
failures into :class:`DocumentError` and exposes the schema registry
of a loaded document.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ...exceptions import DocumentError
from .json import json_load

logger = logging.getLogger(__name__)


def load_document(path: Path) -> Dict[str, Any]:
    """Load an already-serialized OpenAPI document from a JSON file.

    :param path: Path to the JSON document
    :type path: Path
    :return: Parsed document
    :rtype: Dict[str, Any]
    :raises DocumentError: If the file is missing, is not valid JSON, or
        does not hold a JSON object
    """
    path = Path(path)
    try:
        document = json_load(path)
    except FileNotFoundError as e:
        raise DocumentError(f"Document not found: {path}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise DocumentError(
            f"Invalid JSON in {path}: {e.msg} (line {e.lineno})", path=str(path)
        ) from e
    except OSError as e:
        raise DocumentError(f"Failed to read {path}: {e}", path=str(path)) from e

    if not isinstance(document, dict):
        raise DocumentError(
            f"Document root must be an object, got {type(document).__name__}",
            path=str(path),
        )

    logger.debug(f"Loaded {path} with {len(document.get('paths') or {})} paths")
    return document


def schema_registry(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``components.schemas`` of a document, or an empty mapping.

    :param document: Parsed OpenAPI document
    :type document: Dict[str, Any]
    :return: The registry mapping (the document's own object when present)
    :rtype: Dict[str, Any]
    """
    components = document.get("components")
    if isinstance(components, dict):
        schemas = components.get("schemas")
        if isinstance(schemas, dict):
            return schemas
    return {}


__all__ = ["load_document", "schema_registry"]
