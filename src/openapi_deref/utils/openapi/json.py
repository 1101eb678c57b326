"""JSON helpers for OpenAPI documents."""

import json
from pathlib import Path
from typing import Any


def json_load(path: Path) -> Any:
    """Load JSON from a file path with UTF-8 encoding.

    :param path: Path to the JSON file to load
    :type path: Path
    :return: Parsed JSON content
    :rtype: Any
    :raises FileNotFoundError: If the specified file path does not exist
    :raises json.JSONDecodeError: If the file contains invalid JSON
    """
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)


def json_dump(obj: Any, path: Path, indent: int = 2) -> None:
    """Write an object as UTF-8 JSON to a file path.

    :param obj: JSON-serializable object
    :type obj: Any
    :param path: Destination file
    :type path: Path
    :param indent: Indentation width
    :type indent: int
    """
    with Path(path).open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=indent, ensure_ascii=False)
        f.write("\n")


__all__ = ["json_load", "json_dump"]
