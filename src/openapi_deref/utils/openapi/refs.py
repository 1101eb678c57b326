"""Reference and shape helpers for OpenAPI schema nodes.

Schemas are plain dictionaries. These predicates classify a node into
the shapes the resolver dispatches on; a node may match several of
them and the resolver decides which one wins.
"""

from typing import Any, Dict, Optional

COMPOSITION_KEYWORDS = ("allOf", "oneOf", "anyOf")
EXTENSION_PREFIX = "x-"


def ref_name(ref: str) -> str:
    """Return the definition name a ``$ref`` points at.

    Only the text after the final ``/`` is meaningful; the prefix is
    not validated, so ``#/components/schemas/Pet`` and ``#/definitions/Pet``
    both name ``Pet``.

    :param ref: Reference string
    :type ref: str
    :return: Final path segment
    :rtype: str
    """
    return ref[ref.rfind("/") + 1 :]


def is_reference(schema: Any) -> bool:
    """Check whether a node carries a string ``$ref``."""
    return isinstance(schema, dict) and isinstance(schema.get("$ref"), str)


def is_array(schema: Any) -> bool:
    """Check whether a node is an array schema (typed or carrying ``items``)."""
    return isinstance(schema, dict) and (
        schema.get("type") == "array" or "items" in schema
    )


def is_composed(schema: Any) -> bool:
    """Check whether a node carries any composition keyword list."""
    return isinstance(schema, dict) and any(
        isinstance(schema.get(keyword), list) for keyword in COMPOSITION_KEYWORDS
    )


def extensions_of(schema: Any) -> Dict[str, Any]:
    """Return the ``x-*`` extension entries of a node, in order.

    :param schema: Schema node
    :type schema: Any
    :return: Extension entries (empty for non-dict nodes)
    :rtype: Dict[str, Any]
    """
    if not isinstance(schema, dict):
        return {}
    return {
        key: value
        for key, value in schema.items()
        if isinstance(key, str) and key.startswith(EXTENSION_PREFIX)
    }


def properties_of(schema: Any) -> Optional[Dict[str, Any]]:
    """Return a node's ``properties`` mapping, or None when it has none."""
    if not isinstance(schema, dict):
        return None
    properties = schema.get("properties")
    return properties if isinstance(properties, dict) else None


__all__ = [
    "COMPOSITION_KEYWORDS",
    "extensions_of",
    "is_array",
    "is_composed",
    "is_reference",
    "properties_of",
    "ref_name",
]
