"""OpenAPI utilities public API (re-exports).

Recommended imports:
    from openapi_deref.utils.openapi import json_load, load_document, ref_name
"""

from .json import json_load
from .loader import load_document, schema_registry
from .refs import extensions_of, is_array, is_composed, is_reference, ref_name

__all__ = [
    "extensions_of",
    "is_array",
    "is_composed",
    "is_reference",
    "json_load",
    "load_document",
    "ref_name",
    "schema_registry",
]
