"""OpenAPI full dereferencing package.

This package replaces every local schema ``$ref`` in an already-parsed
OpenAPI document with the concrete schema it points at, breaking
reference cycles and flattening ``allOf``/``oneOf``/``anyOf``
compositions into plain object schemas.

:var __version__: Current package version
:type __version__: str
"""

from .config.settings import ResolverSettings, get_settings
from .exceptions import DocumentError, OpenAPIDerefError
from .models.diagnostics import Diagnostic, DiagnosticKind, ResolutionReport
from .resolver import DocumentWalker, SchemaResolver, resolve_document
from .utils.openapi import json_load, load_document, ref_name

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "DocumentError",
    "DocumentWalker",
    "OpenAPIDerefError",
    "ResolutionReport",
    "ResolverSettings",
    "SchemaResolver",
    "get_settings",
    "json_load",
    "load_document",
    "ref_name",
    "resolve_document",
]
