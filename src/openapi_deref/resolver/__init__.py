"""Schema and document resolution.

Recommended imports:
    from openapi_deref.resolver import resolve_document, SchemaResolver
"""

from .document_walker import HTTP_METHODS, DocumentWalker, resolve_document
from .schema_resolver import SchemaResolver

__all__ = ["HTTP_METHODS", "DocumentWalker", "SchemaResolver", "resolve_document"]
