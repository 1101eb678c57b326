"""Walk an OpenAPI document and resolve every schema leaf in place.

The walker visits every operation of every path item: parameters
(including per-media-type parameter content), request bodies, responses
and callbacks, re-entering the same path-level traversal for the path
items nested inside callbacks. Each schema found is handed to a
:class:`SchemaResolver` and replaced with the result.

Missing or malformed sub-structures are skipped; absence is not an
error at this level.
"""

import logging
from typing import Any, Dict, Iterator, Optional, Tuple

from ..config.settings import ResolverSettings
from ..models.diagnostics import ResolutionReport
from ..utils.openapi.loader import schema_registry
from .schema_resolver import SchemaResolver

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class DocumentWalker:
    """Resolve the schemas of an operation tree against one registry.

    :param registry: Mapping of definition name to schema
    :type registry: Dict[str, Any]
    :param settings: Resolver settings, defaults to the environment
    :type settings: Optional[ResolverSettings]
    """

    def __init__(
        self,
        registry: Optional[Dict[str, Any]],
        settings: Optional[ResolverSettings] = None,
    ):
        self.resolver = SchemaResolver(registry, settings)
        self.schemas_resolved = 0

    def resolve_document(self, document: Dict[str, Any]) -> ResolutionReport:
        """Resolve every path of a document in place.

        :param document: Parsed OpenAPI document
        :type document: Dict[str, Any]
        :return: Summary of the pass and the diagnostics it produced
        :rtype: ResolutionReport
        """
        visited = 0
        paths = document.get("paths")
        if isinstance(paths, dict):
            for pathname, path_item in paths.items():
                if not isinstance(path_item, dict):
                    continue
                logger.debug(f"Resolving path {pathname}")
                self.resolve_path(path_item)
                visited += 1

        report = ResolutionReport(
            paths=visited,
            schemas_resolved=self.schemas_resolved,
            diagnostics=list(self.resolver.diagnostics),
        )
        logger.info(
            f"Resolved {report.schemas_resolved} schemas across {visited} paths "
            f"({len(report.diagnostics)} diagnostics)"
        )
        return report

    def resolve_path(self, path_item: Dict[str, Any]) -> None:
        """Resolve every operation of a single path item in place.

        Also used to re-enter the traversal for path items nested
        inside callbacks.

        :param path_item: OpenAPI path item object
        :type path_item: Dict[str, Any]
        """
        for _method, operation in self._operations(path_item):
            self._resolve_parameters(operation.get("parameters"))
            self._resolve_callbacks(operation.get("callbacks"))

            request_body = operation.get("requestBody")
            if isinstance(request_body, dict):
                self._resolve_content(request_body.get("content"))

            responses = operation.get("responses")
            if isinstance(responses, dict):
                for _code, response in responses.items():
                    if isinstance(response, dict):
                        self._resolve_content(response.get("content"))

    @staticmethod
    def _operations(path_item: Dict[str, Any]) -> Iterator[Tuple[str, Dict[str, Any]]]:
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                yield method, operation

    def _resolve_parameters(self, parameters: Any) -> None:
        if not isinstance(parameters, list):
            return
        for parameter in parameters:
            if not isinstance(parameter, dict):
                continue
            if parameter.get("schema") is not None:
                parameter["schema"] = self._resolve(parameter["schema"])
            self._resolve_content(parameter.get("content"))

    def _resolve_callbacks(self, callbacks: Any) -> None:
        if not isinstance(callbacks, dict):
            return
        for name, callback in callbacks.items():
            if not isinstance(callback, dict):
                continue
            for expression, path_item in callback.items():
                if isinstance(path_item, dict):
                    logger.debug(f"Resolving callback {name} {expression}")
                    self.resolve_path(path_item)

    def _resolve_content(self, content: Any) -> None:
        if not isinstance(content, dict):
            return
        for _media_type, media in content.items():
            if isinstance(media, dict) and media.get("schema") is not None:
                media["schema"] = self._resolve(media["schema"])

    def _resolve(self, schema: Any) -> Any:
        self.schemas_resolved += 1
        return self.resolver.resolve(schema)


def resolve_document(
    document: Dict[str, Any], settings: Optional[ResolverSettings] = None
) -> ResolutionReport:
    """Fully dereference a parsed OpenAPI document in place.

    A fresh resolver, and with it a fresh resolution cache, is built for
    every call; the registry is ``components.schemas`` of the document.

    :param document: Parsed OpenAPI document
    :type document: Dict[str, Any]
    :param settings: Resolver settings, defaults to the environment
    :type settings: Optional[ResolverSettings]
    :return: Summary of the pass and the diagnostics it produced
    :rtype: ResolutionReport
    """
    walker = DocumentWalker(schema_registry(document), settings)
    return walker.resolve_document(document)
