"""Full schema resolution with cycle detection and composition flattening.

This module provides :class:`SchemaResolver`, the recursive primitive
behind document resolution. Given any schema node it returns an
equivalent node in which every local ``$ref`` has been replaced by the
registry schema it names and every ``allOf``/``oneOf``/``anyOf``
composition has been merged into a single object schema.

Resolution is total: unresolvable references, reference cycles and
unrecognised shapes are logged, recorded as :class:`Diagnostic` entries
and answered with a best-effort fallback instead of an exception.

Shapes are tested in a fixed priority order, first match wins:

1. reference (``$ref``)
2. array (``type: array`` or ``items``)
3. object (``properties``)
4. composed (``allOf``/``oneOf``/``anyOf``)
5. anything else is passed through unchanged
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..config.settings import ResolverSettings, get_settings
from ..models.diagnostics import Diagnostic, DiagnosticKind
from ..utils.openapi.refs import (
    COMPOSITION_KEYWORDS,
    extensions_of,
    is_array,
    is_composed,
    is_reference,
    properties_of,
    ref_name,
)
from ..utils.text import truncate_text

logger = logging.getLogger(__name__)

PENDING = "pending"
DONE = "done"


class SchemaResolver:
    """Resolve schema nodes against a registry of named definitions.

    The resolver keeps a per-instance state table mapping each registry
    name to ``(PENDING, raw_target)`` while that name is being resolved
    further up the call stack, and to ``(DONE, resolved)`` once it has
    been resolved. A re-entrant lookup of a pending name is a cycle and
    returns the raw target as a sentinel, which guarantees termination.

    Use one instance per document pass; the state table is not meant to
    be shared between documents or threads.

    :param registry: Mapping of definition name to schema, usually
        ``components.schemas``. Read-only to the resolver.
    :type registry: Dict[str, Any]
    :param settings: Resolver settings, defaults to the environment
    :type settings: Optional[ResolverSettings]
    """

    def __init__(
        self,
        registry: Optional[Dict[str, Any]],
        settings: Optional[ResolverSettings] = None,
    ):
        self.registry: Dict[str, Any] = registry if registry is not None else {}
        self.settings = settings or get_settings()
        self.diagnostics: List[Diagnostic] = []
        self._states: Dict[str, Tuple[str, Any]] = {}
        # id of pending sentinel -> number of names pending on it
        self._pending: Dict[int, int] = {}

    def resolve(self, schema: Any) -> Any:
        """Return a fully dereferenced, composition-flattened schema.

        Object and array schemas are rewritten in place and returned;
        references return the resolved registry schema; composed schemas
        return a new object schema.

        :param schema: Schema node to resolve
        :type schema: Any
        :return: Resolved schema node
        :rtype: Any
        """
        if is_reference(schema):
            return self._resolve_reference(schema)
        if is_array(schema):
            return self._resolve_array(schema)
        if properties_of(schema) is not None:
            return self._resolve_object(schema)
        if is_composed(schema):
            return self._resolve_composed(schema)

        self._report(
            DiagnosticKind.NO_TYPE_MATCH,
            f"No type match for schema {truncate_text(repr(schema), 200)}",
        )
        return schema

    def state_of(self, name: str) -> Optional[str]:
        """Return ``"pending"``, ``"done"`` or None for a registry name."""
        state = self._states.get(name)
        return state[0] if state else None

    def _resolve_reference(self, schema: Dict[str, Any]) -> Any:
        ref = schema["$ref"]
        name = ref_name(ref)
        target = self.registry.get(name)
        if target is None:
            self._report(
                DiagnosticKind.UNRESOLVED_REFERENCE,
                f"Unresolved reference {ref!r}: no schema named {name!r}",
                name=name,
                ref=ref,
            )
            return schema

        state = self._states.get(name)
        if state is not None:
            status, value = state
            if status == PENDING:
                self._report(
                    DiagnosticKind.CYCLE_AVOIDED,
                    f"Avoiding infinite loop on {name!r}",
                    name=name,
                    ref=ref,
                )
            else:
                logger.debug(f"Reusing resolved schema {name!r}")
            return value

        self._states[name] = (PENDING, target)
        self._pending[id(target)] = self._pending.get(id(target), 0) + 1
        resolved = self.resolve(target)
        self._release(target)

        if self._is_pending(resolved):
            # Came back as an ancestor still in progress; retry on next lookup
            del self._states[name]
        else:
            self._states[name] = (DONE, resolved)
        return resolved

    def _resolve_array(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        items = schema.get("items")
        if is_reference(items) or (
            self.settings.resolve_inline_items and isinstance(items, dict)
        ):
            schema["items"] = self._close_cycle(self.resolve(items))
        return schema

    def _resolve_object(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        properties = schema["properties"]
        updated = {
            name: self.resolve(prop) for name, prop in list(properties.items())
        }

        for name, prop in updated.items():
            if properties_of(prop) is not properties and not self._is_pending(prop):
                # Arrays carry an implicit "array" type
                if (
                    isinstance(prop, dict)
                    and prop.get("type") is None
                    and not is_array(prop)
                ):
                    prop["type"] = "object"
                properties[name] = prop
            else:
                logger.debug(
                    f"Not adding recursive property {name!r}, using generic object"
                )
                properties[name] = {"type": "object"}
        return schema

    def _resolve_composed(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        model: Dict[str, Any] = {}
        required: List[str] = []

        for member in self._composition_members(schema):
            resolved = self.resolve(member)
            if self._is_pending(resolved):
                logger.debug("Skipping composition member that closes a cycle")
                continue
            member_properties = properties_of(resolved)
            if member_properties is not None:
                member_required = resolved.get("required")
                if not isinstance(member_required, list):
                    member_required = None
                merged = model.setdefault("properties", {})
                items = list(member_properties.items())
                for position, (name, prop) in enumerate(items):
                    if (
                        member_required
                        and self._is_required(name, position, member_required)
                        and name not in required
                    ):
                        required.append(name)
                    merged[name] = self._close_cycle(self.resolve(prop))
            if self.settings.copy_member_extensions:
                model.update(extensions_of(resolved))

        if required:
            model["required"] = required
        model.update(extensions_of(schema))
        return model

    @staticmethod
    def _composition_members(schema: Dict[str, Any]) -> List[Any]:
        for keyword in COMPOSITION_KEYWORDS:
            members = schema.get(keyword)
            if isinstance(members, list) and members:
                return members
        return []

    def _is_pending(self, value: Any) -> bool:
        """Check whether a node is the sentinel of a name still being resolved."""
        return id(value) in self._pending

    def _release(self, sentinel: Any) -> None:
        key = id(sentinel)
        if self._pending[key] == 1:
            del self._pending[key]
        else:
            self._pending[key] -= 1

    def _close_cycle(self, value: Any) -> Any:
        # A pending sentinel may only come back from a cycle hit
        if self._is_pending(value):
            logger.debug("Cycle closes here, using generic object")
            return {"type": "object"}
        return value

    def _is_required(self, name: str, position: int, required: List[Any]) -> bool:
        if self.settings.legacy_required_positions:
            return position < len(required) and required[position] is not None
        return name in required

    def _report(
        self,
        kind: DiagnosticKind,
        message: str,
        name: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> None:
        if kind == DiagnosticKind.UNRESOLVED_REFERENCE:
            logger.error(message)
        elif kind == DiagnosticKind.CYCLE_AVOIDED:
            logger.debug(message)
        else:
            logger.warning(message)
        self.diagnostics.append(
            Diagnostic(kind=kind, message=message, name=name, ref=ref)
        )
