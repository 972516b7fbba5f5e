"""Schema repair and internal reference resolution.

Tool schemas come straight from remote servers and are treated as
untrusted: ``sanitize_schema`` turns any value into a well-formed schema and
``resolve_refs`` inlines internal ``$ref`` pointers so the type compiler
only ever sees self-contained schemas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from .tools import Schema, SchemaObject

logger = logging.getLogger(__name__)

RECURSIVE_REF_KEY = "x-ctxcn-recursive-ref"

_MISSING = object()


def sanitize_schema(schema: object) -> Schema:
    """Return a well-formed copy of an arbitrary schema value.

    Boolean schemas are returned as is. Anything that is not a JSON object
    (including arrays and ``None``) becomes the empty schema, which accepts
    any value. Inside objects, ``$ref`` entries are kept only when they are
    internal pointers (strings starting with ``#``).

    This function never raises.
    """
    if isinstance(schema, bool):
        return schema
    if not isinstance(schema, dict):
        return {}
    return cast(SchemaObject, _sanitize_value(schema))


def _sanitize_value(value: object) -> object:
    if isinstance(value, list):
        return [_sanitize_value(item) for item in value]
    if not isinstance(value, dict):
        return value
    sanitized: dict[str, object] = {}
    for key, item in value.items():
        if key == "$ref":
            if isinstance(item, str) and item.startswith("#"):
                sanitized[key] = item
            continue
        sanitized[key] = _sanitize_value(item)
    return sanitized


def resolve_refs(schema: object, root: object | None = None) -> object:
    """Replace internal ``$ref`` pointers with the subtree they point at.

    Args:
        schema: The (sanitized) schema to resolve
        root: The document pointers are resolved against; defaults to ``schema``

    Returns:
        A new schema without resolvable ``$ref`` nodes. Dangling pointers are
        left in place and pointers that loop back on themselves are replaced
        by a ``{"x-ctxcn-recursive-ref": pointer}`` placeholder.
    """
    resolver = RefResolver(schema if root is None else root)
    return resolver.resolve(schema)


@dataclass
class RefResolver:
    """Resolves internal ``$ref`` pointers relative to a fixed root.

    Pointers are always walked from ``root``, never from the subtree being
    resolved, so nested definitions keep resolving correctly after they have
    been inlined. The resolver tracks the pointers being expanded on the
    current path and stops at the first repetition.

    Example:
        >>> resolver = RefResolver({"$defs": {"Id": {"type": "string"}}})
        >>> resolver.resolve({"$ref": "#/$defs/Id"})
        {'type': 'string'}
    """

    root: object

    def resolve(self, node: object) -> object:
        return self._resolve(node, ())

    def _resolve(self, node: object, active: tuple[str, ...]) -> object:
        if isinstance(node, list):
            return [self._resolve(item, active) for item in node]
        if not isinstance(node, dict):
            return node
        if "$ref" not in node:
            return {key: self._resolve(value, active) for key, value in node.items()}

        ref = node["$ref"]
        if not isinstance(ref, str) or not ref.startswith("#"):
            return node
        if ref in active:
            logger.debug("Recursive reference %s replaced by a placeholder", ref)
            return {RECURSIVE_REF_KEY: ref}
        target = _resolve_pointer(self.root, ref)
        if target is _MISSING:
            logger.debug("Leaving dangling reference %s unresolved", ref)
            return node
        return self._resolve(target, active + (ref,))


def _resolve_pointer(document: object, ref: str) -> object:
    """Walk ``document`` along the JSON pointer in ``ref``.

    Returns:
        The value at the pointer location, or ``_MISSING`` if any segment
        cannot be found
    """
    fragment = ref[1:]
    if fragment == "":
        return document
    if not fragment.startswith("/"):
        return _MISSING
    current = document
    for part in fragment[1:].split("/"):
        key = part.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict) and key in current:
            current = current[key]
        elif isinstance(current, list) and key.isdigit() and int(key) < len(current):
            current = current[int(key)]
        else:
            return _MISSING
    return current
