"""Type emission utilities for code generation.

This module provides the TypeEmitter class which converts JSON Schema
objects into Python type annotation strings.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import cast

from ..schema import RECURSIVE_REF_KEY
from ..tools import SchemaObject
from .profile import GenerationProfile

ObjectHook = Callable[[SchemaObject, str], str]

_LITERAL_TYPES = (str, int, float, bool, type(None))


@dataclass
class TypeEmitter:
    """Converts JSON Schemas to Python type annotation strings.

    Attributes:
        profile: Generation profile controlling union syntax
        object_hook: Called with an object schema that declares properties and
            a suggested type name; returns the name of the declared type. Without
            a hook such objects are emitted as ``dict[str, Any]``.

    Example:
        >>> emitter = TypeEmitter(GenerationProfile.from_version("3.12"))
        >>> emitter.emit({"type": "array", "items": {"type": "integer"}})
        'list[int]'
        >>> emitter.emit({"oneOf": [{"type": "string"}, {"type": "integer"}]})
        'str | int'
    """

    profile: GenerationProfile
    object_hook: ObjectHook | None = None

    def emit(self, schema: object, hint: str = "") -> str:
        """Convert a schema to a Python type annotation string.

        Args:
            schema: The schema to convert (object, boolean or None)
            hint: Name suggested to the object hook for nested declarations

        Returns:
            A string representing the Python type annotation
        """
        if isinstance(schema, bool):
            return "Any" if schema else "Never"
        if not isinstance(schema, dict):
            return "Any"
        base = self._emit(cast(SchemaObject, schema), hint)
        return self.apply_nullable(base, cast(SchemaObject, schema))

    def apply_nullable(self, base: str, schema: SchemaObject | None) -> str:
        """Apply the OpenAPI-style ``nullable`` flag to a type annotation."""
        if not schema or not schema.get("nullable") or base in {"Any", "None"}:
            return base
        return self.profile.optional_type(base)

    def _emit(self, schema: SchemaObject, hint: str) -> str:
        # Dangling pointers and recursion placeholders carry no usable shape
        if "$ref" in schema or RECURSIVE_REF_KEY in schema:
            return "Any"

        if "const" in schema:
            return self._emit_literal([schema["const"]])

        one_of = schema.get("oneOf")
        if isinstance(one_of, list) and one_of:
            return self._emit_union(one_of, hint)
        any_of = schema.get("anyOf")
        if isinstance(any_of, list) and any_of:
            return self._emit_union(any_of, hint)
        all_of = schema.get("allOf")
        if isinstance(all_of, list) and all_of:
            return self._emit_all_of(all_of, hint)

        enum_values = schema.get("enum")
        if isinstance(enum_values, list) and enum_values:
            return self._emit_literal(enum_values)

        schema_type = schema.get("type")
        if isinstance(schema_type, list):
            variants = [cast(SchemaObject, {**schema, "type": item}) for item in schema_type]
            return self._emit_union(variants, hint)
        if schema_type == "null":
            return "None"
        if schema_type == "string":
            return "str"
        if schema_type == "integer":
            return "int"
        if schema_type == "number":
            return "float"
        if schema_type == "boolean":
            return "bool"
        if schema_type == "array":
            items_schema = schema.get("items")
            if isinstance(items_schema, (dict, bool)):
                return f"list[{self.emit(items_schema, f'{hint}Item')}]"
            return "list[Any]"
        if schema_type == "object" or (schema_type is None and "properties" in schema):
            return self._emit_object(schema, hint)
        return "Any"

    def _emit_object(self, schema: SchemaObject, hint: str) -> str:
        properties = schema.get("properties")
        if isinstance(properties, dict) and properties and self.object_hook is not None:
            return self.object_hook(schema, hint)
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return f"dict[str, {self.emit(additional, f'{hint}Value')}]"
        return "dict[str, Any]"

    def _emit_literal(self, values: list[object]) -> str:
        if not all(isinstance(value, _LITERAL_TYPES) for value in values):
            return "Any"
        literals = ", ".join(repr(value) for value in dict.fromkeys(values))
        return f"Literal[{literals}]"

    def _emit_union(self, items: list[SchemaObject], hint: str) -> str:
        """Emit a union type from oneOf, anyOf or a list of types."""
        types = [self.emit(item, f"{hint}Option{index}") for index, item in enumerate(items, start=1)]
        unique = [item for item in dict.fromkeys(types)]
        if "Any" in unique:
            return "Any"
        if len(unique) == 1:
            return unique[0]
        if self.profile.use_pep604:
            return " | ".join(unique)
        return f"Union[{', '.join(unique)}]"

    def _emit_all_of(self, items: list[SchemaObject], hint: str) -> str:
        """Emit a type for allOf schemas.

        Object members are merged into one object schema. Anything else is
        approximated by its first member, since Python has no intersection type.
        """
        merged = merge_all_of(items)
        if merged is not None:
            return self._emit_object(merged, hint)
        return self.emit(items[0], hint)


def merge_all_of(schemas: list[SchemaObject]) -> SchemaObject | None:
    """Merge allOf schemas into a single object schema.

    This is a simplified merge that combines properties and required fields
    from all object schemas.

    Returns:
        Merged schema, or None if a member is not an object schema or no
        member declares properties
    """
    merged_properties: dict[str, SchemaObject] = {}
    merged_required: list[str] = []
    additional_properties: object | None = None

    for schema in schemas:
        if not isinstance(schema, dict):
            return None
        if schema.get("type") not in ("object", None):
            return None

        properties = schema.get("properties")
        if isinstance(properties, dict):
            merged_properties.update(properties)

        required = schema.get("required")
        if isinstance(required, list):
            merged_required.extend(item for item in required if item not in merged_required)

        # The most restrictive additionalProperties wins
        schema_additional = schema.get("additionalProperties")
        if schema_additional is False:
            additional_properties = False
        elif additional_properties is None and schema_additional is not None:
            additional_properties = schema_additional

    if not merged_properties:
        return None

    result: SchemaObject = {
        "type": "object",
        "properties": merged_properties,
    }
    if merged_required:
        result["required"] = merged_required
    if additional_properties is not None:
        result["additionalProperties"] = additional_properties
    return result
