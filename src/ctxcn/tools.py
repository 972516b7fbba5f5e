from __future__ import annotations

from typing import TypedDict

# Type aliases for JSON-like values found in tool schemas
JsonPrimitive = str | int | float | bool | None
JsonValue = JsonPrimitive | list["JsonValue"] | dict[str, "JsonValue"]

SchemaObject = TypedDict(
    "SchemaObject",
    {
        "type": object,
        "properties": dict[str, "SchemaObject"],
        "items": object,
        "required": list[str],
        "nullable": bool,
        "enum": list[JsonValue],
        "const": JsonValue,
        "oneOf": list["SchemaObject"],
        "anyOf": list["SchemaObject"],
        "allOf": list["SchemaObject"],
        # additionalProperties can be a bool or a SchemaObject
        "additionalProperties": object,
        "default": JsonValue,
        "description": str,
        "title": str,
        "$ref": str,
        "$defs": dict[str, "SchemaObject"],
        "definitions": dict[str, "SchemaObject"],
        # Placeholder left by the resolver where a reference loops back on itself
        "x-ctxcn-recursive-ref": str,
    },
    total=False,
)

# A JSON Schema is either an object or one of the boolean schemas
Schema = SchemaObject | bool

ToolObject = TypedDict(
    "ToolObject",
    {
        "name": str,
        "title": str,
        "description": str,
        "inputSchema": object,
        "outputSchema": object,
    },
    total=False,
)

ServerInfoObject = TypedDict(
    "ServerInfoObject",
    {
        "name": str,
        "version": str,
    },
    total=False,
)

ToolListDocument = TypedDict(
    "ToolListDocument",
    {
        "tools": list[ToolObject],
        "serverInfo": ServerInfoObject,
    },
    total=False,
)
