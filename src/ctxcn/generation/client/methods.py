from __future__ import annotations

import logging
from dataclasses import dataclass

from ...ir import ToolIR
from ...naming import ToolInfo, parameter_name
from ...schema import resolve_refs, sanitize_schema
from .context import ClientContext
from .helpers import docstring_lines, parameter_description

logger = logging.getLogger(__name__)

_PARAMETER_TYPES = {
    "string": "str",
    "number": "float",
    "integer": "int",
    "boolean": "bool",
    "array": "list[Any]",
    "object": "dict[str, Any]",
}


@dataclass(frozen=True)
class SchemaProperty:
    """A top-level property of a tool's input schema."""

    name: str
    type: str
    required: bool
    description: str | None


@dataclass(frozen=True)
class MethodPlan:
    """Source fragments generated for one tool.

    Attributes:
        parameters: Parameter list of the method, without ``self``
        body: Statements forwarding the call to the dispatch method
        class_method: Complete method of the client class
        interface_method: Matching method stub of the server protocol
    """

    parameters: str
    body: list[str]
    class_method: list[str]
    interface_method: list[str]


def extract_schema_properties(schema: object) -> list[SchemaProperty]:
    """List the declared top-level properties of an input schema.

    Only properties whose schema is an object are considered. The type of
    each property is reduced to a plain Python annotation.
    """
    if not isinstance(schema, dict):
        return []
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        return []
    required = schema.get("required")
    required_names = required if isinstance(required, list) else []

    result: list[SchemaProperty] = []
    for prop_name, prop_schema in properties.items():
        if not isinstance(prop_schema, dict):
            continue
        prop_type = prop_schema.get("type")
        description = prop_schema.get("description")
        result.append(
            SchemaProperty(
                name=prop_name,
                type=_PARAMETER_TYPES.get(prop_type, "Any") if isinstance(prop_type, str) else "Any",
                required=prop_name in required_names,
                description=description if isinstance(description, str) and description else None,
            )
        )
    return result


def plan_method(tool: ToolIR, info: ToolInfo, ctx: ClientContext) -> MethodPlan:
    """Plan the client method and protocol stub for a tool.

    Tools whose input schema declares properties get one parameter per
    property, required ones first. Other tools take a single ``args``
    parameter typed with the generated input type.
    """
    if info.pascal_name in ctx.method_names:
        logger.warning(
            "Tool %r maps to method name %s, which is already used by another tool",
            tool.name,
            info.pascal_name,
        )
    ctx.method_names.add(info.pascal_name)

    properties = extract_schema_properties(resolve_refs(sanitize_schema(tool.input_schema)))
    if properties:
        parameters, body, args = _individual_params(tool, info, properties, ctx)
    else:
        parameters = f"args: {info.input_type_name}"
        body = [f"        return cast({info.output_type_name}, await self._call({tool.name!r}, args))"]
        args = []

    signature = f"    async def {info.pascal_name}(self, {parameters}) -> {info.output_type_name}:"
    class_method = [signature, *_method_docstring(tool, args), *body, ""]
    interface_method = [signature, "        ...", ""]
    return MethodPlan(
        parameters=parameters,
        body=body,
        class_method=class_method,
        interface_method=interface_method,
    )


def _individual_params(
    tool: ToolIR,
    info: ToolInfo,
    properties: list[SchemaProperty],
    ctx: ClientContext,
) -> tuple[str, list[str], list[tuple[str, str]]]:
    """Build the parameter list, call body and docstring arguments."""
    ordered = [prop for prop in properties if prop.required] + [prop for prop in properties if not prop.required]
    # The body reads the output type at runtime
    used: set[str] = {info.output_type_name}
    param_parts: list[str] = []
    required_items: list[str] = []
    optional_lines: list[str] = []
    args: list[tuple[str, str]] = []
    for prop in ordered:
        name = parameter_name(prop.name)
        while name in used:
            name = f"{name}_"
        used.add(name)

        description = prop.description or parameter_description(prop.name)
        if prop.required:
            param_parts.append(f"{name}: {prop.type}")
            required_items.append(f"{prop.name!r}: {name}")
            args.append((name, description))
            continue
        param_type = prop.type if prop.type == "Any" else ctx.profile.optional_type(prop.type)
        param_parts.append(f"{name}: {param_type} = None")
        optional_lines.append(f"        if {name} is not None:")
        optional_lines.append(f"            arguments[{prop.name!r}] = {name}")
        args.append((name, f"[optional] {description}"))

    body = [
        f"        arguments: dict[str, Any] = {{{', '.join(required_items)}}}",
        *optional_lines,
        f"        return cast({info.output_type_name}, await self._call({tool.name!r}, arguments))",
    ]
    return ", ".join(param_parts), body, args


def _method_docstring(tool: ToolIR, args: list[tuple[str, str]]) -> list[str]:
    summary = tool.description or f"{tool.title or tool.name} tool"
    output_schema = sanitize_schema(tool.output_schema)
    returns = f"The result of the {tool.name} operation"
    if isinstance(output_schema, dict):
        description = output_schema.get("description")
        if isinstance(description, str) and description.strip():
            returns = description
    return docstring_lines(summary, args, returns)
