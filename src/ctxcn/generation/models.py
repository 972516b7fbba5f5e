from __future__ import annotations

import ast
import inspect
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import cast

from ..errors import CompilerError
from ..schema import resolve_refs, sanitize_schema
from ..tools import SchemaObject
from .compiler import CompileOptions, TypeCompiler

logger = logging.getLogger(__name__)

_COMBINATOR_KEYS = ("allOf", "anyOf", "oneOf")


@dataclass(frozen=True)
class TypeDeclaration:
    """A single top-level type declaration of the generated module."""

    name: str
    definition: str


async def synthesize_type(
    schema: object,
    type_name: str,
    compiler: TypeCompiler,
    reserved_names: frozenset[str] = frozenset(),
) -> str:
    """Turn one tool schema into the source text declaring ``type_name``.

    Boolean schemas and object schemas that declare no properties are
    handled here; everything else is sanitized, resolved and handed to the
    type compiler. Nested declarations avoid ``reserved_names``. Compiler
    failures propagate to the caller.
    """
    if isinstance(schema, bool):
        return _boolean_alias(type_name, schema)
    sanitized = sanitize_schema(schema)
    if isinstance(sanitized, bool):
        return _boolean_alias(type_name, sanitized)
    if _is_open_object(sanitized):
        return f"{type_name} = dict[str, Any]\n"
    resolved = resolve_refs(sanitized)
    if isinstance(resolved, bool):
        return _boolean_alias(type_name, resolved)
    result = compiler(
        cast(SchemaObject, resolved),
        type_name,
        CompileOptions(
            no_banner_comment=True,
            no_additional_properties=True,
            reserved_names=reserved_names,
        ),
    )
    if inspect.isawaitable(result):
        result = await result
    return result


async def synthesize_declarations(
    schema: object,
    type_name: str,
    compiler: TypeCompiler,
    reserved_names: frozenset[str] = frozenset(),
) -> list[TypeDeclaration]:
    """Synthesize ``type_name`` and split the result into declarations.

    Raises:
        CompilerError: If the synthesized text does not declare ``type_name``
    """
    text = await synthesize_type(schema, type_name, compiler, reserved_names)
    declarations = split_declarations(text)
    if type_name not in {declaration.name for declaration in declarations}:
        raise CompilerError(f"Type compiler output does not declare {type_name!r}")
    return declarations


def split_declarations(text: str) -> list[TypeDeclaration]:
    """Split source text into its top-level type declarations.

    Supported statements are ``Name = ...``, ``Name: T = ...``, ``type Name = ...``
    and class definitions. Comments between declarations are dropped.

    Raises:
        CompilerError: If the text is not valid Python or contains other statements
    """
    try:
        module = ast.parse(text)
    except SyntaxError as exc:
        raise CompilerError(f"Type compiler produced invalid Python: {exc.msg} (line {exc.lineno})") from exc

    lines = text.splitlines()
    declarations: list[TypeDeclaration] = []
    for node in module.body:
        name = _declared_name(node)
        if name is None:
            raise CompilerError(f"Unsupported statement in type compiler output at line {node.lineno}")
        start = node.lineno
        for decorator in getattr(node, "decorator_list", []):
            start = min(start, decorator.lineno)
        end = node.end_lineno or node.lineno
        declarations.append(TypeDeclaration(name=name, definition="\n".join(lines[start - 1 : end])))
    return declarations


def dedupe_declarations(declarations: Iterable[TypeDeclaration]) -> list[TypeDeclaration]:
    """Keep the first declaration of every type name, in first-seen order.

    A later declaration with the same name is dropped even when its body
    differs; such conflicts are logged as warnings.
    """
    seen: dict[str, TypeDeclaration] = {}
    for declaration in declarations:
        existing = seen.get(declaration.name)
        if existing is None:
            seen[declaration.name] = declaration
            continue
        if _normalize(existing.definition) != _normalize(declaration.definition):
            logger.warning(
                "Type %s is declared more than once with different definitions; keeping the first one",
                declaration.name,
            )
    return list(seen.values())


def _boolean_alias(type_name: str, schema: bool) -> str:
    return f"{type_name} = {'Any' if schema else 'Never'}\n"


def _is_open_object(schema: SchemaObject) -> bool:
    """Check for an object schema that declares no structure at all."""
    if schema.get("type") != "object":
        return False
    if any(key in schema for key in _COMBINATOR_KEYS):
        return False
    properties = schema.get("properties")
    return not isinstance(properties, dict) or not properties


def _declared_name(node: ast.stmt) -> str | None:
    if isinstance(node, ast.ClassDef):
        return node.name
    if isinstance(node, ast.Assign) and len(node.targets) == 1 and isinstance(node.targets[0], ast.Name):
        return node.targets[0].id
    if isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
        return node.target.id
    type_alias = getattr(ast, "TypeAlias", None)
    if type_alias is not None and isinstance(node, type_alias):
        return node.name.id
    return None


def _normalize(text: str) -> str:
    return " ".join(text.split())
