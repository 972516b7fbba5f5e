"""Structural type compiler turning one JSON Schema into TypedDict declarations.

The compiler is a pluggable primitive: anything matching ``TypeCompiler``
can replace ``TypedDictCompiler`` as long as it returns parseable Python
declarations, one of which is named after the requested type.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Protocol

from ..naming import to_pascal_case
from ..tools import SchemaObject
from .emitter import TypeEmitter, merge_all_of
from .profile import GenerationProfile

BANNER_COMMENT = "# Generated by ctxcn from JSON Schema. Do not edit by hand."

_NON_WORD_RE = re.compile(r"\W")


@dataclass(frozen=True)
class CompileOptions:
    no_banner_comment: bool = True
    no_additional_properties: bool = True
    # Names nested declarations must not take, such as other tools' types
    reserved_names: frozenset[str] = frozenset()


class TypeCompiler(Protocol):
    def __call__(
        self,
        schema: SchemaObject,
        name: str,
        options: CompileOptions,
    ) -> str | Awaitable[str]: ...


@dataclass
class TypedDictCompiler:
    """Compiles resolved schemas into functional ``TypedDict`` declarations.

    Nested objects that declare properties get their own declaration, named
    after the parent type and the property, and are emitted before the type
    that uses them. Declarations are evaluated at import time, so unions are
    always written with ``Union``/``Optional`` regardless of the target version.
    """

    profile: GenerationProfile

    def __call__(self, schema: SchemaObject, name: str, options: CompileOptions) -> str:
        model_profile = GenerationProfile(
            use_future_annotations=self.profile.use_future_annotations,
            use_pep604=False,
            use_typing_extensions=self.profile.use_typing_extensions,
        )
        compilation = _Compilation(profile=model_profile, options=options)
        compilation.declare_root(schema, name)
        text = "\n\n".join(compilation.declarations)
        if not options.no_banner_comment:
            text = f"{BANNER_COMMENT}\n{text}"
        return text + "\n"


@dataclass
class _Compilation:
    profile: GenerationProfile
    options: CompileOptions
    declarations: list[str] = field(default_factory=list)
    names: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.names.update(self.options.reserved_names)
        self.emitter = TypeEmitter(self.profile, object_hook=self.declare_object)

    def declare_root(self, schema: SchemaObject, name: str) -> None:
        self.names.add(name)
        object_schema = _object_schema(schema)
        if object_schema is not None:
            self._emit_typed_dict(name, object_schema)
            return
        self.declarations.append(f"{name} = {self.emitter.emit(schema, name)}")

    def declare_object(self, schema: SchemaObject, hint: str) -> str:
        name = self._unique(hint or "Anonymous")
        self._emit_typed_dict(name, schema)
        return name

    def _unique(self, name: str) -> str:
        candidate = name
        counter = 2
        while candidate in self.names:
            candidate = f"{name}{counter}"
            counter += 1
        self.names.add(candidate)
        return candidate

    def _emit_typed_dict(self, name: str, schema: SchemaObject) -> None:
        properties = schema.get("properties", {})
        required = schema.get("required")
        required_set = {item for item in required if isinstance(item, str)} if isinstance(required, list) else set()
        for prop_name, prop_schema in properties.items():
            if isinstance(prop_schema, dict) and "default" in prop_schema:
                required_set.discard(prop_name)

        additional_properties = schema.get("additionalProperties")
        closed = additional_properties is False or (
            self.options.no_additional_properties and additional_properties is None
        )

        items: list[str] = []
        for prop_name, prop_schema in properties.items():
            hint = name + _NON_WORD_RE.sub("", to_pascal_case(prop_name))
            prop_type = self.emitter.emit(prop_schema, hint)
            if prop_name in required_set:
                prop_type = f"Required[{prop_type}]"
            items.append(f"        {prop_name!r}: {prop_type},")

        total = closed and required_set >= set(properties)
        lines = [f"{name} = TypedDict(", f"    {name!r},", "    {"]
        lines.extend(items)
        lines.extend(["    },", f"    total={total},", ")"])
        self.declarations.append("\n".join(lines))


def _object_schema(schema: SchemaObject) -> SchemaObject | None:
    """Return the object schema to declare as a TypedDict, if any."""
    all_of = schema.get("allOf")
    if isinstance(all_of, list) and all_of:
        return merge_all_of(all_of)
    if schema.get("type") not in ("object", None):
        return None
    properties = schema.get("properties")
    if isinstance(properties, dict) and properties:
        return schema
    return None
