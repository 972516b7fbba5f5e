"""Naming helpers for tool, type and Python identifiers."""

from __future__ import annotations

import keyword
import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(r"[-_ ]")
_SEPARATOR_RUN_RE = re.compile(r"[-_ ]+")
_IDENTIFIER_SANITIZE_RE = re.compile(r"[^0-9a-zA-Z_]")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")

# Names that generated method bodies already use
_RESERVED_PARAMETERS = frozenset({"self", "arguments", "cast"})


def to_pascal_case(raw: str | None) -> str:
    """Convert a tool or server name to PascalCase.

    Hyphens, underscores, spaces and slashes are word separators. When a
    separator is present every word is capitalized and the rest of the word
    lower-cased; otherwise only the first character is upper-cased and the
    rest is kept as is, so camelCase input stays readable.

    Example:
        >>> to_pascal_case("get_user-info")
        'GetUserInfo'
        >>> to_pascal_case("api/v1/users")
        'ApiV1Users'
        >>> to_pascal_case("addUser")
        'AddUser'
    """
    if not raw or not isinstance(raw, str):
        return ""
    normalized = raw.replace("/", "-")
    if _SEPARATOR_RE.search(normalized):
        parts = [part for part in _SEPARATOR_RUN_RE.split(normalized) if part]
        return "".join(part[0].upper() + part[1:].lower() for part in parts)
    return normalized[0].upper() + normalized[1:]


@dataclass(frozen=True)
class ToolInfo:
    """Names derived from a tool's wire name.

    Attributes:
        original_name: The wire-level tool name, never altered
        pascal_name: Identifier-safe PascalCase name used for the method
        input_type_name: Name of the generated argument type
        output_type_name: Name of the generated result type
    """

    original_name: str
    pascal_name: str
    input_type_name: str
    output_type_name: str


def tool_info(name: str) -> ToolInfo:
    pascal_name = safe_identifier(to_pascal_case(name), fallback="Tool")
    return ToolInfo(
        original_name=name,
        pascal_name=pascal_name,
        input_type_name=f"{pascal_name}Input",
        output_type_name=f"{pascal_name}Output",
    )


def safe_identifier(name: str, *, fallback: str) -> str:
    """Make ``name`` usable as a Python identifier in generated code.

    Valid identifiers are returned unchanged. Otherwise invalid characters
    become underscores, a leading digit is prefixed with ``fallback`` and
    keywords get a trailing underscore.
    """
    if name.isidentifier() and not keyword.iskeyword(name):
        return name
    text = _IDENTIFIER_SANITIZE_RE.sub("_", name)
    if not text.strip("_"):
        text = fallback
    elif text[0].isdigit():
        text = f"{fallback}{text}"
    if keyword.iskeyword(text):
        text = f"{text}_"
    if text != name:
        logger.warning("Identifier %r is not valid Python, using %r", name, text)
    return text


def parameter_name(property_name: str) -> str:
    """Map a schema property name to a method parameter name."""
    name = safe_identifier(property_name, fallback="arg")
    if name in _RESERVED_PARAMETERS:
        name = f"{name}_"
    return name


def module_name(class_name: str) -> str:
    """Convert a PascalCase class name to a snake_case module name.

    Example:
        >>> module_name("TestServerClient")
        'test_server_client'
    """
    return _CAMEL_BOUNDARY_RE.sub("_", class_name).lower()
