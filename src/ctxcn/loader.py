from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from os import PathLike
from pathlib import Path
from typing import cast
from urllib.parse import urlparse

from .errors import SpecError
from .tools import ToolListDocument

logger = logging.getLogger(__name__)

ToolListSource = str | PathLike[str] | Mapping[str, object] | Sequence[Mapping[str, object]]


def load_tool_list(source: ToolListSource) -> ToolListDocument:
    """Load and validate a tool list document from various sources.

    The document is either the result of an MCP ``tools/list`` request,
    optionally carrying the ``serverInfo`` reported during initialization,
    or a bare list of tool objects.

    Args:
        source: Can be a file path (str or PathLike), URL, a dict-like object
            or a list of tool objects

    Returns:
        The validated tool list document

    Raises:
        SpecError: If the source cannot be read or does not describe a list of
            named tools
        FileNotFoundError: If a local source file does not exist
    """
    data = _read_source(source)
    if isinstance(data, list):
        data = {"tools": data}
    if not isinstance(data, dict):
        raise SpecError("Tool list document must be an object or a list of tools")
    tools = data.get("tools")
    if not isinstance(tools, list):
        raise SpecError("Missing or invalid 'tools' field in document")
    for index, tool in enumerate(tools):
        if not isinstance(tool, dict):
            raise SpecError(f"Tool #{index} must be an object")
        name = tool.get("name")
        if not isinstance(name, str) or not name:
            raise SpecError(f"Tool #{index} is missing a 'name'")
    server_info = data.get("serverInfo")
    if server_info is not None and not isinstance(server_info, dict):
        raise SpecError("'serverInfo' must be an object")
    logger.debug("Loaded %d tools", len(tools))
    return cast(ToolListDocument, data)


def _is_url(source: str) -> bool:
    """Check if the source string is a URL."""
    parsed = urlparse(source)
    return parsed.scheme in {"http", "https"}


def _fetch_url(url: str) -> str:
    """Fetch content from a URL.

    Args:
        url: The URL to fetch

    Returns:
        The response text content

    Raises:
        SpecError: If the URL cannot be fetched
    """
    from urllib.request import Request, urlopen

    try:
        request = Request(url, headers={"User-Agent": "ctxcn"})
        with urlopen(request, timeout=30) as response:  # noqa: S310
            return response.read().decode("utf-8")
    except Exception as exc:
        raise SpecError(f"Failed to fetch URL: {url}") from exc


def _get_url_extension(url: str) -> str:
    """Extract file extension from URL path."""
    parsed = urlparse(url)
    path = parsed.path
    if "." in path:
        return "." + path.rsplit(".", 1)[-1].lower()
    return ""


def _read_source(source: ToolListSource) -> object:
    """Read a tool list document from various source types."""
    if isinstance(source, Mapping):
        return dict(source)
    if isinstance(source, Sequence) and not isinstance(source, str):
        return [dict(tool) if isinstance(tool, Mapping) else tool for tool in source]

    source_str = str(source) if isinstance(source, PathLike) else source

    if _is_url(source_str):
        text = _fetch_url(source_str)
        if _get_url_extension(source_str) in {".yaml", ".yml"}:
            return _load_yaml(text)
        return _load_json_or_yaml(text)

    path = Path(source_str)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise SpecError(f"Failed to read tool list {path}: {exc}") from exc
    if path.suffix in {".yaml", ".yml"}:
        return _load_yaml(text)
    return _load_json_or_yaml(text)


def _load_json_or_yaml(text: str) -> object:
    """Try to load as JSON, fall back to YAML if that fails."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return _load_yaml(text)


def _load_yaml(text: str) -> object:
    """Load YAML text with PyYAML."""
    import yaml

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SpecError("Tool list document is neither valid JSON nor YAML") from exc
