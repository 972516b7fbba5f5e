"""Intermediate Representation (IR) for discovered tool lists.

This module defines the IR data structures that represent the tools exposed
by a remote server in a simplified, code-generation-friendly format. The IR
is built from a loaded tool list document and consumed by the generation
modules to produce a typed Python client.

Key classes:
- IRDocument: Root container for the server description and its tools
- ServerIR: Identity of the remote server (name and version)
- ToolIR: A single callable tool with its input and output schemas
- PeerContext: Per-batch connection details embedded in the generated client
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import cast

from .tools import ServerInfoObject, ToolListDocument, ToolObject


@dataclass(frozen=True)
class ToolIR:
    """Intermediate representation of a remotely callable tool.

    Attributes:
        name: The wire-level tool name, used verbatim when calling the tool
        description: Human-readable description of the tool, if any
        title: Optional display title of the tool
        input_schema: Raw JSON Schema of the tool arguments
        output_schema: Raw JSON Schema of the structured tool result
    """

    name: str
    description: str | None
    title: str | None
    input_schema: object
    output_schema: object


@dataclass(frozen=True)
class ServerIR:
    """Intermediate representation of the remote server identity.

    Attributes:
        name: The server name reported during the handshake
        version: The server version reported during the handshake
    """

    name: str | None
    version: str | None


@dataclass(frozen=True)
class PeerContext:
    """Connection details embedded into a generated client.

    Attributes:
        peer_identity: Public key of the remote server
        credential: Private key used as the client's default signer
        endpoints: Relay URLs; the generator falls back to its defaults when None
    """

    peer_identity: str
    credential: str | None = None
    endpoints: list[str] | None = None


@dataclass(frozen=True)
class IRDocument:
    """Root container for the intermediate representation.

    This is the top-level structure produced by build_ir() and consumed
    by the code generation modules.

    Attributes:
        server: Identity of the server exposing the tools
        tools: All tools in the order the server listed them
    """

    server: ServerIR
    tools: list[ToolIR] = field(default_factory=list)


def build_ir(document: ToolListDocument) -> IRDocument:
    """Build an intermediate representation from a tool list document.

    Args:
        document: A loaded tool list document (see ``load_tool_list``)

    Returns:
        An IRDocument containing the server identity and its tools
    """
    server_info = cast(ServerInfoObject, document.get("serverInfo", {}))
    server = ServerIR(
        name=_optional_str(server_info.get("name")),
        version=_optional_str(server_info.get("version")),
    )
    tools = [_build_tool(tool) for tool in document.get("tools", [])]
    return IRDocument(server=server, tools=tools)


def _build_tool(tool: ToolObject) -> ToolIR:
    """Build a ToolIR from a tool object."""
    return ToolIR(
        name=tool.get("name", ""),
        description=_optional_str(tool.get("description")),
        title=_optional_str(tool.get("title")),
        input_schema=tool.get("inputSchema"),
        output_schema=tool.get("outputSchema"),
    )


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None
