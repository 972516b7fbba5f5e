from __future__ import annotations

from ..profile import GenerationProfile

# Names the generated module imports or defines besides the declared types
RESERVED_NAMES = frozenset(
    {
        "inspect",
        "Any",
        "Callable",
        "Literal",
        "Mapping",
        "Never",
        "Optional",
        "Protocol",
        "Required",
        "Sequence",
        "TypedDict",
        "Union",
        "cast",
        "ToolTransport",
        "TransportOptions",
        "TransportFactory",
        "ClientError",
        "ToolCallError",
        "_result_field",
    }
)


def emit_server_protocol(server_name: str, interface_methods: list[list[str]]) -> list[str]:
    """Generate the Protocol listing every tool method of the server."""
    lines = [f"class {server_name}(Protocol):"]
    if not interface_methods:
        lines.append("    ...")
        lines.append("")
        return lines
    for method in interface_methods:
        lines.extend(method)
    return lines


def emit_transport_protocols(profile: GenerationProfile) -> list[str]:
    """Generate the transport abstraction the client is built on.

    ``ToolTransport`` only requires ``call_tool``, so an MCP client session
    can be passed through a factory unchanged.
    """
    arguments_type = profile.optional_type("dict[str, Any]")
    return [
        "TransportOptions = TypedDict(",
        "    'TransportOptions',",
        "    {",
        "        'server_pubkey': str,",
        "        'private_key': Optional[str],",
        "        'relays': list[str],",
        "        'is_stateless': bool,",
        "    },",
        "    total=False,",
        ")",
        "",
        "class ToolTransport(Protocol):",
        f"    async def call_tool(self, name: str, arguments: {arguments_type} = None) -> Any:",
        "        ...",
        "",
        "TransportFactory = Callable[[TransportOptions], ToolTransport]",
        "",
        "def _result_field(result: Any, name: str) -> Any:",
        "    if isinstance(result, Mapping):",
        "        return result.get(name)",
        "    return getattr(result, name, None)",
        "",
    ]


def emit_client_errors() -> list[str]:
    """Generate client error classes.

    ``ToolCallError`` is raised when the server flags a tool result as an
    error; the raw result content is kept on the exception.
    """
    return [
        "class ClientError(Exception):",
        "    pass",
        "",
        "class ToolCallError(ClientError):",
        "    def __init__(self, name: str, content: Any) -> None:",
        "        super().__init__(f'Tool {name!r} returned an error: {content!r}')",
        "        self.name = name",
        "        self.content = content",
        "",
    ]
