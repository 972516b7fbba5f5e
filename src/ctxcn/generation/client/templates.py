from __future__ import annotations

from collections.abc import Sequence

from ...ir import PeerContext
from ..models import TypeDeclaration
from ..profile import GenerationProfile
from .protocols import emit_client_errors, emit_server_protocol, emit_transport_protocols

DEFAULT_RELAYS = ["wss://relay.contextvm.org"]


def emit_header(profile: GenerationProfile) -> list[str]:
    """Generate the header and imports of the client module."""
    lines = ["# ruff: noqa: F401"]
    if profile.use_future_annotations:
        lines.append("from __future__ import annotations")
    lines.append("")
    lines.append("import inspect")
    lines.append("from collections.abc import Callable, Mapping, Sequence")
    lines.append("from typing import Any, Literal, Optional, Protocol, Union, cast")
    if profile.use_typing_extensions:
        lines.append("from typing_extensions import Never, Required, TypedDict")
    else:
        lines.append("from typing import Never, Required, TypedDict")
    lines.append("")
    return lines


def emit_client_init(peer: PeerContext, profile: GenerationProfile) -> list[str]:
    """Generate the class constants and constructor of the client.

    Relays and private key passed at construction time take precedence over
    the embedded defaults. Extra keyword options are handed to the transport
    factory and override the built-in ones.
    """
    relays = tuple(peer.endpoints if peer.endpoints is not None else DEFAULT_RELAYS)
    optional_key = profile.optional_type("str")
    optional_relays = profile.optional_type("Sequence[str]")
    return [
        f"    SERVER_PUBKEY = {peer.peer_identity!r}",
        f"    DEFAULT_RELAYS = {relays!r}",
        f"    DEFAULT_PRIVATE_KEY = {peer.credential!r}",
        "",
        "    def __init__(",
        "        self,",
        "        transport_factory: TransportFactory,",
        "        *,",
        f"        private_key: {optional_key} = None,",
        f"        relays: {optional_relays} = None,",
        "        **options: Any,",
        "    ) -> None:",
        "        transport_options: TransportOptions = {",
        "            'server_pubkey': self.SERVER_PUBKEY,",
        "            'private_key': private_key if private_key is not None else self.DEFAULT_PRIVATE_KEY,",
        "            'relays': list(relays if relays is not None else self.DEFAULT_RELAYS),",
        "            'is_stateless': True,",
        "        }",
        "        transport_options.update(options)  # type: ignore[typeddict-item]",
        "        self._transport = transport_factory(transport_options)",
        "",
        "    async def disconnect(self) -> None:",
        "        close = getattr(self._transport, 'close', None)",
        "        if close is None:",
        "            return",
        "        result = close()",
        "        if inspect.isawaitable(result):",
        "            await result",
        "",
    ]


def emit_call_method() -> list[str]:
    """Generate the private dispatch method shared by all tool methods."""
    return [
        "    async def _call(self, name: str, arguments: Mapping[str, Any]) -> Any:",
        "        result = await self._transport.call_tool(name, dict(arguments))",
        "        if _result_field(result, 'isError'):",
        "            raise ToolCallError(name, _result_field(result, 'content'))",
        "        return _result_field(result, 'structuredContent')",
        "",
    ]


def assemble_module(
    *,
    server_name: str,
    client_name: str,
    peer: PeerContext,
    profile: GenerationProfile,
    declarations: Sequence[TypeDeclaration],
    interface_methods: list[list[str]],
    class_methods: list[list[str]],
) -> str:
    """Assemble the complete client module.

    The module contains, in order: imports, the type declarations, the
    server protocol, the transport abstraction, the client errors and the
    client class with one method per tool.
    """
    lines = emit_header(profile)
    for declaration in declarations:
        lines.append(declaration.definition)
        lines.append("")
    lines.extend(emit_server_protocol(server_name, interface_methods))
    lines.extend(emit_transport_protocols(profile))
    lines.extend(emit_client_errors())
    lines.append(f"class {client_name}({server_name}):")
    lines.extend(emit_client_init(peer, profile))
    lines.extend(emit_call_method())
    for method in class_methods:
        lines.extend(method)
    return "\n".join(lines).rstrip() + "\n"
