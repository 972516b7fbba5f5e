"""Client code generation module.

This module provides the generate_client() coroutine that turns the tools
exposed by one server into a typed, asynchronous Python client module.

The generated code includes:
- TypedDict declarations for every tool input and output
- A Protocol describing the server, with one method per tool
- A transport Protocol and factory alias for dependency injection
- A client class implementing the server Protocol over the transport
"""

from __future__ import annotations

import asyncio
import logging

from ...ir import PeerContext, ToolIR
from ...naming import safe_identifier, to_pascal_case, tool_info
from ..compiler import TypeCompiler, TypedDictCompiler
from ..models import TypeDeclaration, dedupe_declarations, synthesize_declarations
from ..profile import GenerationProfile
from .context import ClientContext, ClientOutput
from .methods import MethodPlan, plan_method
from .protocols import RESERVED_NAMES
from .templates import assemble_module

__all__ = [
    "generate_client",
    "ClientOutput",
    "ClientContext",
    "server_type_name",
]

logger = logging.getLogger(__name__)


def server_type_name(server_name: str | None) -> str:
    """Derive the name of the server Protocol from the server name.

    Example:
        >>> server_type_name("weather-server")
        'WeatherServer'
    """
    return safe_identifier(to_pascal_case(server_name) or "UnknownServer", fallback="Server")


async def generate_client(
    tools: list[ToolIR],
    server_name: str,
    peer: PeerContext,
    profile: GenerationProfile,
    compiler: TypeCompiler | None = None,
) -> ClientOutput:
    """Generate the client module for the tools of one server.

    Tools are processed in order; the input and output types of a single
    tool are synthesized concurrently. Errors raised by the type compiler
    propagate and no partial output is produced.

    Args:
        tools: Tools exposed by the server, in listing order
        server_name: Name of the server, used for the Protocol and client class
        peer: Identity, credential and relays embedded in the client
        profile: Generation profile controlling Python version features
        compiler: Structural type compiler; defaults to TypedDictCompiler

    Returns:
        ClientOutput containing the generated module source
    """
    ctx = ClientContext(profile=profile, compiler=compiler or TypedDictCompiler(profile))
    declarations: list[TypeDeclaration] = []
    plans: list[MethodPlan] = []
    infos = [tool_info(tool.name) for tool in tools]
    # Nested declarations must not take any tool's input or output type name
    reserved = set(RESERVED_NAMES)
    for info in infos:
        reserved.update((info.input_type_name, info.output_type_name))
    for tool, info in zip(tools, infos):
        logger.debug("Generating types for tool %r as %s", tool.name, info.pascal_name)
        input_declarations, output_declarations = await asyncio.gather(
            synthesize_declarations(tool.input_schema, info.input_type_name, ctx.compiler, frozenset(reserved)),
            synthesize_declarations(tool.output_schema, info.output_type_name, ctx.compiler, frozenset(reserved)),
        )
        declarations.extend(input_declarations)
        declarations.extend(output_declarations)
        reserved.update(declaration.name for declaration in (*input_declarations, *output_declarations))
        plans.append(plan_method(tool, info, ctx))

    unique_declarations = dedupe_declarations(declarations)
    protocol_name = server_type_name(server_name)
    taken = RESERVED_NAMES | {declaration.name for declaration in unique_declarations}
    while protocol_name in taken or f"{protocol_name}Client" in taken:
        protocol_name = f"{protocol_name}Server"
    client_name = f"{protocol_name}Client"

    code = assemble_module(
        server_name=protocol_name,
        client_name=client_name,
        peer=peer,
        profile=profile,
        declarations=unique_declarations,
        interface_methods=[plan.interface_method for plan in plans],
        class_methods=[plan.class_method for plan in plans],
    )
    return ClientOutput(code=code, client_name=client_name)
