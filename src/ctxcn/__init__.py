from .config import ProjectConfig, config_exists, load_config, save_config
from .errors import CompilerError, ConfigError, CtxcnError, SpecError
from .generation import (
    CompileOptions,
    GenerationProfile,
    TypeEmitter,
    TypedDictCompiler,
    generate_client,
)
from .generator import ClientSpec, generate_client_file
from .ir import IRDocument, PeerContext, ToolIR, build_ir
from .loader import load_tool_list
from .naming import to_pascal_case
from .schema import resolve_refs, sanitize_schema

__all__ = [
    "CtxcnError",
    "SpecError",
    "ConfigError",
    "CompilerError",
    "CompileOptions",
    "GenerationProfile",
    "TypeEmitter",
    "TypedDictCompiler",
    "generate_client",
    "ClientSpec",
    "generate_client_file",
    "IRDocument",
    "PeerContext",
    "ToolIR",
    "build_ir",
    "load_tool_list",
    "to_pascal_case",
    "resolve_refs",
    "sanitize_schema",
    "ProjectConfig",
    "config_exists",
    "load_config",
    "save_config",
]
