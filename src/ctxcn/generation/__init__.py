from .client import generate_client, server_type_name
from .compiler import CompileOptions, TypeCompiler, TypedDictCompiler
from .emitter import TypeEmitter
from .models import TypeDeclaration, dedupe_declarations, split_declarations, synthesize_type
from .profile import GenerationProfile

__all__ = [
    "CompileOptions",
    "GenerationProfile",
    "TypeCompiler",
    "TypeDeclaration",
    "TypeEmitter",
    "TypedDictCompiler",
    "dedupe_declarations",
    "generate_client",
    "server_type_name",
    "split_declarations",
    "synthesize_type",
]
