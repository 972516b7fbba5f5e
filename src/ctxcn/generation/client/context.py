from __future__ import annotations

from dataclasses import dataclass, field

from ..compiler import TypeCompiler
from ..profile import GenerationProfile


@dataclass
class ClientOutput:
    """Output of client code generation."""

    code: str
    client_name: str


@dataclass
class ClientContext:
    """Context for client code generation.

    This class holds the state needed while generating one client module:
    the generation profile, the type compiler and the method names emitted
    so far.

    Note:
        method_names is mutated during code generation to detect tools whose
        names collapse to the same method name.
    """

    profile: GenerationProfile
    compiler: TypeCompiler
    method_names: set[str] = field(default_factory=set)
