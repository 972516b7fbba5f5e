from __future__ import annotations


class CtxcnError(Exception):
    """Base class for all errors raised by ctxcn."""


class SpecError(CtxcnError):
    """Raised when a tool list document is malformed."""


class ConfigError(CtxcnError):
    """Raised when the project configuration cannot be read."""


class CompilerError(CtxcnError):
    """Raised when a type compiler returns unusable output."""
