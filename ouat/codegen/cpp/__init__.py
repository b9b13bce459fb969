"""C++17 backend."""

from .emitter import (
    CppEmitter,
    collect_collections,
    collect_functions,
    emit_cpp,
    identifier,
    string_literal,
    variable_identifier,
)

__all__ = [
    "CppEmitter",
    "collect_collections",
    "collect_functions",
    "emit_cpp",
    "identifier",
    "string_literal",
    "variable_identifier",
]
