"""Code generation backends."""

from .cpp import CppEmitter, emit_cpp

__all__ = ["CppEmitter", "emit_cpp"]
