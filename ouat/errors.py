"""Unified error model for the story translator.

Translation has exactly two fatal error kinds, :class:`LexError` and
:class:`ParseError`.  Both carry the position of the offending character or
token and abort translation on the first defect.  :class:`ToolchainError`
covers the boundary to the external compiler and the produced binary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if self.path and self.line is not None and self.column is not None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}"
        if self.path and self.line is not None:
            return f"{self.path}:{self.line}"
        if self.path:
            return self.path
        return "unknown location"


class OuatError(Exception):
    """Base class for all translator errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        self.path = path
        self.line = line
        self.column = column
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        location_desc = self.location.describe()
        if location_desc != "unknown location":
            meta_parts.append(location_desc)
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)

    def __str__(self) -> str:
        return self.format()


class LexError(OuatError):
    """Raised for an unterminated string or an unrecognized printable character."""

    code = "LEX_ERROR"


class ParseError(OuatError):
    """Raised when the token stream does not match the story grammar."""

    code = "PARSE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        expected: Optional[Sequence[str]] = None,
        found: Optional[str] = None,
        suggestion: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.expected: List[str] = list(expected or [])
        self.found = found
        self.suggestion = suggestion

    def format(self) -> str:
        base = super().format()
        details = []
        if self.expected:
            if len(self.expected) == 1:
                details.append(f"Expected: {self.expected[0]}")
            else:
                details.append(f"Expected one of: {', '.join(self.expected)}")
        if self.found is not None:
            details.append(f"Found: {self.found}")
        if self.suggestion:
            details.append(f"Suggestion: {self.suggestion}")
        if details:
            return base + "\n  " + "\n  ".join(details)
        return base


class ConfigError(OuatError):
    """Raised when `ouat.toml` cannot be read or holds invalid values."""

    code = "CONFIG_ERROR"


class ToolchainError(OuatError):
    """Raised when the native compiler or the produced binary fails."""

    code = "TOOLCHAIN_ERROR"

    def __init__(self, message: str, *, returncode: Optional[int] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.returncode = returncode


__all__ = [
    "ErrorLocation",
    "OuatError",
    "LexError",
    "ParseError",
    "ConfigError",
    "ToolchainError",
]
