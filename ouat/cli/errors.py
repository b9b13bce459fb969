"""
Error handling for the ouat CLI.

This module provides the exception hierarchy for CLI operations together
with the top-level formatter that turns any failure into a short message on
stderr and a non-zero exit.
"""

import sys
import traceback
from typing import Any, Dict, Optional

from ouat.errors import OuatError


# Maximum length for traceback output in CLI
_CLI_TRACE_LIMIT = 4000


class CLIError(Exception):
    """
    Base exception for all CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        hint: Optional suggestion for resolving the error
        context: Additional metadata about the error
    """

    def __init__(
        self,
        message: str,
        *,
        code: str,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.hint = hint
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class CLIConfigError(CLIError):
    """
    Configuration file or workspace setup errors.

    Raised when ``ouat.toml`` is missing (when passed explicitly), is not
    valid TOML, or holds values of the wrong type.
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_CONFIG_ERROR')
        super().__init__(message, **kwargs)


class CLIRuntimeError(CLIError):
    """Errors during command execution."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_RUNTIME_ERROR')
        super().__init__(message, **kwargs)


class CLIBuildError(CLIRuntimeError):
    """
    Build command failures.

    Raised when the generated source cannot be written to its output
    location.
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_BUILD_ERROR')
        super().__init__(message, **kwargs)


class CLIFileNotFoundError(CLIError):
    """The story source file does not exist."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('code', 'CLI_FILE_NOT_FOUND')
        super().__init__(message, **kwargs)


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Format exception for CLI display with context and hints.

    Args:
        exc: Exception to format
        verbose: Include additional context and metadata
        include_traceback: Include full Python traceback

    Returns:
        Formatted error message suitable for CLI output

    Examples:
        >>> print(format_cli_error(CLIFileNotFoundError("Story not found: a.ouat")))
        Error [CLI_FILE_NOT_FOUND]: Story not found: a.ouat
    """
    lines = []

    if isinstance(exc, OuatError):
        lines.append(f"Error: {exc.format()}")
    elif isinstance(exc, CLIError):
        lines.append(f"Error [{exc.code}]: {exc.message}")

        if exc.hint:
            lines.append(f"Hint: {exc.hint}")

        if verbose and exc.context:
            lines.append("\nContext:")
            for key, value in exc.context.items():
                lines.append(f"  {key}: {value}")
    else:
        error_type = exc.__class__.__name__
        lines.append(f"Error: {error_type}: {exc}")

    if include_traceback:
        lines.append("\nTraceback:")
        lines.append(format_traceback_excerpt())

    return "\n".join(lines)


def format_traceback_excerpt() -> str:
    """
    Format current exception traceback with size limit.

    Note:
        Should only be called within an exception handler context.
    """
    trace = traceback.format_exc().strip()
    if len(trace) <= _CLI_TRACE_LIMIT:
        return trace
    return f"{trace[:_CLI_TRACE_LIMIT - 3]}..."


def wrap_exception(
    exc: BaseException,
    *,
    message: str,
    error_class: type = CLIRuntimeError,
    **kwargs
) -> CLIError:
    """
    Wrap a generic exception as a CLI-specific error.

    The original exception is kept in the error context.
    """
    context = kwargs.get('context', {})
    context['original_exception'] = str(exc)
    context['original_type'] = exc.__class__.__name__
    kwargs['context'] = context

    return error_class(message, **kwargs)


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Handle exception at CLI top-level with proper formatting and exit.

    Note:
        This function calls sys.exit() and does not return.
    """
    error_message = format_cli_error(
        exc,
        verbose=verbose,
        include_traceback=verbose
    )
    print(error_message, file=sys.stderr)

    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIRuntimeError",
    "CLIBuildError",
    "CLIFileNotFoundError",
    "format_cli_error",
    "format_traceback_excerpt",
    "wrap_exception",
    "handle_cli_exception",
]
