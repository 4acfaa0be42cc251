"""
Unified error handling for dashhcl.

Only input problems halt a conversion. Registry degradation, unmapped widget
kinds and lint findings are reported as data, never raised.

Exit Codes:
- 0: Success
- 1: Warning (advisory, operation succeeded with warnings)
- 10: Configuration error
- 12: Validation error (malformed or structurally invalid input, failed lint)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    WARNING = 1
    CONFIG_ERROR = 10
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127


class DashHCLError(Exception):
    """Base exception for dashhcl errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    category: str = "error"
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DashHCLError):
    """Raised when explicit user configuration cannot be honoured."""

    exit_code = ExitCode.CONFIG_ERROR
    category = "configuration error"


class InputError(DashHCLError):
    """Base class for problems with the dashboard document itself."""

    exit_code = ExitCode.VALIDATION_ERROR


class MalformedInputError(InputError):
    """Raised when the input is not JSON or not a JSON object."""

    category = "malformed input"


class InvalidDashboardError(InputError):
    """Raised when the document parses but is not a usable dashboard."""

    category = "structurally invalid dashboard"


class InternalProcessingError(DashHCLError):
    """Raised when emission fails for a reason unrelated to the input shape."""

    exit_code = ExitCode.UNKNOWN_ERROR
    category = "internal processing error"
    show_traceback = True


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Usage:
        @main_with_error_handling()
        def convert_command(...) -> int:
            ...
            return 0

    Exit codes:
        - DashHCLError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            from dashhcl.cli.ux import error as print_error

            try:
                return func(*args, **kwargs)
            except DashHCLError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=int(e.exit_code),
                        **e.details,
                    )
                print_error(format_error_message(e))
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130  # Standard exit code for SIGINT
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=int(ExitCode.UNKNOWN_ERROR),
                    )
                print_error(f"Internal processing error: {e}")
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: DashHCLError) -> str:
    """Format an error message for display to users."""
    msg = f"{error.category.capitalize()}: {error.message}"
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
