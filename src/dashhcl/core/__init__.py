"""Core modules for dashhcl - centralized definitions and utilities."""

from dashhcl.core.errors import (
    ConfigurationError,
    DashHCLError,
    ExitCode,
    InputError,
    InternalProcessingError,
    InvalidDashboardError,
    MalformedInputError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "DashHCLError",
    "ConfigurationError",
    "InputError",
    "MalformedInputError",
    "InvalidDashboardError",
    "InternalProcessingError",
    "main_with_error_handling",
    "format_error_message",
]
