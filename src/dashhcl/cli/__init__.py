"""
CLI commands for dashhcl.
"""

from dashhcl.cli.convert import convert_command
from dashhcl.cli.validate import validate_command
from dashhcl.cli.widgets import widgets_command

__all__ = [
    "convert_command",
    "validate_command",
    "widgets_command",
]
