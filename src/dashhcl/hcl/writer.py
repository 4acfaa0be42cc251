"""Depth-aware HCL text builder.

Blocks are opened and closed through the writer, so every line is indented
from the current nesting depth when it is written. Consecutive attributes in
the same block are aligned on ``=`` the way ``terraform fmt`` does.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from dashhcl.hcl.formatter import escape_string


class HCLWriter:
    """Accumulates HCL lines.

    Example:
        writer = HCLWriter()
        with writer.block("resource", "datadog_dashboard", "main"):
            writer.attribute("title", '"Main"')
        text = writer.render()
    """

    def __init__(self, indent: int = 2):
        self.indent = indent
        self.depth = 0
        self._lines: list[str] = []
        self._pending: list[tuple[str, str]] = []

    def _prefix(self) -> str:
        return " " * (self.indent * self.depth)

    def _flush(self) -> None:
        if not self._pending:
            return
        width = max(len(name) for name, _ in self._pending)
        prefix = self._prefix()
        for name, value in self._pending:
            self._lines.append(f"{prefix}{name.ljust(width)} = {value}")
        self._pending = []

    def attribute(self, name: str, rendered: str) -> None:
        """Write ``name = rendered``; ``rendered`` must already be an HCL literal."""
        self._pending.append((name, rendered))

    def open_block(self, name: str, *labels: str) -> None:
        self._flush()
        header = " ".join([name, *(escape_string(label) for label in labels)])
        self._lines.append(f"{self._prefix()}{header} {{")
        self.depth += 1

    def close_block(self) -> None:
        self._flush()
        if self.depth == 0:
            raise RuntimeError("close_block() without a matching open_block()")
        self.depth -= 1
        self._lines.append(f"{self._prefix()}}}")

    @contextmanager
    def block(self, name: str, *labels: str) -> Iterator["HCLWriter"]:
        self.open_block(name, *labels)
        yield self
        self.close_block()

    def blank(self) -> None:
        """Separate what follows with an empty line (never directly after ``{``)."""
        self._flush()
        last = self._lines[-1].lstrip() if self._lines else ""
        if not last or (last.endswith("{") and not last.startswith("#")):
            return
        self._lines.append("")

    def comment(self, text: str) -> None:
        self._flush()
        prefix = self._prefix()
        for line in text.splitlines() or [""]:
            self._lines.append(f"{prefix}# {line}".rstrip())

    def render(self) -> str:
        self._flush()
        return "\n".join(self._lines) + "\n"
