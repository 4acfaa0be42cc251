"""
Dashboard JSON to Terraform HCL conversion.

Ties the input checks, the registry source and the emitters together. Input
problems raise before any text is produced; everything after that degrades
instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from dashhcl.config.loader import RegistryMode, RegistrySource, load_registry
from dashhcl.core.errors import DashHCLError, InternalProcessingError
from dashhcl.document.parser import load_dashboard, parse_dashboard_json
from dashhcl.hcl.dashboard import generate_hcl, resource_name
from dashhcl.logging import bind_context

logger = structlog.get_logger()


@dataclass
class ConversionResult:
    """Output of one conversion."""

    hcl: str
    resource_name: str
    mode: RegistryMode
    warnings: list[str] = field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        return self.mode is RegistryMode.FALLBACK


class Converter:
    """
    Converts dashboard documents using one registry source.

    Example:
        converter = Converter(load_registry())
        result = converter.convert_text(path.read_text())
        print(result.hcl)
    """

    def __init__(self, source: RegistrySource | None = None, preserve_case: bool = False):
        self.source = source or load_registry()
        self.preserve_case = preserve_case

    @property
    def registry(self):
        return self.source.registry

    def convert(self, document: Any) -> ConversionResult:
        """Convert a decoded dashboard document.

        Raises:
            MalformedInputError: If the document is not an object
            InvalidDashboardError: If it has neither title nor id
            InternalProcessingError: If emission fails unexpectedly
        """
        dashboard, warnings = load_dashboard(document)
        name = resource_name(dashboard.title, preserve_case=self.preserve_case)
        log = bind_context(resource=name, registry_mode=self.source.mode.value)

        warnings = list(warnings)
        if self.source.is_degraded:
            warnings.append(
                f"Using built-in widget mappings ({self.source.reason or 'configuration unavailable'})"
            )

        try:
            hcl = generate_hcl(dashboard, self.registry, name=name)
        except DashHCLError:
            raise
        except Exception as e:
            log.error("conversion_failed", error_type=type(e).__name__, message=str(e))
            raise InternalProcessingError(
                f"Failed to generate HCL: {e}", details={"resource": name}
            ) from e

        log.info("dashboard_converted", widgets=len(dashboard.widgets), warnings=len(warnings))
        return ConversionResult(
            hcl=hcl,
            resource_name=name,
            mode=self.source.mode,
            warnings=warnings,
        )

    def convert_text(self, text: str) -> ConversionResult:
        """Parse JSON text and convert it."""
        return self.convert(parse_dashboard_json(text))


def convert_text(text: str, source: RegistrySource | None = None) -> ConversionResult:
    """Convenience wrapper around ``Converter(source).convert_text(text)``."""
    return Converter(source).convert_text(text)
