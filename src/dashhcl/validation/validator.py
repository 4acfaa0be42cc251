"""HCL validator: runs the lint passes in order and collects one report."""

from __future__ import annotations

import structlog

from dashhcl.registry.models import ValidationRules, WidgetRegistry
from dashhcl.validation.checks import (
    BaseCheck,
    ProviderCheck,
    StructureCheck,
    StyleCheck,
    SyntaxCheck,
)
from dashhcl.validation.findings import ValidationReport

logger = structlog.get_logger()


class HCLValidator:
    """
    Validate generated dashboard HCL.

    Example:
        validator = HCLValidator.default(registry=source.registry)
        report = validator.validate(hcl_text)
        if not report.is_valid:
            for finding in report.errors:
                print(f"{finding.title}: {finding.description}")
    """

    def __init__(self):
        self.checks: list[BaseCheck] = []

    def add_check(self, check: BaseCheck) -> "HCLValidator":
        """Add a check to the chain."""
        self.checks.append(check)
        return self

    @classmethod
    def default(
        cls,
        rules: ValidationRules | None = None,
        registry: WidgetRegistry | None = None,
        max_line_length: int = 120,
    ) -> "HCLValidator":
        """Create the standard four-pass validator.

        Rules default to the registry's own rules when a registry is given.
        """
        if rules is None and registry is not None:
            rules = registry.rules
        known_kinds = registry.known_definition_kinds() if registry is not None else None

        validator = cls()
        validator.add_check(SyntaxCheck())
        validator.add_check(StructureCheck())
        validator.add_check(ProviderCheck(rules, known_kinds=known_kinds))
        validator.add_check(StyleCheck(max_line_length=max_line_length))
        return validator

    def validate(self, text: str) -> ValidationReport:
        lines = text.split("\n")
        report = ValidationReport()
        for check in self.checks:
            report.findings.extend(check.run(text, lines))

        logger.debug(
            "hcl_validated",
            valid=report.is_valid,
            errors=report.error_count,
            warnings=report.warning_count,
            infos=report.info_count,
        )
        return report


def validate_hcl(text: str, registry: WidgetRegistry | None = None) -> ValidationReport:
    """Validate ``text`` with the default checks."""
    return HCLValidator.default(registry=registry).validate(text)
