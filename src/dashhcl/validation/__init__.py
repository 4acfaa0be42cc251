"""
HCL validation for generated dashboards.

Four independent passes (syntax, structure, provider rules, style) produce
findings classified as errors, warnings or suggestions.
"""

from dashhcl.validation.checks import (
    BaseCheck,
    ProviderCheck,
    StructureCheck,
    StyleCheck,
    SyntaxCheck,
)
from dashhcl.validation.findings import Finding, Severity, ValidationReport
from dashhcl.validation.validator import HCLValidator, validate_hcl

__all__ = [
    "BaseCheck",
    "Finding",
    "HCLValidator",
    "ProviderCheck",
    "Severity",
    "StructureCheck",
    "StyleCheck",
    "SyntaxCheck",
    "ValidationReport",
    "validate_hcl",
]
