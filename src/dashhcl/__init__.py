"""
dashhcl - Datadog dashboard JSON to Terraform HCL.

Example:
    from dashhcl import Converter, load_registry, validate_hcl

    result = Converter(load_registry()).convert_text(json_text)
    report = validate_hcl(result.hcl)
"""

__version__ = "0.1.0"

from dashhcl.config.loader import RegistryMode, RegistrySource, load_registry  # noqa: E402
from dashhcl.converter import ConversionResult, Converter, convert_text  # noqa: E402
from dashhcl.hcl import generate_hcl, resource_name  # noqa: E402
from dashhcl.validation import HCLValidator, ValidationReport, validate_hcl  # noqa: E402

__all__ = [
    "__version__",
    "ConversionResult",
    "Converter",
    "HCLValidator",
    "RegistryMode",
    "RegistrySource",
    "ValidationReport",
    "convert_text",
    "generate_hcl",
    "load_registry",
    "resource_name",
    "validate_hcl",
]
