"""Validation finding and report types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ERROR_PENALTY = 10
WARNING_PENALTY = 5


class Severity(Enum):
    """Finding severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class Finding:
    """A single validation finding."""

    severity: Severity
    title: str
    description: str
    location: str
    line: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity == Severity.WARNING

    @property
    def is_info(self) -> bool:
        return self.severity == Severity.INFO

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "location": self.location,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.details:
            data["details"] = dict(self.details)
        return data


@dataclass
class ValidationReport:
    """Result of validating one HCL text."""

    findings: list[Finding] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(f.is_error for f in self.findings)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.is_error]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.is_warning]

    @property
    def infos(self) -> list[Finding]:
        return [f for f in self.findings if f.is_info]

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.findings if f.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for f in self.findings if f.is_warning)

    @property
    def info_count(self) -> int:
        return sum(1 for f in self.findings if f.is_info)

    @property
    def total(self) -> int:
        return len(self.findings)

    @property
    def suggestion_count(self) -> int:
        return self.warning_count + self.info_count

    @property
    def score(self) -> int:
        return max(0, 100 - ERROR_PENALTY * self.error_count - WARNING_PENALTY * self.warning_count)

    @property
    def summary(self) -> str:
        if self.is_valid and not self.findings:
            return "HCL is valid with no issues found!"
        if self.is_valid:
            return f"HCL is valid with {self.suggestion_count} suggestions for improvement."
        return f"HCL has {self.error_count} error(s) that need to be fixed."

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "summary": self.summary,
            "counts": {
                "errors": self.error_count,
                "warnings": self.warning_count,
                "infos": self.info_count,
                "total": self.total,
            },
            "score": self.score,
            "findings": [f.to_dict() for f in self.findings],
        }
