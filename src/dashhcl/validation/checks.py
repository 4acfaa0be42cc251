"""
Lint passes for generated HCL.

Each check looks at the whole text independently and returns findings; no
check stops another. These are heuristics over lines, not an HCL parser:

- SyntaxCheck: delimiter balance, string literals, assignment targets,
  values that look like they should be quoted
- StructureCheck: resource declarations
- ProviderCheck: Datadog dashboard rules
- StyleCheck: readability and hard-coded values
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator

from dashhcl.registry.models import ValidationRules
from dashhcl.validation.findings import Finding, Severity

RESOURCE_TYPE = "datadog_dashboard"
OVERALL = "Overall structure"

VALID_RESOURCE_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
VALID_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")
VALID_RESOURCE_TYPE = re.compile(r"^[a-z]+_[a-z_]+$")
VALID_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$|^[a-zA-Z_]+$")

RESOURCE_DECLARATION = re.compile(r'resource\s+"([^"]+)"\s+"([^"]+)"')
ASSIGNMENT_TARGET = re.compile(r"^\s*([^\s=#\"<>!]+)\s*=(?!=)")


@dataclass
class CodeLine:
    """A non-blank, non-comment line with its string contents masked out."""

    number: int
    text: str  # original line without a trailing comment
    structure: str  # characters outside string literals
    unterminated: bool  # line ends inside a string literal


def _is_comment(stripped: str) -> bool:
    return stripped.startswith("#") or stripped.startswith("//")


def scan_line(line: str) -> tuple[str, bool, int]:
    """Split ``line`` into code outside strings.

    Returns:
        (characters outside string literals, ends inside a string, index where
        a trailing comment starts or ``len(line)``)
    """
    outside: list[str] = []
    in_string = False
    i = 0
    while i < len(line):
        ch = line[i]
        if in_string:
            if ch == "\\":
                i += 2
                continue
            if ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "#" or line.startswith("//", i):
            return "".join(outside), False, i
        else:
            outside.append(ch)
        i += 1
    return "".join(outside), in_string, len(line)


def code_lines(lines: Iterable[str]) -> Iterator[CodeLine]:
    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or _is_comment(stripped):
            continue
        structure, unterminated, end = scan_line(line)
        yield CodeLine(number, line[:end].rstrip(), structure, unterminated)


def _at_line(number: int) -> str:
    return f"Line {number}"


class BaseCheck(ABC):
    """Base class for lint passes."""

    name: str = "base"
    description: str = "Base check"

    @abstractmethod
    def run(self, text: str, lines: list[str]) -> list[Finding]:
        """Inspect the text and return any findings."""
        pass


class SyntaxCheck(BaseCheck):
    """Delimiter balance, string literals and assignment shape."""

    name = "syntax"
    description = "Check basic HCL syntax"

    # Assignments whose value is obviously fine as written
    SKIP_PATTERNS = [
        re.compile(p)
        for p in (
            r"=\s*\[",
            r"=\s*\{",
            r"=\s*\$\{",
            r"=\s*var\.",
            r"=\s*local\.",
            r"=\s*data\.",
            r"=\s*resource\.",
            r"=\s*module\.",
            r"=\s*true\s*$",
            r"=\s*false\s*$",
            r"=\s*null\s*$",
            r"=\s*-?\d+(\.\d+)?\s*$",
            r'=\s*"(?:[^"\\]|\\.)*"\s*$',
        )
    ]

    UNQUOTED_VALUE = re.compile(r"=\s*([^\"'\s\[\{\$][^,\]\}]*[^,\]\}\s])")

    VALID_UNQUOTED = [
        re.compile(p)
        for p in (
            r"^-?\d+(\.\d+)?$",
            r"^(true|false)$",
            r"^null$",
            r"^[a-zA-Z_][a-zA-Z0-9_]*$",
            r"^\[.*\]$",
            r"^\{.*\}$",
            r"^\$\{.*\}$",
            r"^[a-zA-Z_][a-zA-Z0-9_]*\.[a-zA-Z_][a-zA-Z0-9_]*$",
            r"^var\.[a-zA-Z_][a-zA-Z0-9_]*$",
            r"^local\.[a-zA-Z_][a-zA-Z0-9_]*$",
            r"^data\.[a-zA-Z_][a-zA-Z0-9_]*\.[a-zA-Z_][a-zA-Z0-9_]*$",
            r"^module\.[a-zA-Z_][a-zA-Z0-9_]*\.[a-zA-Z_][a-zA-Z0-9_]*$",
        )
    ]

    DELIMITERS = {
        "{": ("brace", 1),
        "}": ("brace", -1),
        "[": ("bracket", 1),
        "]": ("bracket", -1),
        "(": ("paren", 1),
        ")": ("paren", -1),
    }

    UNMATCHED = (
        ("brace", "Unmatched braces", "braces"),
        ("bracket", "Unmatched brackets", "brackets"),
        ("paren", "Unmatched parentheses", "parentheses"),
    )

    def run(self, text: str, lines: list[str]) -> list[Finding]:
        findings: list[Finding] = []
        counts = {"brace": 0, "bracket": 0, "paren": 0}

        for line in code_lines(lines):
            if line.unterminated:
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title="Unclosed string literal",
                        description="String literal is not properly closed with matching quotes.",
                        location=_at_line(line.number),
                        line=line.number,
                    )
                )

            for ch in line.structure:
                if ch in self.DELIMITERS:
                    kind, step = self.DELIMITERS[ch]
                    counts[kind] += step

            target = ASSIGNMENT_TARGET.match(line.structure)
            if target and not VALID_IDENTIFIER.match(target.group(1)):
                identifier = target.group(1)
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title="Invalid identifier",
                        description=(
                            f'Identifier "{identifier}" contains invalid characters. '
                            "Identifiers must start with a letter or underscore and contain "
                            "only letters, numbers, and underscores."
                        ),
                        location=_at_line(line.number),
                        line=line.number,
                    )
                )

            value = self._unquoted_value(line.text)
            if value:
                findings.append(
                    Finding(
                        severity=Severity.WARNING,
                        title="Potentially unquoted string",
                        description=(
                            f'Value "{value}" might need to be quoted if it\'s a string literal. '
                            "If this is intentional (e.g., a reference or expression), you can "
                            "ignore this warning."
                        ),
                        location=_at_line(line.number),
                        line=line.number,
                    )
                )

        for kind, title, noun in self.UNMATCHED:
            count = counts[kind]
            if count:
                side = "opening" if count > 0 else "closing"
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title=title,
                        description=f"Found {abs(count)} unmatched {side} {noun}.",
                        location=OVERALL,
                        details={f"{kind}_count": count},
                    )
                )
        return findings

    def _unquoted_value(self, code: str) -> str | None:
        if "=" not in code or any(op in code for op in ("==", "!=", "<=", ">=")):
            return None
        if any(p.search(code) for p in self.SKIP_PATTERNS):
            return None
        match = self.UNQUOTED_VALUE.search(code)
        if not match:
            return None
        value = match.group(1).strip()
        if not value or any(p.match(value) for p in self.VALID_UNQUOTED):
            return None
        return value


class StructureCheck(BaseCheck):
    """Resource declaration presence, shape and uniqueness."""

    name = "structure"
    description = "Check Terraform resource declarations"

    def run(self, text: str, lines: list[str]) -> list[Finding]:
        declarations = [
            (line.number, match.group(1), match.group(2))
            for line in code_lines(lines)
            for match in RESOURCE_DECLARATION.finditer(line.text)
        ]

        if not any(rtype == RESOURCE_TYPE for _, rtype, _ in declarations):
            return [
                Finding(
                    severity=Severity.ERROR,
                    title="Missing dashboard resource",
                    description=f"HCL must contain a {RESOURCE_TYPE} resource block.",
                    location=OVERALL,
                )
            ]

        findings: list[Finding] = []
        seen: set[str] = set()
        for number, rtype, rname in declarations:
            location = f"Resource: {rtype}.{rname}"
            if not VALID_RESOURCE_TYPE.match(rtype):
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title="Invalid resource type",
                        description=(
                            f'Resource type "{rtype}" is not valid. '
                            'Must be in format "provider_resource".'
                        ),
                        location=location,
                        line=number,
                    )
                )
            if not VALID_RESOURCE_NAME.match(rname):
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title="Invalid resource name",
                        description=(
                            f'Resource name "{rname}" is not valid. Must start with a letter and '
                            "contain only letters, numbers, hyphens, and underscores."
                        ),
                        location=location,
                        line=number,
                    )
                )
            if rname in seen:
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title="Duplicate resource name",
                        description=(
                            f'Resource name "{rname}" is used multiple times. '
                            "Each resource must have a unique name."
                        ),
                        location=f"Resource name: {rname}",
                        line=number,
                    )
                )
            seen.add(rname)
        return findings


class ProviderCheck(BaseCheck):
    """Datadog provider rules for dashboard resources."""

    name = "provider"
    description = "Check Datadog dashboard fields and values"

    LAYOUT_TYPE = re.compile(r'\blayout_type\s*=\s*"([^"]+)"')
    DEFINITION_BLOCK = re.compile(r"\b(\w+)_definition\s*\{")
    QUERY = re.compile(r'\b(q|query)\s*=\s*"((?:[^"\\]|\\.)*)"')
    COLOR = re.compile(r'\b(background_color|color)\s*=\s*"([^"]+)"')
    MIN_QUERY_LENGTH = 3

    PLACEHOLDERS = (
        ("DASHBOARD_ID_PLACEHOLDER", "Dashboard ID"),
        ("imported_dashboard", "Resource name"),
        ("Imported Dashboard", "Dashboard title"),
    )

    def __init__(
        self,
        rules: ValidationRules | None = None,
        known_kinds: Iterable[str] | None = None,
    ):
        self.rules = rules or ValidationRules()
        known = set(known_kinds) if known_kinds is not None else set()
        self.known_kinds = known | set(self.rules.valid_widget_types)

    def run(self, text: str, lines: list[str]) -> list[Finding]:
        findings: list[Finding] = []
        code = list(code_lines(lines))
        code_text = "\n".join(line.text for line in code)

        for name in self.rules.required_dashboard_fields:
            if not re.search(rf"\b{re.escape(name)}\s*=(?!=)", code_text, re.IGNORECASE):
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title=f"Missing required field: {name}",
                        description=f'Dashboard resource must include the "{name}" field.',
                        location="Dashboard resource",
                    )
                )

        blocks: list[str] = []
        for line in code:
            findings.extend(self._check_line(line, blocks))
            for ch in line.structure:
                if ch == "{":
                    head = re.match(r"\s*([\w-]+)", line.structure)
                    blocks.append(head.group(1) if head else "")
                elif ch == "}" and blocks:
                    blocks.pop()

        for placeholder, label in self.PLACEHOLDERS:
            if placeholder in code_text:
                findings.append(
                    Finding(
                        severity=Severity.INFO,
                        title="Consider using variables",
                        description=(
                            f"{label} appears to be hardcoded. Consider using Terraform "
                            "variables for better reusability."
                        ),
                        location=label,
                    )
                )
        return findings

    def _check_line(self, line: CodeLine, blocks: list[str]) -> list[Finding]:
        findings: list[Finding] = []

        for match in self.LAYOUT_TYPE.finditer(line.text):
            layout = match.group(1)
            if self.rules.valid_layout_types and layout not in self.rules.valid_layout_types:
                allowed = ", ".join(self.rules.valid_layout_types)
                findings.append(
                    Finding(
                        severity=Severity.ERROR,
                        title="Invalid layout_type",
                        description=f'Layout type "{layout}" is not valid. Must be one of: {allowed}.',
                        location="Dashboard resource",
                        line=line.number,
                    )
                )

        for match in self.DEFINITION_BLOCK.finditer(line.structure):
            kind = match.group(1)
            if self.known_kinds and kind not in self.known_kinds:
                findings.append(
                    Finding(
                        severity=Severity.WARNING,
                        title="Unknown widget type",
                        description=(
                            f'Widget type "{kind}" might not be supported by the Datadog provider.'
                        ),
                        location=f"Widget: {kind}_definition",
                        line=line.number,
                    )
                )

        # Log search text such as "*" is legitimately short
        if not (blocks and blocks[-1] == "search"):
            for match in self.QUERY.finditer(line.text):
                query = match.group(2)
                if len(query) < self.MIN_QUERY_LENGTH:
                    findings.append(
                        Finding(
                            severity=Severity.WARNING,
                            title="Suspiciously short metric query",
                            description=(
                                f'Metric query "{query}" seems too short. '
                                "Verify it's a valid Datadog metric query."
                            ),
                            location="Widget request",
                            line=line.number,
                        )
                    )

        for match in self.COLOR.finditer(line.text):
            field_name, value = match.group(1), match.group(2)
            if not VALID_COLOR.match(value):
                findings.append(
                    Finding(
                        severity=Severity.WARNING,
                        title="Invalid color format",
                        description=(
                            f'Color value "{value}" should be a hex color (#RRGGBB) '
                            "or a valid color name."
                        ),
                        location=f"Color field: {field_name}",
                        line=line.number,
                    )
                )
        return findings


class StyleCheck(BaseCheck):
    """Readability suggestions."""

    name = "style"
    description = "Check formatting and hard-coded values"

    HARDCODED = (
        (
            re.compile(r'"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"'),
            "Dashboard ID",
        ),
        (re.compile(r'"(prod|production|staging|dev|development)"', re.IGNORECASE), "Environment"),
        (
            re.compile(
                r'"(us|eu|ap|sa|ca|me|af)-(east|west|north|south|central|northeast|southeast)-\d"',
                re.IGNORECASE,
            ),
            "Region",
        ),
    )

    def __init__(self, max_line_length: int = 120, indent: int = 2, tolerance: int = 2):
        self.max_line_length = max_line_length
        self.indent = indent
        self.tolerance = tolerance

    def run(self, text: str, lines: list[str]) -> list[Finding]:
        findings: list[Finding] = []

        indentation = self._first_indentation_issue(lines)
        if indentation is not None:
            findings.append(
                Finding(
                    severity=Severity.INFO,
                    title="Inconsistent indentation",
                    description=(
                        f"Consider using consistent {self.indent}-space indentation "
                        "for better readability."
                    ),
                    location=_at_line(indentation),
                    line=indentation,
                )
            )

        for number, line in enumerate(lines, start=1):
            if len(line) > self.max_line_length:
                findings.append(
                    Finding(
                        severity=Severity.INFO,
                        title="Long line",
                        description=(
                            "Consider breaking long lines for better readability "
                            f"(recommended: < {self.max_line_length} characters)."
                        ),
                        location=f"Line {number} ({len(line)} characters)",
                        line=number,
                    )
                )

        if not any(_is_comment(line.strip()) or scan_line(line)[2] < len(line) for line in lines):
            findings.append(
                Finding(
                    severity=Severity.INFO,
                    title="No comments found",
                    description="Consider adding comments to explain complex configurations.",
                    location=OVERALL,
                )
            )

        for pattern, label in self.HARDCODED:
            if pattern.search(text):
                findings.append(
                    Finding(
                        severity=Severity.INFO,
                        title="Consider using variables",
                        description=(
                            f"{label} appears to be hardcoded. Consider using Terraform "
                            "variables for better reusability."
                        ),
                        location=label,
                    )
                )
        return findings

    def _first_indentation_issue(self, lines: list[str]) -> int | None:
        depth = 0
        for number, line in enumerate(lines, start=1):
            stripped = line.strip()
            if not stripped or _is_comment(stripped):
                continue
            if stripped[0] in "}]":
                depth = max(0, depth - 1)
            actual = len(line) - len(line.lstrip())
            if abs(actual - depth * self.indent) > self.tolerance:
                return number
            structure = scan_line(line)[0].rstrip()
            if structure.endswith(("{", "[")):
                depth += 1
        return None
