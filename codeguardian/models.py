"""Data models for rules, findings and scan summaries."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum


class Severity(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Look up a severity by name, ignoring case and surrounding space."""
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            valid = ", ".join(s.name for s in cls)
            raise ValueError(f"Unknown severity '{value}', expected one of: {valid}") from None


@dataclass(frozen=True)
class Rule:
    id: str
    pattern: re.Pattern
    category: str
    message: str
    suggestion: str
    severity: Severity
    group: str = "custom"
    cwe_id: str | None = None

    def matches(self, line: str) -> bool:
        return self.pattern.search(line) is not None


@dataclass
class Finding:
    line: int
    category: str
    message: str
    suggestion: str
    severity: Severity
    snippet: str
    cwe_id: str | None = None
    rule_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "line": self.line,
            "category": self.category,
            "message": self.message,
            "suggestion": self.suggestion,
            "severity": self.severity.name,
            "snippet": self.snippet,
            "cwe_id": self.cwe_id,
        }


@dataclass
class Summary:
    total_issues: int = 0
    critical_issues: int = 0
    high_issues: int = 0
    medium_issues: int = 0
    low_issues: int = 0
    scan_time: datetime = field(default_factory=datetime.now)

    def count(self, severity: Severity) -> int:
        return getattr(self, f"{severity.name.lower()}_issues")

    def to_dict(self) -> dict:
        return {
            "total_issues": self.total_issues,
            "critical_issues": self.critical_issues,
            "high_issues": self.high_issues,
            "medium_issues": self.medium_issues,
            "low_issues": self.low_issues,
            "scan_time": self.scan_time.isoformat(),
        }


@dataclass
class ScanResult:
    target: str
    findings: list[Finding] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    language: str | None = None
    filename: str | None = None
    duration_seconds: float = 0.0

    def filtered(self, min_severity: Severity) -> list[Finding]:
        return [f for f in self.findings if f.severity >= min_severity]

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "language": self.language,
            "filename": self.filename,
            "findings": [f.to_dict() for f in self.findings],
            "summary": self.summary.to_dict(),
            "duration_seconds": self.duration_seconds,
        }
