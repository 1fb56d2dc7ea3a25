"""Line-based scan engine."""

import fnmatch
import logging
import os
import re
import time
from pathlib import Path
from typing import Iterable, Sequence

from codeguardian.models import Finding, ScanResult, Severity, Summary
from codeguardian.rules import RuleRegistry, default_registry

logger = logging.getLogger(__name__)

LINE_BREAK = re.compile(r"\r?\n")

BINARY_EXTENSIONS = {
    ".pyc", ".pyo", ".so", ".dll", ".exe", ".bin", ".zip", ".tar", ".gz",
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".ico", ".pdf", ".woff", ".woff2",
    ".class", ".jar",
}

SKIP_DIRS = {".git", "__pycache__", "node_modules", ".venv", "venv", ".tox", ".eggs"}


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` or ``\\r\\n``, keeping empty lines so numbering holds."""
    return LINE_BREAK.split(text)


def _ranking_key(finding: Finding) -> tuple[int, int]:
    return finding.line, -finding.severity


def summarize(findings: Sequence[Finding]) -> Summary:
    """Count findings in total and per severity."""
    counts = {severity: 0 for severity in Severity}
    for finding in findings:
        counts[finding.severity] += 1
    return Summary(
        total_issues=len(findings),
        critical_issues=counts[Severity.CRITICAL],
        high_issues=counts[Severity.HIGH],
        medium_issues=counts[Severity.MEDIUM],
        low_issues=counts[Severity.LOW],
    )


class ScanEngine:
    """Apply every rule of a registry to every line of a text."""

    def __init__(self, registry: RuleRegistry | None = None):
        self.registry = registry if registry is not None else default_registry()

    def scan(self, text: str) -> list[Finding]:
        lines = split_lines(text)
        rules = self.registry.all_rules()
        logger.debug("Scanning %d line(s) against %d rule(s)", len(lines), len(rules))

        findings: list[Finding] = []
        for line_num, line in enumerate(lines, start=1):
            for rule in rules:
                if not rule.matches(line):
                    continue
                findings.append(
                    Finding(
                        line=line_num,
                        category=rule.category,
                        message=rule.message,
                        suggestion=rule.suggestion,
                        severity=rule.severity,
                        snippet=line.strip(),
                        cwe_id=rule.cwe_id,
                        rule_id=rule.id,
                    )
                )

        # sorted() is stable, so ties keep registry order
        return sorted(findings, key=_ranking_key)

    def summarize(self, findings: Sequence[Finding]) -> Summary:
        return summarize(findings)

    def scan_text(
        self,
        text: str,
        target: str = "<text>",
        language: str | None = None,
        filename: str | None = None,
    ) -> ScanResult:
        """Scan ``text`` and bundle the findings with their summary."""
        start = time.monotonic()
        findings = self.scan(text)
        summary = self.summarize(findings)
        return ScanResult(
            target=target,
            findings=findings,
            summary=summary,
            language=language,
            filename=filename,
            duration_seconds=round(time.monotonic() - start, 3),
        )

    def scan_path(
        self,
        target: str,
        exclude_patterns: Iterable[str] = (),
        max_bytes: int | None = None,
    ) -> list[ScanResult]:
        """Scan a file, or every text file below a directory.

        Each file is scanned on its own; results come back in path order.
        Files larger than ``max_bytes`` are skipped.
        """
        root = Path(target)
        patterns = list(exclude_patterns)

        if root.is_file():
            files = [root]
        elif root.is_dir():
            files = sorted(self._walk_files(root, patterns))
        else:
            return []

        results = []
        for filepath in files:
            try:
                if max_bytes is not None and filepath.stat().st_size > max_bytes:
                    logger.warning("Skipping %s: larger than %d bytes", filepath, max_bytes)
                    continue
                content = filepath.read_text(errors="ignore")
            except OSError as exc:
                logger.warning("Skipping unreadable file %s: %s", filepath, exc)
                continue
            results.append(self.scan_text(content, target=str(filepath), filename=filepath.name))
        return results

    def _walk_files(self, root: Path, patterns: list[str]):
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = [d for d in dirnames if d not in SKIP_DIRS]
            for fname in filenames:
                filepath = Path(dirpath) / fname
                if filepath.suffix.lower() in BINARY_EXTENSIONS:
                    continue
                if _is_excluded(filepath.relative_to(root).as_posix(), patterns):
                    continue
                yield filepath


def _is_excluded(rel_path: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(rel_path, p) for p in patterns)
