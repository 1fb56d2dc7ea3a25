"""Report generation - rich terminal tables and JSON output."""

import json
from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from codeguardian.engine import summarize
from codeguardian.models import Finding, ScanResult, Severity
from codeguardian.rules import RuleRegistry

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}

SNIPPET_WIDTH = 60


def _shorten(snippet: str) -> str:
    if len(snippet) <= SNIPPET_WIDTH:
        return snippet
    return snippet[: SNIPPET_WIDTH - 3] + "..."


def render_table(results: list[ScanResult], min_severity: Severity = Severity.LOW) -> None:
    console = Console()
    shown: list[Finding] = []

    for r in results:
        findings = r.filtered(min_severity)
        if not findings:
            continue
        shown.extend(findings)

        table = Table(title=escape(r.target), show_lines=True)
        table.add_column("Line", justify="right", width=6)
        table.add_column("Severity", width=10)
        table.add_column("Category", width=30)
        table.add_column("Snippet", width=SNIPPET_WIDTH)
        table.add_column("Suggestion", width=40)

        for f in findings:
            color = SEVERITY_COLORS[f.severity]
            table.add_row(
                str(f.line),
                f"[{color}]{f.severity.name}[/]",
                f.category,
                escape(_shorten(f.snippet)),
                f.suggestion,
            )

        console.print()
        console.print(table)

    if not shown:
        console.print("\n[bold green]No findings above the severity threshold.[/]")
    _print_summary(console, results, shown)


def _print_summary(console: Console, results: list[ScanResult], findings: list[Finding]) -> None:
    counts = {s: 0 for s in Severity}
    for f in findings:
        counts[f.severity] += 1

    parts = []
    for sev in sorted(Severity, reverse=True):
        if counts[sev] > 0:
            color = SEVERITY_COLORS[sev]
            parts.append(f"[{color}]{sev.name}: {counts[sev]}[/]")

    total_duration = sum(r.duration_seconds for r in results)
    console.print(f"\n[bold]Summary:[/] {len(findings)} finding(s) | {' | '.join(parts) if parts else 'Clean'}")
    console.print(f"Files scanned: {len(results)} | Duration: {total_duration:.2f}s\n")


def render_json(results: list[ScanResult], min_severity: Severity = Severity.LOW) -> str:
    output = {
        "$schema": "codeguardian-v1",
        "generated_at": datetime.now().isoformat(),
        "results": [],
        "summary": {"total": 0},
    }

    total_by_severity = {s.name: 0 for s in sorted(Severity, reverse=True)}

    for r in results:
        filtered = r.filtered(min_severity)
        result_dict = r.to_dict()
        result_dict["findings"] = [f.to_dict() for f in filtered]
        result_dict["summary"] = summarize(filtered).to_dict()
        output["results"].append(result_dict)
        for f in filtered:
            total_by_severity[f.severity.name] += 1

    output["summary"] = {
        "total": sum(total_by_severity.values()),
        "by_severity": total_by_severity,
    }

    return json.dumps(output, indent=2)


def render_rules(registry: RuleRegistry) -> None:
    """Print the rule catalog grouped the way the registry orders it."""
    console = Console()
    table = Table(title="CodeGuardian Rules", show_lines=False)
    table.add_column("Group", width=18)
    table.add_column("Category", width=32)
    table.add_column("Severity", width=10)
    table.add_column("CWE", width=10)

    for rule in registry:
        color = SEVERITY_COLORS[rule.severity]
        table.add_row(rule.group, rule.category, f"[{color}]{rule.severity.name}[/]", rule.cwe_id or "")

    console.print(table)
    console.print(f"\n{len(registry)} rule(s)\n")
