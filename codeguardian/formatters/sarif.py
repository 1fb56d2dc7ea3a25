"""SARIF v2.1.0 output formatter for CodeGuardian findings."""

import json
import re
from datetime import datetime, timezone

from codeguardian import __version__
from codeguardian.models import Finding, ScanResult, Severity

SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/main/sarif-2.1/schema/sarif-schema-2.1.0.json"

SEVERITY_TO_SARIF_LEVEL = {
    Severity.CRITICAL: "error",
    Severity.HIGH: "error",
    Severity.MEDIUM: "warning",
    Severity.LOW: "note",
}

CWE_TAXONOMY = {
    "name": "CWE",
    "organization": "MITRE",
    "shortDescription": {"text": "Common Weakness Enumeration"},
    "informationUri": "https://cwe.mitre.org/",
}


def _rule_id(finding: Finding) -> str:
    """Use the registry id of the rule that produced the finding.

    Findings built without a rule fall back to a slug of their category.
    """
    if finding.rule_id:
        return finding.rule_id
    slug = re.sub(r"[^a-z0-9]+", "-", finding.category.lower()).strip("-")
    return f"category/{slug or 'unnamed'}"


def _build_rule(finding: Finding) -> dict:
    rule = {
        "id": _rule_id(finding),
        "shortDescription": {"text": finding.category},
        "fullDescription": {"text": finding.message},
        "defaultConfiguration": {"level": SEVERITY_TO_SARIF_LEVEL[finding.severity]},
        "help": {
            "text": finding.suggestion,
            "markdown": f"**Remediation:** {finding.suggestion}",
        },
        "properties": {"tags": ["security"], "severity": finding.severity.name},
    }
    if finding.cwe_id:
        rule["properties"]["tags"].append(finding.cwe_id)
        rule["relationships"] = [
            {
                "target": {"id": finding.cwe_id, "toolComponent": {"name": "CWE"}},
                "kinds": ["superset"],
            }
        ]
    return rule


def render_sarif(results: list[ScanResult], min_severity: Severity = Severity.LOW) -> str:
    """Render scan results as SARIF v2.1.0 JSON."""
    rules_map: dict[str, dict] = {}
    sarif_results = []
    cwe_taxa = []
    seen_cwes: set[str] = set()

    for r in results:
        for f in r.filtered(min_severity):
            rule_id = _rule_id(f)
            if rule_id not in rules_map:
                rules_map[rule_id] = _build_rule(f)

            sarif_result = {
                "ruleId": rule_id,
                "level": SEVERITY_TO_SARIF_LEVEL[f.severity],
                "message": {"text": f.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": r.target},
                            "region": {"startLine": f.line, "snippet": {"text": f.snippet}},
                        }
                    }
                ],
            }
            if f.cwe_id:
                sarif_result["taxa"] = [{"id": f.cwe_id, "toolComponent": {"name": "CWE"}}]
                if f.cwe_id not in seen_cwes:
                    seen_cwes.add(f.cwe_id)
                    cwe_taxa.append({"id": f.cwe_id, "shortDescription": {"text": f.cwe_id}})
            sarif_results.append(sarif_result)

    sarif = {
        "$schema": SARIF_SCHEMA,
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "CodeGuardian",
                        "version": __version__,
                        "rules": list(rules_map.values()),
                    }
                },
                "results": sarif_results,
                "taxonomies": [{**CWE_TAXONOMY, "taxa": cwe_taxa}] if cwe_taxa else [],
                "invocations": [
                    {
                        "executionSuccessful": True,
                        "endTimeUtc": datetime.now(timezone.utc).isoformat(),
                    }
                ],
            }
        ],
    }

    return json.dumps(sarif, indent=2)
