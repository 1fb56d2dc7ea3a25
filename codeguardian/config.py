"""Configuration file support for CodeGuardian (.codeguardian.yml)."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from codeguardian.models import Severity
from codeguardian.rules import RuleRegistry, default_registry, rule_from_definition

DEFAULT_CONFIG_NAME = ".codeguardian.yml"
DEFAULT_MAX_CODE_SIZE = 1_000_000

LIST_KEYS = (
    ("exclude_patterns", str, "strings"),
    ("disabled_rules", str, "rule ids"),
    ("custom_rules", dict, "mappings"),
)


@dataclass
class Config:
    """CodeGuardian configuration loaded from .codeguardian.yml."""

    severity_threshold: str = "LOW"
    max_code_size: int = DEFAULT_MAX_CODE_SIZE
    exclude_patterns: list[str] = field(default_factory=list)
    disabled_rules: list[str] = field(default_factory=list)
    custom_rules: list[dict] = field(default_factory=list)

    @property
    def min_severity(self) -> Severity:
        return Severity.parse(self.severity_threshold)


def load_config(config_path: str | None = None, project_root: str | None = None) -> Config:
    """Load configuration from a YAML file.

    Priority: explicit --config path > .codeguardian.yml in project root > defaults.
    """
    path = None

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    elif project_root:
        candidate = Path(project_root) / DEFAULT_CONFIG_NAME
        if candidate.exists():
            path = candidate

    if path is None:
        return Config()

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must be a YAML mapping, got {type(raw).__name__}")

    return _parse_config(raw)


def _parse_config(raw: dict) -> Config:
    """Parse and validate raw YAML dict into a Config object."""
    config = Config()

    if "severity_threshold" in raw:
        sev = str(raw["severity_threshold"]).upper()
        valid = [s.name for s in Severity]
        if sev not in valid:
            raise ValueError(f"severity_threshold must be one of {valid}, got '{raw['severity_threshold']}'")
        config.severity_threshold = sev

    if "max_code_size" in raw:
        val = raw["max_code_size"]
        if not isinstance(val, int) or isinstance(val, bool) or val <= 0:
            raise ValueError("max_code_size must be a positive integer")
        config.max_code_size = val

    for key, item_type, item_label in LIST_KEYS:
        if key in raw:
            val = raw[key]
            if not isinstance(val, list):
                raise ValueError(f"{key} must be a list")
            if not all(isinstance(item, item_type) for item in val):
                raise ValueError(f"{key} must be a list of {item_label}")
            setattr(config, key, val)

    return config


def build_registry(config: Config) -> RuleRegistry:
    """Apply disabled and custom rules from ``config`` to the built-in set."""
    registry = default_registry()
    if config.disabled_rules:
        registry = registry.without(config.disabled_rules)
    if config.custom_rules:
        registry = registry.extended(rule_from_definition(d) for d in config.custom_rules)
    return registry
