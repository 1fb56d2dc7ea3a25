"""Tests for configuration file support."""

import pytest

from codeguardian.config import Config, build_registry, load_config
from codeguardian.models import Severity
from codeguardian.rules import RuleError


class TestConfig:
    def test_default_config(self):
        config = Config()
        assert config.min_severity == Severity.LOW
        assert config.max_code_size == 1_000_000
        assert config.disabled_rules == []

    def test_load_from_file(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("""\
severity_threshold: high
max_code_size: 5000
exclude_patterns:
  - "tests/*"
  - "vendor/*"
disabled_rules:
  - HARDCODED_URL
""")
        config = load_config(config_path=str(cfg_file))
        assert config.severity_threshold == "HIGH"
        assert config.min_severity == Severity.HIGH
        assert config.max_code_size == 5000
        assert "tests/*" in config.exclude_patterns
        assert config.disabled_rules == ["HARDCODED_URL"]

    def test_load_from_project_root(self, tmp_path):
        (tmp_path / ".codeguardian.yml").write_text("severity_threshold: MEDIUM\n")
        config = load_config(project_root=str(tmp_path))
        assert config.severity_threshold == "MEDIUM"

    def test_no_config_file_returns_defaults(self, tmp_path):
        config = load_config(project_root=str(tmp_path))
        assert config.severity_threshold == "LOW"

    def test_empty_file_returns_defaults(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("")
        assert load_config(config_path=str(cfg_file)) == Config()

    def test_explicit_config_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(config_path=str(tmp_path / "missing.yml"))

    def test_invalid_yaml(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text(": : invalid: [\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(config_path=str(cfg_file))

    def test_not_a_mapping(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="must be a YAML mapping"):
            load_config(config_path=str(cfg_file))

    def test_invalid_severity(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("severity_threshold: EXTREME\n")
        with pytest.raises(ValueError, match="severity_threshold"):
            load_config(config_path=str(cfg_file))

    def test_invalid_max_code_size(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("max_code_size: -1\n")
        with pytest.raises(ValueError, match="max_code_size"):
            load_config(config_path=str(cfg_file))

    def test_invalid_type_for_disabled_rules(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("disabled_rules: EVAL_USAGE\n")
        with pytest.raises(ValueError, match="disabled_rules must be a list"):
            load_config(config_path=str(cfg_file))

    @pytest.mark.parametrize(
        "body, message",
        [
            ("disabled_rules:\n  - {id: EVAL_USAGE}\n", "disabled_rules must be a list of rule ids"),
            ("exclude_patterns:\n  - 42\n", "exclude_patterns must be a list of strings"),
            ("custom_rules:\n  - INTERNAL_TOKEN\n", "custom_rules must be a list of mappings"),
        ],
    )
    def test_invalid_list_entries(self, tmp_path, body, message):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text(body)
        with pytest.raises(ValueError, match=message):
            load_config(config_path=str(cfg_file))

    def test_custom_rule_ignore_case_string_rejected(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("""\
custom_rules:
  - id: INTERNAL_TOKEN
    pattern: "INT_[A-Z0-9]{32}"
    category: "Internal Token"
    suggestion: "Move the token to the vault"
    severity: HIGH
    ignore_case: "false"
""")
        with pytest.raises(RuleError, match="ignore_case"):
            build_registry(load_config(config_path=str(cfg_file)))


class TestBuildRegistry:
    def test_defaults(self):
        assert len(build_registry(Config())) == 14

    def test_disabled_and_custom_rules(self, tmp_path):
        cfg_file = tmp_path / ".codeguardian.yml"
        cfg_file.write_text("""\
disabled_rules:
  - HARDCODED_URL
custom_rules:
  - id: INTERNAL_TOKEN
    pattern: "INT_[A-Z0-9]{32}"
    category: "Internal Token"
    suggestion: "Move the token to the vault"
    severity: HIGH
    ignore_case: false
""")
        registry = build_registry(load_config(config_path=str(cfg_file)))
        ids = [rule.id for rule in registry]
        assert "HARDCODED_URL" not in ids
        assert ids[-1] == "INTERNAL_TOKEN"
        assert registry.get("INTERNAL_TOKEN").severity is Severity.HIGH

    def test_broken_custom_rule(self):
        config = Config(custom_rules=[{
            "id": "BAD", "pattern": "([", "category": "Bad", "suggestion": "x", "severity": "LOW",
        }])
        with pytest.raises(RuleError):
            build_registry(config)

    def test_unknown_disabled_rule(self):
        with pytest.raises(RuleError, match="Unknown rule ids"):
            build_registry(Config(disabled_rules=["NOPE"]))
