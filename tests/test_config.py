"""
Tests for configuration loading.
"""

import pytest
import yaml
from pydantic import ValidationError

from uicov.config import (
    DEFAULT_REPORT_PATH,
    DEFAULT_SELECTORS,
    CoverageConfig,
    CoverageConfigLoader,
    IdentifierMode,
)
from uicov.errors import ConfigurationError


class TestCoverageConfig:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        """Test default values."""
        config = CoverageConfig()

        assert config.report_path == DEFAULT_REPORT_PATH == "target/ui-coverage-report.html"
        assert config.selectors == DEFAULT_SELECTORS
        assert config.text_limit == 30
        assert config.identifier_mode is IdentifierMode.RESOLVED
        assert config.action_timeout_ms == 30_000
        assert config.visibility_timeout_ms == 10_000
        assert config.navigation_timeout_ms == 60_000
        assert config.create_report_dir is True

    def test_report_dir_creation_documented(self):
        """Test that the directory creation switch explains the disabled case."""
        description = CoverageConfig.model_fields["create_report_dir"].description
        assert "missing directory is logged" in description

    def test_frozen(self):
        """Test immutability."""
        config = CoverageConfig()
        with pytest.raises(ValidationError):
            config.text_limit = 10

    def test_rejects_unknown_fields(self):
        """Test that typos are reported."""
        with pytest.raises(ValidationError):
            CoverageConfig(report_pth="x.html")

    def test_rejects_empty_selectors(self):
        """Test selector validation."""
        with pytest.raises(ValidationError):
            CoverageConfig(selectors=())
        with pytest.raises(ValidationError):
            CoverageConfig(selectors=("button", " "))

    def test_rejects_non_positive_timeout(self):
        """Test timeout bounds."""
        with pytest.raises(ValidationError):
            CoverageConfig(action_timeout_ms=0)


class TestCoverageConfigLoader:
    """Test loading from files, dicts and the environment."""

    def test_from_dict(self):
        """Test dictionary loading."""
        config = CoverageConfigLoader.from_dict(
            {"report_path": "out/report.html", "identifier_mode": "legacy", "selectors": ["button", "a"]}
        )
        assert config.report_path == "out/report.html"
        assert config.identifier_mode is IdentifierMode.LEGACY
        assert config.selectors == ("button", "a")

    def test_from_dict_invalid(self):
        """Test that validation errors become ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            CoverageConfigLoader.from_dict({"identifier_mode": "fuzzy"})
        assert exc_info.value.source == "dict"
        assert isinstance(exc_info.value, ValueError)

    def test_from_yaml(self, tmp_path):
        """Test YAML loading."""
        path = tmp_path / "uicov.yaml"
        path.write_text(yaml.dump({"text_limit": 12, "json_report_path": "target/r.json"}))

        config = CoverageConfigLoader.from_yaml(path)

        assert config.text_limit == 12
        assert config.json_report_path == "target/r.json"

    def test_from_empty_yaml(self, tmp_path):
        """Test that an empty file yields defaults."""
        path = tmp_path / "uicov.yaml"
        path.write_text("")
        assert CoverageConfigLoader.from_yaml(path) == CoverageConfig()

    def test_from_yaml_missing(self, tmp_path):
        """Test missing file."""
        with pytest.raises(FileNotFoundError):
            CoverageConfigLoader.from_yaml(tmp_path / "nope.yaml")

    def test_from_yaml_not_mapping(self, tmp_path):
        """Test a YAML list at top level."""
        path = tmp_path / "uicov.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            CoverageConfigLoader.from_yaml(path)

    def test_from_yaml_syntax_error(self, tmp_path):
        """Test malformed YAML."""
        path = tmp_path / "uicov.yaml"
        path.write_text("report_path: [unclosed\n")
        with pytest.raises(ConfigurationError):
            CoverageConfigLoader.from_yaml(path)

    def test_from_env(self):
        """Test environment overrides."""
        config = CoverageConfigLoader.from_env(
            {"UICOV_REPORT_PATH": "env/report.html", "UICOV_IDENTIFIER_MODE": "legacy"}
        )
        assert config.report_path == "env/report.html"
        assert config.identifier_mode is IdentifierMode.LEGACY

    def test_from_env_keeps_base(self):
        """Test that untouched settings come from the base config."""
        base = CoverageConfig(text_limit=7)
        config = CoverageConfigLoader.from_env({"UICOV_JSON_REPORT_PATH": "r.json"}, base=base)
        assert config.text_limit == 7
        assert config.json_report_path == "r.json"

    def test_from_env_without_variables(self):
        """Test that no variables returns the base unchanged."""
        base = CoverageConfig(text_limit=7)
        assert CoverageConfigLoader.from_env({}, base=base) is base

    def test_sample_config_round_trips(self):
        """Test that the sample configuration is itself valid."""
        data = yaml.safe_load(CoverageConfigLoader.generate_sample_config())
        config = CoverageConfigLoader.from_dict(data)
        assert config.selectors == DEFAULT_SELECTORS
