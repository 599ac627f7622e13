"""
Configuration for UI coverage collection.

Settings can come from defaults, a YAML file, a dictionary or environment
variables. Validation is done by pydantic; any failure surfaces as a
ConfigurationError naming its source.
"""

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from uicov.errors import ConfigurationError

DEFAULT_REPORT_PATH = "target/ui-coverage-report.html"

# Order matters: identifiers are deduplicated in first-seen order.
DEFAULT_SELECTORS: tuple[str, ...] = (
    "button",
    "input",
    "select",
    "textarea",
    "a",
    "[role=button]",
    "[onclick]",
    "[data-testid]",
    "[id]",
)


class IdentifierMode(str, Enum):
    """How action wrappers derive the identifier of an exercised element.

    - RESOLVED: read the target element's attributes and apply the same
      priority chain the scanner uses
    - LEGACY: always use ``selector::description``
    """

    RESOLVED = "resolved"
    LEGACY = "legacy"


class CoverageConfig(BaseModel):
    """Settings shared by the scanner, action wrappers and report generator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Reporting
    report_path: str = Field(
        default=DEFAULT_REPORT_PATH,
        description="Where the HTML coverage report is written",
    )
    json_report_path: str | None = Field(
        default=None,
        description="Optional path for a JSON copy of the report",
    )
    create_report_dir: bool = Field(
        default=True,
        description=(
            "Create missing parent directories of report paths; when false a "
            "missing directory is logged as an error and the report is skipped"
        ),
    )
    console_report: bool = True
    html_report: bool = True

    # Discovery
    selectors: tuple[str, ...] = DEFAULT_SELECTORS
    text_limit: int = Field(default=30, ge=1, le=500)
    identifier_mode: IdentifierMode = IdentifierMode.RESOLVED

    # Timeouts (milliseconds)
    action_timeout_ms: float = Field(default=30_000, gt=0)
    visibility_timeout_ms: float = Field(default=10_000, gt=0)
    navigation_timeout_ms: float = Field(default=60_000, gt=0)

    # Pauses after actions (milliseconds)
    settle_after_navigation_ms: float = Field(default=2_000, ge=0)
    settle_after_click_ms: float = Field(default=1_000, ge=0)
    settle_after_fill_ms: float = Field(default=500, ge=0)

    @field_validator("selectors")
    @classmethod
    def selectors_not_blank(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that the selector list is non-empty and has no blanks."""
        if not v:
            raise ValueError("At least one selector is required")
        for selector in v:
            if not selector.strip():
                raise ValueError("Selectors must not be empty")
        return v


class CoverageConfigLoader:
    """Load CoverageConfig from YAML files, dictionaries or the environment."""

    ENV_PREFIX = "UICOV_"

    @classmethod
    def from_yaml(cls, path: str | Path) -> CoverageConfig:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            CoverageConfig loaded from file

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigurationError: If the content fails validation
        """
        path = Path(path)
        if not path.exists():
            msg = f"Configuration file not found: {path}"
            raise FileNotFoundError(msg)

        with path.open(encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(str(path), str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(str(path), "top level must be a mapping")
        return cls._parse_config(data, source=str(path))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CoverageConfig:
        """Create configuration from a dictionary."""
        return cls._parse_config(data, source="dict")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        base: CoverageConfig | None = None,
    ) -> CoverageConfig:
        """
        Overlay ``UICOV_*`` environment variables on a configuration.

        Recognised variables: UICOV_REPORT_PATH, UICOV_JSON_REPORT_PATH,
        UICOV_IDENTIFIER_MODE.
        """
        environ = os.environ if environ is None else environ
        base = base or CoverageConfig()

        overrides: dict[str, Any] = {}
        for key in ("report_path", "json_report_path", "identifier_mode"):
            value = environ.get(f"{cls.ENV_PREFIX}{key.upper()}")
            if value:
                overrides[key] = value

        if not overrides:
            return base
        return cls._parse_config({**base.model_dump(), **overrides}, source="environment")

    @classmethod
    def _parse_config(cls, data: dict[str, Any], source: str) -> CoverageConfig:
        """Validate a configuration dictionary."""
        data = dict(data)
        # YAML gives lists; the model stores an immutable tuple
        if isinstance(data.get("selectors"), list):
            data["selectors"] = tuple(data["selectors"])
        try:
            return CoverageConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(source, str(e)) from e

    @classmethod
    def generate_sample_config(cls) -> str:
        """
        Generate a sample YAML configuration file.

        Returns:
            YAML string for sample configuration
        """
        sample = {
            "report_path": DEFAULT_REPORT_PATH,
            "json_report_path": "target/ui-coverage-report.json",
            "identifier_mode": IdentifierMode.RESOLVED.value,
            "text_limit": 30,
            "selectors": list(DEFAULT_SELECTORS),
            "action_timeout_ms": 30000,
            "visibility_timeout_ms": 10000,
            "navigation_timeout_ms": 60000,
        }
        return yaml.dump(sample, default_flow_style=False, sort_keys=False)
