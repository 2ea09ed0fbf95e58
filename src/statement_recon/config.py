"""Configuration loader and validation for reconciliation settings."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PASS_EXACT = "exact"
PASS_FUZZY_DATE = "fuzzy_date"
PASS_DESCRIPTION = "description"

# Passes always run in this order; config can only switch them off
PASS_ORDER = (PASS_EXACT, PASS_FUZZY_DATE, PASS_DESCRIPTION)


class CSVInputConfig(BaseModel):
    """Configuration for CSV transaction exports."""

    encoding: str = "utf-8"
    delimiter: str = ","
    date_format: str = "%Y-%m-%d"
    column_mappings: dict[str, str] = Field(
        default_factory=lambda: {
            "date": "Date",
            "description": "Description",
            "amount": "Amount",
            "type": "Type",
            "reference": "Reference",
        }
    )


class InputConfig(BaseModel):
    """Configuration for input file parsing."""

    csv: CSVInputConfig = Field(default_factory=CSVInputConfig)


class MatchingConfig(BaseModel):
    """
    Matching policy constants.

    Field names are snake_case; the camelCase names used by exported
    settings files (``fuzzyDateToleranceDays`` etc.) are accepted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    exact_date_tolerance_days: int = Field(0, ge=0, alias="exactDateToleranceDays")
    fuzzy_date_tolerance_days: int = Field(3, ge=0, alias="fuzzyDateToleranceDays")
    amount_tolerance: float = Field(0.01, gt=0, alias="amountTolerance")
    confidence_exact: float = Field(1.0, gt=0, le=1, alias="confidenceExact")
    confidence_fuzzy_date: float = Field(0.9, gt=0, le=1, alias="confidenceFuzzyDate")
    confidence_description: float = Field(
        0.7, gt=0, le=1, alias="confidenceDescription"
    )
    min_description_length: int = Field(0, ge=0, alias="minDescriptionLength")
    enabled_passes: list[str] = Field(
        default_factory=lambda: list(PASS_ORDER), alias="enabledPasses"
    )

    @model_validator(mode="after")
    def _check_policy(self) -> "MatchingConfig":
        if self.exact_date_tolerance_days > self.fuzzy_date_tolerance_days:
            raise ValueError(
                "exact_date_tolerance_days cannot exceed fuzzy_date_tolerance_days"
            )
        unknown = [p for p in self.enabled_passes if p not in PASS_ORDER]
        if unknown:
            raise ValueError(f"Unknown matching passes: {', '.join(unknown)}")
        return self


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    summary: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Summary"))
    matched: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Matched Transactions")
    )
    unmatched_bank: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Bank")
    )
    unmatched_ledger: SheetConfig = Field(
        default_factory=lambda: SheetConfig(name="Unmatched Ledger")
    )


class OutputConfig(BaseModel):
    """Configuration for report output."""

    company_name: Optional[str] = None
    currency_code: str = "USD"
    excel_filename_template: str = "{company}_reconciliation_report_{date}.xlsx"
    csv_filename_template: str = "{company}_reconciliation_report_{date}.csv"
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


class ReconConfig(BaseModel):
    """Main configuration model for reconciliation."""

    input: InputConfig = Field(default_factory=InputConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "input": {
            "csv": {
                "encoding": "utf-8",
                "delimiter": ",",
                "date_format": "%Y-%m-%d",
                "column_mappings": {
                    "date": "Date",
                    "description": "Description",
                    "amount": "Amount",
                    "type": "Type",
                    "reference": "Reference",
                },
            },
        },
        "matching": {
            "exactDateToleranceDays": 0,
            "fuzzyDateToleranceDays": 3,
            "amountTolerance": 0.01,
            "confidenceExact": 1.0,
            "confidenceFuzzyDate": 0.9,
            "confidenceDescription": 0.7,
            "minDescriptionLength": 0,
            "enabledPasses": list(PASS_ORDER),
        },
        "output": {
            "company_name": None,
            "currency_code": "USD",
            "excel_filename_template": "{company}_reconciliation_report_{date}.xlsx",
            "csv_filename_template": "{company}_reconciliation_report_{date}.csv",
            "sheets": {
                "summary": {"enabled": True, "name": "Summary"},
                "matched": {"enabled": True, "name": "Matched Transactions"},
                "unmatched_bank": {"enabled": True, "name": "Unmatched Bank"},
                "unmatched_ledger": {"enabled": True, "name": "Unmatched Ledger"},
            },
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file": None,
        },
    }


def load_config(config_path: Optional[Path] = None) -> ReconConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        ReconConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file cannot be read or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in {config_path}: {e}")
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

        matching = user_config.get("matching")
        if isinstance(matching, dict):
            user_config["matching"] = _camelize_matching_keys(matching)

        # Deep merge user config into defaults
        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return ReconConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def _camelize_matching_keys(matching: dict[str, Any]) -> dict[str, Any]:
    """
    Rewrite snake_case matching keys to their camelCase aliases.

    The defaults are keyed by alias, so a user file written with either
    spelling has to land on the same key before merging.
    """
    aliases = {
        name: info.alias
        for name, info in MatchingConfig.model_fields.items()
        if info.alias
    }
    return {aliases.get(key, key): value for key, value in matching.items()}


def _deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary to merge on top

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def generate_default_config(output_path: Path) -> None:
    """
    Generate a default configuration file.

    Args:
        output_path: Path to write the configuration file
    """
    config_dict = get_default_config()

    yaml_content = """# Bank Statement / Ledger Reconciliation Configuration
# Generated configuration file - customize as needed
#
# matching:
#   exactDateToleranceDays  - max day gap for the exact pass (0 = same date)
#   fuzzyDateToleranceDays  - max day gap for the fuzzy date pass
#   amountTolerance         - amounts closer than this are treated as equal
#   minDescriptionLength    - shortest normalized description the
#                             description pass will compare (0 = no minimum)

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
