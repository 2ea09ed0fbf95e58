"""Tests for configuration loading and validation."""

import pytest
import yaml
from pydantic import ValidationError

from statement_recon.config import (
    MatchingConfig,
    ReconConfig,
    generate_default_config,
    get_default_config,
    load_config,
)
from statement_recon.utils.exceptions import ConfigurationError


def test_defaults_match_policy_constants():
    matching = ReconConfig().matching

    assert matching.exact_date_tolerance_days == 0
    assert matching.fuzzy_date_tolerance_days == 3
    assert matching.amount_tolerance == 0.01
    assert matching.confidence_exact == 1.0
    assert matching.confidence_fuzzy_date == 0.9
    assert matching.confidence_description == 0.7
    assert matching.min_description_length == 0
    assert matching.enabled_passes == ["exact", "fuzzy_date", "description"]


def test_default_dict_builds_same_config():
    assert ReconConfig(**get_default_config()) == ReconConfig()


def test_load_config_without_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "missing.yaml")

    assert config.config_file_path is None
    assert config.matching == MatchingConfig()


def test_load_config_accepts_camel_case_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump({"matching": {"fuzzyDateToleranceDays": 5, "confidenceDescription": 0.6}})
    )

    config = load_config(path)

    assert config.matching.fuzzy_date_tolerance_days == 5
    assert config.matching.confidence_description == 0.6
    assert config.matching.amount_tolerance == 0.01
    assert config.config_file_path == str(path)


def test_load_config_accepts_snake_case_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"matching": {"amount_tolerance": 0.05}}))

    config = load_config(path)

    assert config.matching.amount_tolerance == 0.05


def test_load_config_merges_nested_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.dump(
            {
                "input": {"csv": {"date_format": "%m/%d/%Y"}},
                "output": {"sheets": {"summary": {"enabled": False}}},
            }
        )
    )

    config = load_config(path)

    assert config.input.csv.date_format == "%m/%d/%Y"
    assert config.input.csv.column_mappings["amount"] == "Amount"
    assert config.output.sheets.summary.enabled is False
    assert config.output.sheets.summary.name == "Summary"


@pytest.mark.parametrize(
    "matching",
    [
        {"confidenceExact": 1.5},
        {"confidenceFuzzyDate": 0},
        {"amountTolerance": 0},
        {"fuzzyDateToleranceDays": -1},
        {"exactDateToleranceDays": 4},
        {"enabledPasses": ["exact", "closest_amount"]},
    ],
)
def test_invalid_matching_values_rejected(tmp_path, matching):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump({"matching": matching}))

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_invalid_yaml_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("matching: [unclosed")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        load_config(path)


def test_assignment_is_validated():
    matching = MatchingConfig()

    matching.fuzzy_date_tolerance_days = 7
    assert matching.fuzzy_date_tolerance_days == 7

    with pytest.raises(ValidationError):
        matching.confidence_exact = 2.0


def test_generate_default_config_round_trips(tmp_path):
    path = tmp_path / "nested" / "config.yaml"

    generate_default_config(path)

    text = path.read_text()
    assert text.startswith("# Bank Statement / Ledger Reconciliation Configuration")
    assert yaml.safe_load(text) == get_default_config()
    assert load_config(path).matching == MatchingConfig()
