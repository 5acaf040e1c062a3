"""
Unit tests for configuration management.
Run with: pytest tests/test_config.py -v
"""
import os
import sys
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config.settings import (
    AppConfig,
    SheetConfig,
    SchemaVersionConfig,
    get_config,
    reload_config,
)


class TestSheetConfig:
    #Tests for sheet name configuration.

    def test_default_values(self):
        #Should have sheet names from env or defaults.
        config = SheetConfig()
        assert config.sheet_name
        assert config.daily_sheet
        assert config.behavior_sheet

    def test_all_names_order(self):
        config = SheetConfig(sheet_name="a", daily_sheet="b", behavior_sheet="c")
        assert config.all_names() == ["a", "b", "c"]


class TestSchemaVersionConfig:
    #Tests for initial schema versions.

    def test_versions_set(self):
        config = SchemaVersionConfig()
        assert config.meta_log
        assert config.daily_report
        assert config.behavior_scores


class TestAppConfig:
    #Tests for main application configuration.

    def test_load_creates_all_subconfigs(self):
        #Loading should create all sub-configurations.
        config = AppConfig.load()
        assert isinstance(config.sheets, SheetConfig)
        assert isinstance(config.schema_versions, SchemaVersionConfig)

    def test_validate_returns_empty_for_valid_config(self):
        #Validation should pass for explicit valid values.
        config = AppConfig(
            sheets=SheetConfig(sheet_name="a", daily_sheet="b", behavior_sheet="c"),
            schema_versions=SchemaVersionConfig(meta_log="v1", daily_report="v1", behavior_scores="v1"),
            log_level="INFO",
        )
        assert config.validate() == []

    def test_validate_detects_duplicate_sheet_names(self):
        config = AppConfig(
            sheets=SheetConfig(sheet_name="a", daily_sheet="a", behavior_sheet="c"),
            schema_versions=SchemaVersionConfig(),
            log_level="INFO",
        )
        errors = config.validate()
        assert any("unique" in e for e in errors)

    def test_validate_detects_empty_sheet_name(self):
        config = AppConfig(
            sheets=SheetConfig(sheet_name=" ", daily_sheet="b", behavior_sheet="c"),
            schema_versions=SchemaVersionConfig(),
            log_level="INFO",
        )
        assert "Sheet names must not be empty" in config.validate()

    def test_validate_detects_missing_version(self):
        config = AppConfig(
            sheets=SheetConfig(sheet_name="a", daily_sheet="b", behavior_sheet="c"),
            schema_versions=SchemaVersionConfig(meta_log=""),
            log_level="INFO",
        )
        assert "Missing schema version for meta_log" in config.validate()

    def test_validate_detects_bad_log_level(self):
        config = AppConfig(
            sheets=SheetConfig(sheet_name="a", daily_sheet="b", behavior_sheet="c"),
            schema_versions=SchemaVersionConfig(),
            log_level="LOUD",
        )
        assert "Invalid log level: LOUD" in config.validate()

    def test_to_dict(self):
        config = AppConfig.load()
        config_dict = config.to_dict()
        assert config_dict["sheets"]["sheet_name"] == config.sheets.sheet_name
        assert config_dict["schema_versions"]["meta_log"] == config.schema_versions.meta_log


class TestGlobalConfig:
    # Tests for global configuration access.

    def test_get_config_returns_same_instance(self):
        assert get_config() is get_config()

    def test_reload_config_replaces_instance(self):
        before = get_config()
        after = reload_config()
        assert isinstance(after, AppConfig)
        assert get_config() is after
        assert after is not before


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
