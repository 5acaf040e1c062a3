# Centralized configuration management for the sheet schema registry.


import os
from dataclasses import dataclass
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class SheetConfig:
    # Names of the sheets (tables) the registry knows about.
    sheet_name: str = os.getenv("SHEET_NAME", "MetaLog")
    daily_sheet: str = os.getenv("DAILY_SHEET", "Daily Report")
    behavior_sheet: str = os.getenv("BEHAVIOR_SHEET", "Behavior Scores")

    def all_names(self) -> List[str]:
        return [self.sheet_name, self.daily_sheet, self.behavior_sheet]


@dataclass
class SchemaVersionConfig:
    # Initially active schema version per sheet.
    meta_log: str = os.getenv("SCHEMA_VERSION_META_LOG", "v1")
    daily_report: str = os.getenv("SCHEMA_VERSION_DAILY_REPORT", "v1")
    behavior_scores: str = os.getenv("SCHEMA_VERSION_BEHAVIOR_SCORES", "v1")


@dataclass
class AppConfig:
    # Main application configuration container.
    sheets: SheetConfig
    schema_versions: SchemaVersionConfig

    # General settings
    environment: str = os.getenv("ENVIRONMENT", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_path: Optional[str] = os.getenv("LOG_PATH")
    app_name: str = os.getenv("APP_NAME", "sheet-schema-registry")

    # Announce schema changes through the logging event sink
    log_schema_events: bool = os.getenv("LOG_SCHEMA_EVENTS", "true").lower() == "true"

    @classmethod
    def load(cls) -> "AppConfig":
        # Load configuration from environment variables.
        return cls(
            sheets=SheetConfig(),
            schema_versions=SchemaVersionConfig(),
        )

    def validate(self) -> List[str]:
        # Validate configuration and return list of errors.
        errors = []

        names = self.sheets.all_names()
        for name in names:
            if not name or not name.strip():
                errors.append("Sheet names must not be empty")
                break

        if len(set(names)) != len(names):
            errors.append(f"Sheet names must be unique: {names}")

        for label, version in (
            ("meta_log", self.schema_versions.meta_log),
            ("daily_report", self.schema_versions.daily_report),
            ("behavior_scores", self.schema_versions.behavior_scores),
        ):
            if not version:
                errors.append(f"Missing schema version for {label}")

        if self.log_level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            errors.append(f"Invalid log level: {self.log_level}")

        return errors

    def to_dict(self) -> dict:
        # Convert config to dictionary (for logging).
        return {
            "environment": self.environment,
            "log_level": self.log_level,
            "app_name": self.app_name,
            "sheets": {
                "sheet_name": self.sheets.sheet_name,
                "daily_sheet": self.sheets.daily_sheet,
                "behavior_sheet": self.sheets.behavior_sheet,
            },
            "schema_versions": {
                "meta_log": self.schema_versions.meta_log,
                "daily_report": self.schema_versions.daily_report,
                "behavior_scores": self.schema_versions.behavior_scores,
            },
        }


# Global configuration instance - load once, use everywhere
config = AppConfig.load()


def get_config() -> AppConfig:
    #Get the global configuration instance.
    return config


def reload_config() -> AppConfig:
    #Reload configuration from environment (useful for testing).
    global config
    load_dotenv(override=True)
    config = AppConfig.load()
    return config
