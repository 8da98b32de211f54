"""Configuration loader and validation for pipeline settings."""

from pathlib import Path
from typing import Any, Optional
import logging

import yaml
from pydantic import BaseModel, Field, ValidationError

from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class PipelineSettings(BaseModel):
    """How pipeline boards are built and displayed."""

    # Transactions shown per column in the summary board
    summary_limit: int = Field(default=3, ge=1)
    title_max_length: int = Field(default=24, ge=1)
    default_currency: str = "GBP"


class BusinessSettings(BaseModel):
    """Active business used to scope classification."""

    business_id: Optional[str] = None


class ExcelOutputConfig(BaseModel):
    """Configuration for Excel output."""

    board_filename_template: str = "{pipeline}_board_{date}_{time}.xlsx"
    ledger_filename_template: str = "ledger_{account}_{date}_{time}.xlsx"


class SheetConfig(BaseModel):
    """Configuration for a report sheet."""

    enabled: bool = True
    name: str


class SheetsConfig(BaseModel):
    """Configuration for all report sheets."""

    board: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Pipeline"))
    ledger: SheetConfig = Field(default_factory=lambda: SheetConfig(name="Ledger"))


class OutputConfig(BaseModel):
    """Configuration for output."""

    excel: ExcelOutputConfig = Field(default_factory=ExcelOutputConfig)
    sheets: SheetsConfig = Field(default_factory=SheetsConfig)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = None


class PipelineConfig(BaseModel):
    """Main configuration model."""

    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    business: BusinessSettings = Field(default_factory=BusinessSettings)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_file_path: Optional[str] = None


def get_default_config() -> dict[str, Any]:
    """Return the default configuration as a dictionary."""
    return {
        "pipeline": {
            "summary_limit": 3,
            "title_max_length": 24,
            "default_currency": "GBP",
        },
        "business": {
            "business_id": None,
        },
        "output": {
            "excel": {
                "board_filename_template": "{pipeline}_board_{date}_{time}.xlsx",
                "ledger_filename_template": "ledger_{account}_{date}_{time}.xlsx",
            },
            "sheets": {
                "board": {"enabled": True, "name": "Pipeline"},
                "ledger": {"enabled": True, "name": "Ledger"},
            },
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            "file": None,
        },
    }


def load_config(config_path: Optional[Path] = None) -> PipelineConfig:
    """
    Load configuration from a YAML file or use defaults.

    Args:
        config_path: Path to YAML configuration file (optional)

    Returns:
        PipelineConfig object with loaded or default settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    config_dict = get_default_config()

    if config_path and config_path.exists():
        logger.info(f"Loading configuration from: {config_path}")
        try:
            with open(config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")

        config_dict = _deep_merge(config_dict, user_config)
        config_dict["config_file_path"] = str(config_path)
    else:
        logger.info("Using default configuration")

    try:
        return PipelineConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


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

    yaml_content = """# Transaction pipeline configuration
# Generated configuration file - customize as needed

"""
    yaml_content += yaml.dump(config_dict, default_flow_style=False, sort_keys=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        f.write(yaml_content)

    logger.info(f"Generated configuration file: {output_path}")
