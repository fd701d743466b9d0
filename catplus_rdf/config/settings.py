"""
Configuration management for the cat+ RDF converter.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class NamespacesConfig(BaseModel):
    """RDF namespaces configuration."""

    resource: str = "http://example.org/cat/resource/"


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["turtle", "jsonld"] = "turtle"
    # Replace blank nodes with IRIs under namespaces.resource
    materialize: bool = False
    output_dir: Path | None = None


class ContentConfig(BaseModel):
    """How the input file is referenced from the graph it produced."""

    link: bool = True
    # Prepended to relative input paths; absolute paths become file:// URLs
    prefix: str | None = None
    root_types: list[str] = Field(
        default_factory=lambda: [
            "http://example.org/cat#Campaign",
            "http://purl.allotrope.org/ontologies/result#AFR_0002524",
        ]
    )


class ValidationConfig(BaseModel):
    """Graph validation configuration."""

    enabled: bool = False
    shapes_path: Path | None = None
    fail_on_error: bool = False


class Settings(BaseSettings):
    """Main configuration class."""

    model_config = ConfigDict(
        env_prefix="CATPLUS_",
        env_nested_delimiter="__",
    )

    namespaces: NamespacesConfig = Field(default_factory=NamespacesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Settings object with loaded configuration
    """
    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}
    else:
        config_dict = {}

    # Create settings, which will also load from environment variables
    return Settings(**config_dict)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
