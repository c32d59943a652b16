# ============================================================================
# ConvertKit - Configuration Management
#
# Purpose: Load and manage CLI configuration from YAML and env vars
# Inputs: YAML files, environment variables
# Outputs: Config model with all settings
# Dependencies: pyyaml, pydantic, pathlib
# Usage: config = Config.from_default() or Config.from_yaml("path.yaml")
#
# Changelog:
#   2026-03-09: Initial configuration system (json, xml, logging sections)
#   2026-03-10: Env override values parsed with the package's own literal parsers
#   2026-03-16: Env values parsed by the target field's type (string fields
#               keep the raw text); logging.level restricted to known levels
# ============================================================================

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError, field_validator

from ConvertKit.errors import ConfigurationError, ParseError
from ConvertKit.logging_utils import DEFAULT_FORMAT, get_logger
from ConvertKit.numeric import to_bool, to_float64, to_int64
from ConvertKit.serialization.targets import unwrap_optional

logger = get_logger(__name__)

ENV_PREFIX = "CONVERTKIT_"

_ENV_PARSERS = {bool: to_bool, int: to_int64, float: to_float64}


class JsonConfig(BaseModel):
    """JSON output configuration."""

    indent: Optional[int] = None  # None = compact


class XmlConfig(BaseModel):
    """XML output configuration."""

    pretty_print: bool = False
    declaration: bool = False
    root_tag: str = "root"  # Root element for documents without a natural tag


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = DEFAULT_FORMAT

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class Config(BaseModel):
    """Root configuration object."""

    json_output: JsonConfig = Field(default_factory=JsonConfig, alias="json")
    xml: XmlConfig = Field(default_factory=XmlConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """
        Load configuration from a YAML file with environment variable overrides.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If YAML is invalid or does not match the schema
        """
        yaml_path = Path(path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(yaml_path, "r") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}", details=str(e)) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        logger.debug(f"Loaded config from {yaml_path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a Config from a plain mapping, applying environment overrides."""
        data = cls._apply_env_overrides(data)
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError("Invalid configuration", details=str(e)) from e

    @classmethod
    def from_default(cls) -> "Config":
        """
        Load configuration from default config file.

        Returns:
            Config instance
        """
        package_root = Path(__file__).parent.parent.parent
        default_config = package_root / "configs" / "default.yaml"

        if default_config.exists():
            return cls.from_yaml(str(default_config))
        # No file shipped alongside the install: defaults plus env overrides
        return cls.from_dict({})

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern:
        CONVERTKIT_<SECTION>_<KEY>=value

        Examples:
            CONVERTKIT_JSON_INDENT=2           → data["json"]["indent"]
            CONVERTKIT_XML_PRETTY_PRINT=true   → data["xml"]["pretty_print"]
            CONVERTKIT_LOGGING_LEVEL=DEBUG     → data["logging"]["level"]

        Args:
            data: Configuration dictionary

        Returns:
            Updated configuration dictionary
        """
        sections = {"json": JsonConfig, "xml": XmlConfig, "logging": LoggingConfig}

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX):
                continue

            remainder = env_key[len(ENV_PREFIX) :].lower()  # e.g. "xml_pretty_print"
            for section, model in sections.items():
                section_prefix = section + "_"
                if not remainder.startswith(section_prefix):
                    continue

                field = remainder[len(section_prefix) :]
                if field not in model.model_fields:
                    logger.warning(f"Ignoring unknown config override {env_key}")
                    break

                section_data = data.setdefault(section, {})
                if not isinstance(section_data, dict):
                    break
                section_data[field] = cls._parse_env_value(env_value, model.model_fields[field].annotation)
                break

        return data

    @staticmethod
    def _parse_env_value(value: str, annotation: Any) -> Any:
        """
        Parse environment variable value according to the field's type.

        Args:
            value: String value from environment
            annotation: Annotation of the field being overridden

        Returns:
            Parsed bool/int/float for fields of those types, else the raw
            string (validation reports values that do not parse)
        """
        parse = _ENV_PARSERS.get(unwrap_optional(annotation))
        if parse is None:
            return value
        try:
            return parse(value)
        except ParseError:
            return value
