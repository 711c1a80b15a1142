"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults for generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Union

DEFAULT_CONFIG_FILE = "pg-typegen.json"

DEFAULT_RESERVED_WORDS = frozenset({"string", "number", "package", "public"})


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Options recognized by the generators."""

    # Naming settings
    camel_case: bool = False
    singularize: bool = False
    prefix_with_schema_names: bool = False
    reserved_words: FrozenSet[str] = DEFAULT_RESERVED_WORDS
    reserved_suffix: str = "_"

    # Type handling
    json_types_file: Optional[str] = None
    dates_as_strings: bool = False

    # Output settings
    write_header: bool = True

    # Table selection
    tables: List[str] = field(default_factory=list)
    excluded_tables: List[str] = field(default_factory=list)

    # Unrecognized settings from config files
    custom: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.reserved_words = frozenset(self.reserved_words)


# Config-file keys are camelCase
CONFIG_FILE_KEYS = {
    "camelCase": "camel_case",
    "singularize": "singularize",
    "prefixWithSchemaNames": "prefix_with_schema_names",
    "reservedWords": "reserved_words",
    "reservedSuffix": "reserved_suffix",
    "jsonTypesFile": "json_types_file",
    "datesAsStrings": "dates_as_strings",
    "writeHeader": "write_header",
    "table": "tables",
    "excludedTable": "excluded_tables",
}


class ConfigManager:
    """Manages configuration loading and merging."""

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Overrides, keyed by GeneratorConfig field name
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration (defaults < file < overrides)
        """
        merged: Dict[str, Any] = {}

        if config_file:
            merged.update(self._normalize_keys(self._load_config_file(config_file)))

        if custom_config:
            merged.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_config(merged)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _normalize_keys(self, file_config: Dict[str, Any]) -> Dict[str, Any]:
        """Map config-file keys onto GeneratorConfig field names."""
        return {CONFIG_FILE_KEYS.get(key, key): value for key, value in file_config.items()}

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)} - {"custom"}

        config_args = {}
        custom_args = dict(config_dict.get("custom") or {})

        for key, value in config_dict.items():
            if key == "custom":
                continue
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        for key in ("tables", "excluded_tables"):
            if isinstance(config_args.get(key), str):
                config_args[key] = [config_args[key]]

        return GeneratorConfig(custom=custom_args, **config_args)


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Overrides keyed by GeneratorConfig field name
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)
