"""
Configuration management for source writers.

Handles loading and merging writer settings from JSON files,
providing defaults and validation.
"""

import json
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


VALID_LINE_ENDINGS = {"\n", "\r\n", "\r"}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class WriterConfig:
    """Settings shared by every writer instance."""

    # Output settings
    encoding: str = "utf-8"
    line_ending: str = "\n"

    # Indentation unit; None keeps the dialect's own
    indent: Optional[str] = None

    # Documentation comments
    javadoc: bool = True

    # Regex of qualified names that are always written fully qualified
    fully_qualified_types: Optional[str] = None

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        self._defaults: Dict[str, Any] = asdict(WriterConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> WriterConfig:
        """
        Build a complete configuration.

        Args:
            custom_config: Overrides applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged and validated configuration
        """
        base_config = dict(self._defaults)
        base_config["custom"] = {}

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        config = self._dict_to_config(base_config)

        errors = self.validate_config(config)
        if errors:
            raise ConfigError("; ".join(errors))

        return config

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

        logger.debug("Loaded writer configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> WriterConfig:
        """Convert dictionary to WriterConfig instance."""
        known_fields = set(WriterConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return WriterConfig(**config_args)

    def save_config(self, config: WriterConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: WriterConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation errors
        """
        errors = []

        if config.line_ending not in VALID_LINE_ENDINGS:
            errors.append(f"Invalid line_ending: {config.line_ending!r}")

        if not config.encoding:
            errors.append("encoding must not be empty")
        else:
            try:
                "".encode(config.encoding)
            except LookupError:
                errors.append(f"Unknown encoding: {config.encoding}")

        if config.indent is not None and config.indent.strip():
            errors.append(f"indent must be whitespace: {config.indent!r}")

        if config.fully_qualified_types is not None:
            try:
                re.compile(config.fully_qualified_types)
            except re.error as e:
                errors.append(
                    f"Invalid fully_qualified_types pattern "
                    f"{config.fully_qualified_types!r}: {e}"
                )

        return errors


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
) -> WriterConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
