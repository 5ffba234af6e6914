"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    DefaultConfig,
    EngineParams,
    OptionParams,
    SignalParams,
    SimulationParams,
    VolatilityParams,
    get_default_config,
)
from .validation import ConfigValidator, ValidationError

CONFIG_FILENAME = "engine.yaml"

SECTION_TYPES = {
    "engine": EngineParams,
    "volatility": VolatilityParams,
    "simulation": SimulationParams,
    "options": OptionParams,
    "signal": SignalParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from the engine YAML file, if present."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        if file_config is None:
            return {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"{config_file} must contain a mapping of sections",
                validation_errors=[ValidationError(
                    field=CONFIG_FILENAME,
                    message="Must be a mapping",
                    value=type(file_config).__name__
                )]
            )
        return file_config

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call overrides (highest priority)
        2. engine.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        # Start with global defaults
        config = self._dataclass_to_dict(self.defaults)

        # Apply file overrides
        config = self._deep_merge(config, self.load_file_config())

        # Apply call overrides
        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and freeze the configuration."""
        merged = self.merge_config(overrides)

        errors = self._check_structure(merged)
        errors.extend(ConfigValidator.validate_config(merged))
        if errors:
            raise ConfigurationError("Invalid engine configuration", validation_errors=errors)

        return DefaultConfig(**{
            section: section_type(**merged[section])
            for section, section_type in SECTION_TYPES.items()
        })

    def _check_structure(self, config: dict[str, Any]) -> list[ValidationError]:
        """Reject unknown sections and unknown keys."""
        errors = []
        for section, values in config.items():
            section_type = SECTION_TYPES.get(section)
            if section_type is None:
                errors.append(ValidationError(field=section, message="Unknown section", value=values))
                continue
            if not isinstance(values, dict):
                errors.append(ValidationError(field=section, message="Must be a mapping", value=values))
                continue
            known = {f.name for f in fields(section_type)}
            for key in values:
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown parameter",
                        value=values[key]
                    ))
        return errors

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
