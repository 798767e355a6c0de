"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    CapitalParams,
    DefaultConfig,
    MonteCarloParams,
    PatternParams,
    PresentationParams,
    StreakParams,
    get_default_config,
)

_SECTION_TYPES = {
    "monte_carlo": MonteCarloParams,
    "capital": CapitalParams,
    "streaks": StreakParams,
    "patterns": PatternParams,
    "presentation": PresentationParams,
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

    def load_profile_config(self, profile: str) -> dict[str, Any]:
        """Load profile-specific configuration overrides."""
        profiles_file = self.config_dir / "profiles.yaml"

        if not profiles_file.exists():
            raise ConfigurationError(
                f"Profile '{profile}' requested but {profiles_file} does not exist",
                source=str(profiles_file),
            )

        with open(profiles_file) as f:
            try:
                profiles_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Could not parse {profiles_file}: {e}",
                    source=str(profiles_file),
                ) from e

        profiles = profiles_config.get("profiles") or {}
        if profile not in profiles:
            raise ConfigurationError(
                f"Unknown profile '{profile}', expected one of {sorted(profiles)}",
                source=str(profiles_file),
            )

        return profiles[profile] or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Profile overrides from profiles.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        if profile:
            config = self._deep_merge(config, self.load_profile_config(profile))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        profile: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """Merge all tiers and rebuild a typed configuration."""
        return self.build_config(self.merge_config(profile, overrides))

    @staticmethod
    def build_config(merged: dict[str, Any]) -> DefaultConfig:
        """Rebuild a DefaultConfig from a merged dictionary."""
        unknown_sections = set(merged) - set(_SECTION_TYPES)
        if unknown_sections:
            raise ConfigurationError(
                f"Unknown configuration sections: {sorted(unknown_sections)}",
                source="config",
            )

        sections = {}
        for name, section_type in _SECTION_TYPES.items():
            values = merged.get(name) or {}
            known = {f.name for f in fields(section_type)}
            unknown = set(values) - known
            if unknown:
                raise ConfigurationError(
                    f"Unknown keys in '{name}' section: {sorted(unknown)}",
                    source=name,
                )
            sections[name] = section_type(**values)
        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
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
