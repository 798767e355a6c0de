#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from journal_engine.config.loader import ConfigLoader
from journal_engine.config.validation import ConfigValidator, ValidationError
from journal_engine.errors import ConfigurationError


def validate_profile_config(loader: ConfigLoader, profile: str) -> List[ValidationError]:
    """Validate configuration for a specific profile."""
    config = loader.merge_config(profile)
    errors = ConfigValidator.validate_config(config)
    if not errors:
        # Unknown keys only surface when the typed config is rebuilt
        loader.build_config(config)
    return errors


def list_profiles(loader: ConfigLoader) -> List[str]:
    """Names of every profile in profiles.yaml."""
    profiles_file = loader.config_dir / "profiles.yaml"
    if not profiles_file.exists():
        return []
    with open(profiles_file) as f:
        return sorted((yaml.safe_load(f) or {}).get("profiles", {}))


def main():
    """Main validation function."""
    print("🔍 Validating journal engine configuration...")

    loader = ConfigLoader.create(sys.argv[1] if len(sys.argv) > 1 else None)

    # None validates the bare defaults
    profiles = [None] + list_profiles(loader)

    all_valid = True

    for profile in profiles:
        name = profile or "defaults"
        print(f"\n📊 Validating {name}...")

        try:
            errors = validate_profile_config(loader, profile)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {name} configuration is valid")

        except ConfigurationError as e:
            print(f"❌ Error validating {name}: {e}")
            all_valid = False

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
