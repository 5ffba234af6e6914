#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from qsignal_app.config.loader import ConfigLoader
from qsignal_app.config.validation import ConfigValidator, ValidationError
from qsignal_app.errors import ConfigurationError


def validate_merged_config(loader: ConfigLoader, overrides=None) -> List[ValidationError]:
    """Validate defaults merged with engine.yaml and optional overrides."""
    config = loader.merge_config(overrides)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating {loader.config_dir / 'engine.yaml'}...")

    all_valid = True

    try:
        errors = validate_merged_config(loader)
    except ConfigurationError as e:
        print(f"❌ Could not read configuration: {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        all_valid = False
    else:
        print("✅ Merged configuration is valid")

    # Unknown sections and keys are only caught when building
    try:
        config = loader.build_config()
        print(f"✅ Engine parameters: {config.engine}")
    except ConfigurationError as e:
        print(f"❌ {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
