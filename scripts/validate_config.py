#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ratechart_app.config.loader import ConfigLoader
from ratechart_app.config.validation import ConfigValidator, ValidationError
from ratechart_app.data.models import Channel


def validate_channel_config(loader: ConfigLoader, channel: str) -> List[ValidationError]:
    """Validate merged configuration for a specific channel."""
    config = loader.merge_config(channel)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("🔍 Validating RateChart configuration...")

    loader = ConfigLoader.create()
    all_valid = True

    for channel in Channel:
        print(f"\n📊 Validating {channel.value}...")

        try:
            errors = validate_channel_config(loader, channel.value)

            if errors:
                print(f"❌ Found {len(errors)} validation errors:")
                for error in errors:
                    print(f"  • {error.field}: {error.message} (value: {error.value})")
                all_valid = False
            else:
                print(f"✅ {channel.value} configuration is valid")

        except Exception as e:
            print(f"❌ Error validating {channel.value}: {e}")
            all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
