#!/usr/bin/env python
"""
Check the stored pricing configuration: schema first, then tier ladders.

Usage:
    python scripts/validate_pricing.py [path/to/pricingConfig.json] [--lang de]
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from trip_quote.config.schema import check_pricing_config
from trip_quote.config.settings import get_settings
from trip_quote.validation.tiers import validate_pricing_tiers


def main():
    parser = argparse.ArgumentParser(description="Validate a pricing configuration")
    parser.add_argument("path", nargs="?", help="pricing config JSON (default: stored config)")
    parser.add_argument("--lang", default="en", help="message language (en/de)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = get_settings()
    path = Path(args.path) if args.path else settings.pricing_config
    if not path.exists():
        print(f"No pricing config at {path}, checking bundled default")
        path = settings.default_pricing

    print(f"Checking {path}...")
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    report = check_pricing_config(payload)
    if not report.ok:
        print(f"\n❌ Schema check failed with {len(report.defects)} defects")
        for defect in report.defects:
            print(f"  ❌ {defect.path}: {defect.message}")
        sys.exit(1)

    print("✅ Schema OK")

    defects = validate_pricing_tiers(report.value, args.lang)
    if not defects:
        print(f"✅ All tier ladders cover 1-{report.value.coverage_max_people} people")
        return

    # Advisory only: the config can still be saved and used
    print("\nTier ladder warnings:")
    for target, messages in defects.items():
        for message in messages:
            print(f"  ⚠️  {target}: {message}")


if __name__ == "__main__":
    main()
