#!/usr/bin/env python
"""
Calculate a quote from a QuoteInput JSON file and print the breakdown.

Usage:
    python scripts/calc_quote.py quote.json [--pricing pricing.json] [--lang de] [--csv]
"""
import argparse
import json
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from trip_quote.config.schema import check_pricing_config, check_quote_input
from trip_quote.config.settings import get_settings
from trip_quote.engine import QuoteCalculationError, calculate_quote
from trip_quote.services.export import quote_to_csv, quote_to_frame
from trip_quote.services.pricing_store import PricingConfigStore


def load_json(path: Path):
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def main():
    parser = argparse.ArgumentParser(description="Calculate a trip quote")
    parser.add_argument("quote", nargs="?", help="QuoteInput JSON (default: bundled default quote)")
    parser.add_argument("--pricing", help="PricingConfig JSON (default: stored config)")
    parser.add_argument("--lang", default="en")
    parser.add_argument("--csv", action="store_true", help="print CSV instead of a table")
    args = parser.parse_args()

    settings = get_settings()

    quote_report = check_quote_input(load_json(Path(args.quote) if args.quote else settings.default_quote))
    if not quote_report.ok:
        for defect in quote_report.defects:
            print(f"❌ quote.{defect.path}: {defect.message}")
        sys.exit(1)

    if args.pricing:
        pricing_report = check_pricing_config(load_json(Path(args.pricing)))
        if not pricing_report.ok:
            for defect in pricing_report.defects:
                print(f"❌ pricing.{defect.path}: {defect.message}")
            sys.exit(1)
        pricing = pricing_report.value
    else:
        pricing = PricingConfigStore(settings.pricing_config, settings.default_pricing).load()

    try:
        calculated = calculate_quote(quote_report.value, pricing, args.lang)
    except QuoteCalculationError as e:
        print(f"❌ {e.code}: {e}")
        sys.exit(1)

    if args.csv:
        print(quote_to_csv(calculated), end="")
        return

    print(quote_to_frame(calculated).fillna("").to_string(index=False))
    print(f"\nTotal: {calculated.total:.2f}")


if __name__ == "__main__":
    main()
