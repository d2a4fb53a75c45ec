#!/usr/bin/env python
"""
Lint configurator definitions for a site.

Usage:
    python scripts/validate_definitions.py --site vpg
"""
import argparse
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from configurator_tool.config.settings import get_settings
from configurator_tool.data.content_store import ContentStore
from configurator_tool.rules.validate_definitions import validate_site


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Lint configurator definitions")
    parser.add_argument('--site', default=settings.default_site, help="site to check")
    parser.add_argument('--strict', action='store_true', help="fail on warnings too")
    args = parser.parse_args()

    store = ContentStore(settings.data_dir)

    print("=" * 60)
    print(f"CONFIGURATOR DEFINITIONS: {args.site}")
    print("=" * 60)
    print()

    result = validate_site(store, args.site)

    for error in result.errors:
        print(f"  ❌ {error}")
    for warning in result.warnings:
        print(f"  ⚠️  {warning}")

    print()
    if not result.valid or (args.strict and result.warnings):
        print(f"❌ {len(result.errors)} errors, {len(result.warnings)} warnings")
        sys.exit(1)

    print(f"✅ Definitions OK ({len(result.warnings)} warnings)")
    print(f"   Questions: {len(store.get_questions(args.site))}")
    print(f"   Pricing definitions: {len(store.get_pricing(args.site))}")
    print(f"   Catalogue items: {len(store.get_catalogue_items(args.site))}")


if __name__ == "__main__":
    main()
