#!/usr/bin/env python3
"""
CLI script to run a release check manually.

Usage:
    python run_check.py                  # Check all sources once
    python run_check.py --list           # List configured sources
    python run_check.py --json           # Print the aggregate result as JSON
"""

import argparse
import asyncio
import json
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.aggregator import reduce_results
from core.sentinel import Sentinel
from utils.logger import setup_logging


def main():
    parser = argparse.ArgumentParser(
        description='Sonnet 5 Watch - one-shot release check'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List all configured sources'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the aggregate result as JSON'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args()

    setup_logging(level='DEBUG' if args.verbose else 'WARNING')

    sentinel = Sentinel()

    if args.list:
        print("\nConfigured Sources (priority order):")
        print("-" * 50)
        for handler in sentinel.handlers:
            print(f"  {handler.source_id}")
            print(f"    Name:   {handler.display_name}")
            print(f"    Method: {handler.get_method_name()}")
            print()
        return 0

    pairs = asyncio.run(sentinel.check_each_source())
    result = reduce_results([r for _, r in pairs])

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.found else 1

    print("\nResults by source:")
    print("-" * 70)
    for handler, source_result in pairs:
        print(f"  {source_result!s:40} {handler.display_name}")

    print(f"\nOverall: {result}")
    return 0 if result.found else 1


if __name__ == '__main__':
    sys.exit(main())
