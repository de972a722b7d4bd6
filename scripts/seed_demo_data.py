#!/usr/bin/env python3
"""Seed demo admins, blocks, apartments, residents and vehicles."""

from __future__ import annotations

import argparse
import sys

from platesnap.app import create_app
from platesnap.registry.seed import get_stats, seed_database


def _parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Seed the registry with demo data.")
    parser.add_argument(
        "--stats-only",
        action="store_true",
        help="Only print collection counts and do not write anything.",
    )
    return parser.parse_args()


def main() -> int:
    args = _parse_args()
    app = create_app()

    if not args.stats_only:
        result = seed_database(app.registry)
        print(result.message)
        if not result.success:
            return 1

    stats = get_stats(app.registry)
    print(
        f"blocks={stats.blocks} apartments={stats.apartments} "
        f"residents={stats.residents} vehicles={stats.vehicles}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
