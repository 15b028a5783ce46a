#!/usr/bin/env python3
"""Refresh the bundled stations.csv from the iRail/stations repository.

The download is parsed with the catalog loader before it replaces the
bundled file, so a malformed upstream file never ends up in the package.

Usage:
    python scripts/update_stations.py [OUTPUT_PATH]
"""

import asyncio
import logging
import sys
from pathlib import Path

from irail_stations.exceptions import CatalogError
from irail_stations.updater import refresh_catalog


def main() -> int:
    logging.basicConfig(level=logging.INFO)
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    try:
        count = asyncio.run(refresh_catalog(output))
    except CatalogError as e:
        print(f"Update failed: {e}", file=sys.stderr)
        return 1

    print(f"Updated catalog with {count} stations")
    return 0


if __name__ == "__main__":
    sys.exit(main())
