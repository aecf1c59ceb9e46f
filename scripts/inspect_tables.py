"""
Demo script: load the balance tables via the public API and print them.

Usage:
    python scripts/inspect_tables.py                     # bundled tables
    python scripts/inspect_tables.py mods/hardcore       # resource directory
    python scripts/inspect_tables.py mods/txtdata.yaml   # config file
    python scripts/inspect_tables.py --open mods/wip     # tolerate extra columns
"""

from __future__ import annotations

import logging
import sys

import pandas as pd

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("inspect_tables")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import txtdata

    args = [arg for arg in sys.argv[1:] if arg != "--open"]
    closed_schema = "--open" not in sys.argv
    path = args[0] if args else None

    game_data = txtdata.open(path, closed_schema=closed_schema)

    info = game_data.describe()
    log.info("=" * 70)
    log.info("Resources : %s", info.resources)
    for table, resource in info.tables.items():
        log.info("  %-12s: %s", table, resource)
    log.info("Max level : %d", info.max_level)
    log.info("Classes   : %s", ", ".join(info.classes))
    log.info("=" * 70)

    with pd.option_context("display.max_columns", None, "display.width", 200):
        print(game_data.player_frame().T)
        print()
        print(game_data.experience_frame().to_string(index=False))


if __name__ == "__main__":
    main()
