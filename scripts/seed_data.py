"""Load the bundled country and person seed data into the configured database."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from contact_manager.db import database
from contact_manager.db.seed import COUNTRIES_FILE, PERSONS_FILE, seed_all


logger = logging.getLogger("contact_manager.scripts.seed_data")


# Access SessionLocal dynamically so test fixtures that rebind the
# sessionmaker are respected.
SessionLocal = lambda: database.SessionLocal()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Load country and person seed data")
    parser.add_argument(
        "--countries",
        type=Path,
        default=COUNTRIES_FILE,
        help=f"Countries JSON file (default: {COUNTRIES_FILE.name})",
    )
    parser.add_argument(
        "--persons",
        type=Path,
        default=PERSONS_FILE,
        help=f"Persons JSON file (default: {PERSONS_FILE.name})",
    )
    return parser.parse_args(argv)


def run(countries_path: Path, persons_path: Path) -> int:
    for path in (countries_path, persons_path):
        if not path.is_file():
            print(f"Seed file not found: {path}", file=sys.stderr)
            logger.error("Seed file missing: %s", path)
            return 1

    session = SessionLocal()
    try:
        countries, persons = seed_all(session, countries_path, persons_path)
    finally:
        session.close()
    print(f"Seeded {countries} countries and {persons} persons.")
    return 0


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return run(args.countries, args.persons)


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())
