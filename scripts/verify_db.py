#!/usr/bin/env python3
"""
Verify the MaxJobOffers database schema.

Lists the tables present, reports any expected table that is missing and
prints a row count for each expected table. Exits non-zero when a table is
missing.

Example usage:
    python scripts/verify_db.py
    python scripts/verify_db.py --database-url sqlite:///./local.db
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Dict, List, Tuple

from sqlalchemy import func, inspect, select

# Ensure we can import from the project root
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from core.config_loader import load_config
from database.database import build_engine
from database.models import Base

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

EXPECTED_TABLES = sorted(Base.metadata.tables)


def verify_schema(engine) -> Tuple[List[str], List[str], Dict[str, int]]:
    """Returns (present tables, missing expected tables, row counts)."""
    present = sorted(inspect(engine).get_table_names())
    missing = [name for name in EXPECTED_TABLES if name not in present]

    counts: Dict[str, int] = {}
    with engine.connect() as connection:
        for name in EXPECTED_TABLES:
            if name in missing:
                continue
            table = Base.metadata.tables[name]
            counts[name] = connection.execute(select(func.count()).select_from(table)).scalar_one()
    return present, missing, counts


def main():
    parser = argparse.ArgumentParser(
        description="Verify that all MaxJobOffers tables exist",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--database-url',
        default=None,
        help='Database URL (default: DATABASE_URL or config.yaml)'
    )
    args = parser.parse_args()

    database_url = args.database_url or os.environ.get("DATABASE_URL") or load_config().database.url
    engine = build_engine(database_url)
    try:
        present, missing, counts = verify_schema(engine)
    finally:
        engine.dispose()

    print("=== MaxJobOffers Database Verification ===")
    print(f"\nTables in database ({len(present)}):")
    for name in present:
        print(f"  - {name}")

    print("\nRow counts:")
    for name, count in counts.items():
        print(f"  {name}: {count}")

    if missing:
        print(f"\n❌ Missing tables ({len(missing)}):")
        for name in missing:
            print(f"  - {name}")
        print("\nRun `python scripts/init_db.py` to create them.")
        sys.exit(1)

    print("\n✅ All expected tables exist")


if __name__ == "__main__":
    main()
