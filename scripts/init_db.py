#!/usr/bin/env python3
"""
Create the clinic website tables in the configured database.
It packages a repeatable workflow so development tasks can be executed consistently.
Run it directly and expect it to print a summary and exit non-zero on failure.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError

from clinic_site.common.logging import configure_logging
from clinic_site.common.schema import create_schema, metadata
from clinic_site.common.settings import get_settings

LOGGER = logging.getLogger("init_db")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create clinic website database tables")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL from the environment",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    configure_logging()
    database_url = args.database_url or get_settings().DATABASE_URL

    engine = create_engine(database_url, future=True)
    try:
        create_schema(engine)
    except SQLAlchemyError:
        LOGGER.error("Schema creation failed", exc_info=True)
        return 1
    finally:
        engine.dispose()

    print(json.dumps({"tables": sorted(metadata.tables)}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
