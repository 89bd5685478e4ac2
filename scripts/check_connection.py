#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database connection, optionally creating the tables.
Usage: python scripts/check_connection.py [--create-schema]
"""
import argparse
import logging
import sys

from jobly.core.config import get_settings
from jobly.core.logging import setup_logging
from jobly.db import Database

logger = logging.getLogger("check_connection")


def main() -> int:
    parser = argparse.ArgumentParser(description="Check the Jobly database connection")
    parser.add_argument("--create-schema", action="store_true", help="create missing tables")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.log_level)

    database = Database.from_settings(settings)
    logger.info("Connecting to %s", database.engine.url.render_as_string(hide_password=True))

    if not database.ping():
        logger.error("Database: FAILED")
        return 1
    logger.info("Database: CONNECTED")

    if args.create_schema:
        database.create_all()
        logger.info("Tables created")

    database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
