#!/usr/bin/env python3
"""
Standalone database initialization script.
Creates the FoodPlanner schema in the configured database (SQLite file by
default, PostgreSQL when DATABASE_URL is set).
"""

import logging
import os
import sys

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from sqlalchemy import inspect

from app.config import settings
from domain.models.database import engine, init_database

logging.basicConfig(level=logging.INFO, format=settings.log_format)
logger = logging.getLogger("foodplanner.init_db")


def main() -> int:
    logger.info("Initializing %s database...", engine.url.get_backend_name())
    try:
        init_database()
    except Exception as e:
        logger.error("Failed to initialize database: %s", e, exc_info=True)
        return 1

    tables = inspect(engine).get_table_names()
    logger.info("%d tables present: %s", len(tables), ", ".join(sorted(tables)))
    return 0


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("FoodPlanner Database Initialization")
    print("=" * 60 + "\n")

    exit_code = main()

    print("\n" + "=" * 60)
    print("SUCCESS! The database is ready to use." if exit_code == 0 else "FAILED! Check the errors above.")
    print("=" * 60 + "\n")

    sys.exit(exit_code)
