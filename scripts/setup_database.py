#!/usr/bin/env python3
"""
MedTrack Database Setup Script
==============================

Simple script to set up database tables before starting the server.

Usage:
    python scripts/setup_database.py [--check-only] [--demo-data]
"""

import sys
import logging
import argparse
from sqlalchemy import inspect, text

from app.db.session import engine, SessionLocal
from app.db.base import Base
from app import crud
from app.schemas.user import UserCreate

# Loads app/models/__init__.py so every table is registered with Base.metadata
from app import models  # noqa: F401

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@medtrack.io"
DEMO_PASSWORD = "demo123"


def test_connection():
    """Test database connection"""
    logger.info("Testing database connection...")
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def check_tables_exist():
    """Check if all required tables exist"""
    try:
        existing_tables = inspect(engine).get_table_names()
        required_tables = [table.name for table in Base.metadata.tables.values()]
        missing_tables = [table for table in required_tables if table not in existing_tables]

        logger.info(f"Found {len(existing_tables)} existing tables, {len(required_tables)} required")

        if missing_tables:
            logger.warning(f"Missing tables: {missing_tables}")
            return False
        logger.info("All required tables exist")
        return True
    except Exception as e:
        logger.error(f"Failed to check tables: {e}")
        return False


def create_tables():
    """Create all required tables"""
    try:
        logger.info("Creating database tables...")
        Base.metadata.create_all(bind=engine)
        created_tables = inspect(engine).get_table_names()
        logger.info(f"Tables: {', '.join(created_tables)}")
        return True
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        return False


def create_demo_data():
    """Create a demo user (with profile) if missing"""
    try:
        with SessionLocal() as db:
            if crud.user.get_by_email(db, email=DEMO_EMAIL):
                logger.info("Demo user already exists")
                return True
            crud.user.create(db, obj_in=UserCreate(email=DEMO_EMAIL, password=DEMO_PASSWORD))
            logger.info(f"Created demo user: {DEMO_EMAIL}")
            return True
    except Exception as e:
        logger.error(f"Error creating demo data: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description='MedTrack Database Setup')
    parser.add_argument('--check-only', action='store_true',
                        help='Only check if tables exist, do not create')
    parser.add_argument('--demo-data', action='store_true',
                        help='Also create a demo user')
    args = parser.parse_args()

    if not test_connection():
        logger.error("Cannot proceed without database connection")
        sys.exit(1)

    tables_exist = check_tables_exist()

    if args.check_only:
        sys.exit(0 if tables_exist else 1)

    if not tables_exist and not create_tables():
        sys.exit(1)

    if args.demo_data and not create_demo_data():
        logger.warning("Failed to create demo data (tables created successfully)")

    if check_tables_exist():
        logger.info("Database setup completed successfully")
        logger.info("You can now start the server with:")
        logger.info("  python -m uvicorn app.main:app --host 0.0.0.0 --port 8000")
    else:
        logger.error("Setup verification failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
