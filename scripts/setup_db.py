"""
scripts/setup_db.py — Initialize the assessments schema.

Run once before starting the API for the first time:
    python scripts/setup_db.py [--reset]

Tables are created straight from app/db/models.py metadata. --reset drops
them first, which deletes every stored assessment (development only).
"""

import argparse
import sys
import os

# Ensure the project root is on the path so we can import `app`
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import inspect, text

from app.config import settings
from app.db.models import Assessment, Base
from app.db.session import engine


def setup_db(reset: bool = False) -> None:
    print("🔌 Connecting to database...")
    print(f"   URL: {settings.database_url[:40]}...")

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    print("✅ Connection successful.")

    if reset:
        if settings.environment == "production":
            raise SystemExit("Refusing to drop tables when ENVIRONMENT=production.")
        print("\n🧹 Dropping existing tables...")
        Base.metadata.drop_all(bind=engine)

    print("\n📦 Creating tables if they don't exist...")
    Base.metadata.create_all(bind=engine)

    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(Assessment.__tablename__)]
    print(f"✅ {Assessment.__tablename__}: {', '.join(columns)}")

    print("\n🎉 Database setup complete!")


def main():
    parser = argparse.ArgumentParser(description="AI Readiness — Database Setup")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop and recreate all tables (destroys stored assessments)",
    )
    args = parser.parse_args()
    setup_db(reset=args.reset)


if __name__ == "__main__":
    main()
