# scripts/setup/init_db.py
"""
Initialize database: creates all tables and seeds default accounts + sample slots.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--no-seed]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from slotify.config import settings
from slotify.database import Database
from slotify.services.seed_service import DEFAULT_USERS, seed_defaults


def main():
    parser = argparse.ArgumentParser(description="Create Slotify tables and seed defaults")
    parser.add_argument("--no-seed", action="store_true", help="Only create tables")
    args = parser.parse_args()

    print("🗄️  Slotify DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    db = Database(settings.DATABASE_URL)

    # Test connection
    try:
        db.ping()
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    db.create_tables()
    print("✅ All tables created")

    if not args.no_seed:
        session = db.SessionLocal()
        try:
            created = seed_defaults(session)
        finally:
            session.close()
        print(f"\n🌱 Seeded {created['users']} users and {created['slots']} slots")
        for email, password, role in DEFAULT_USERS:
            print(f"   ✓ {role.value:<9} {email} / {password}")

    db.dispose()
    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn slotify.main:app --host 0.0.0.0 --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
