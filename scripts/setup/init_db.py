# scripts/setup/init_db.py
"""
Initialize database: creates all tables, optionally seeds staff accounts.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--seed]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import create_tables, engine, SessionLocal, Base
from app.config import settings
from app.models.user import UserRole
from app.schemas.user import UserRegister
from app.services.auth_service import find_registration_conflict, register_user
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

SEED_USERS = [
    {"name": "Demo HOD", "email": "hod.cse@college.edu", "password": "hod12345",
     "role": UserRole.HOD, "employeeId": "HOD001", "department": "CSE"},
    {"name": "Demo Security", "password": "sec12345",
     "role": UserRole.SECURITY, "employeeId": "SEC001"},
]


def seed_users():
    db = SessionLocal()
    try:
        for data in SEED_USERS:
            body = UserRegister(**data)
            conflict = find_registration_conflict(db, body)
            if conflict:
                print(f"   – {body.email}: {conflict}, skipped")
                continue
            user = register_user(db, body)
            print(f"   ✓ {user.role} {user.email} (password: {data['password']})")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create gate pass tables")
    parser.add_argument("--seed", action="store_true", help="Also create a demo HOD and security account")
    args = parser.parse_args()

    print("🗄️  Gate Pass DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except SQLAlchemyError as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running, or point DATABASE_URL at SQLite:")
        print("  DATABASE_URL=sqlite:///./gatepass.db")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(Base.metadata.tables)
    print(f"✅ Tables ready ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.seed:
        print("\n👤 Seeding staff accounts...")
        seed_users()

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host 0.0.0.0 --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
