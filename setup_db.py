"""
Database setup script.
Run this before starting the application for the first time.
"""
import sys

from pantrychef.config import DATABASE_URL


def setup_database():
    """Create all PantryChef tables in DATABASE_URL."""
    print("PantryChef database setup")
    print("=" * 50)
    print(f"\nDatabase: {DATABASE_URL.rsplit('@', 1)[-1]}")

    try:
        from pantrychef.database import init_db
        init_db()
    except Exception as e:
        print(f"   ✗ Error creating tables: {e}")
        sys.exit(1)
    print("   ✓ Tables created successfully")

    print("\n" + "=" * 50)
    print("\nYou can now run: python -m uvicorn api:app --reload")


if __name__ == "__main__":
    setup_database()
