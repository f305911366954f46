from typing import List
from sqlalchemy import inspect
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import database models
from app.core.database import engine
from app.models.order import PrintOrder

REQUIRED_TABLES = [PrintOrder.__tablename__]


def check_tables(db_engine=engine) -> List[str]:
    """Report which required tables are missing. Changes nothing."""
    print(f"Connecting to database at: {db_engine.url.render_as_string(hide_password=True)}")

    # Check if tables exist
    inspector = inspect(db_engine)
    existing_tables = inspector.get_table_names()

    print("\n📌 Existing Tables in Database:")
    for table in existing_tables:
        print(f" - {table}")

    missing_tables = [table for table in REQUIRED_TABLES if table not in existing_tables]

    if missing_tables:
        print(f"\n⚠️ Missing tables detected: {', '.join(missing_tables)}")
        print("Run `python init_db.py` to create them.")
    else:
        print("\n✅ All required database tables exist.")
    return missing_tables

if __name__ == "__main__":
    print("Checking database tables...")
    missing = check_tables()
    if missing:
        raise SystemExit(1)
