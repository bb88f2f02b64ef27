"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Customers table: one row per restaurant guest
CREATE TABLE IF NOT EXISTS customers (
    id              SERIAL PRIMARY KEY,
    first_name      TEXT NOT NULL,
    last_name       TEXT NOT NULL,
    phone           TEXT,
    notes           TEXT NOT NULL DEFAULT ''
);

-- Reservations table: a customer has many reservations
CREATE TABLE IF NOT EXISTS reservations (
    id              SERIAL PRIMARY KEY,
    customer_id     INTEGER NOT NULL REFERENCES customers(id),
    start_at        TIMESTAMP NOT NULL,
    num_guests      INTEGER NOT NULL CHECK (num_guests >= 1),
    notes           TEXT NOT NULL DEFAULT ''
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_reservations_customer ON reservations(customer_id);
"""


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        db: An opened Database handle.
    """
    conn = db.get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        db.release_connection(conn)


if __name__ == "__main__":
    with Database() as database:
        create_tables(database)
    print("✅ Database schema created successfully.")
