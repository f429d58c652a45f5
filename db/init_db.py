"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Transactions: every income/expense entry, including adjustments and savings contributions
CREATE TABLE IF NOT EXISTS transactions (
    id              SERIAL PRIMARY KEY,
    description     TEXT NOT NULL,
    amount          NUMERIC(12,2) NOT NULL CHECK (amount >= 0),
    type            VARCHAR(10) NOT NULL CHECK (type IN ('expense', 'income')),
    category        VARCHAR(50) NOT NULL,
    date            TIMESTAMP NOT NULL DEFAULT LOCALTIMESTAMP,
    created_at      TIMESTAMP NOT NULL DEFAULT LOCALTIMESTAMP,
    updated_at      TIMESTAMP NOT NULL DEFAULT LOCALTIMESTAMP
);

-- Savings plans: goals with a target and the amount saved so far
CREATE TABLE IF NOT EXISTS savings_plans (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    target_amount   NUMERIC(12,2) NOT NULL CHECK (target_amount > 0),
    current_amount  NUMERIC(12,2) NOT NULL DEFAULT 0 CHECK (current_amount >= 0),
    category        VARCHAR(30) NOT NULL DEFAULT 'Other',
    icon            VARCHAR(50) NOT NULL DEFAULT 'ti ti-piggy-bank',
    icon_bg         VARCHAR(50) NOT NULL DEFAULT 'bg-indigo-500',
    created_at      TIMESTAMP NOT NULL DEFAULT LOCALTIMESTAMP
);

-- Spending limits: one row per (category, period)
CREATE TABLE IF NOT EXISTS spending_limits (
    id              SERIAL PRIMARY KEY,
    category        VARCHAR(50) NOT NULL,
    limit_amount    NUMERIC(12,2) NOT NULL CHECK (limit_amount > 0),
    period          VARCHAR(10) NOT NULL CHECK (period IN ('daily', 'weekly', 'monthly')),
    created_at      TIMESTAMP NOT NULL DEFAULT LOCALTIMESTAMP,
    updated_at      TIMESTAMP NOT NULL DEFAULT LOCALTIMESTAMP,
    UNIQUE(category, period)
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(date DESC);
CREATE INDEX IF NOT EXISTS idx_transactions_category ON transactions(category);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
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
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
