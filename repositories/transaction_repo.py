"""
repositories/transaction_repo.py
--------------------------------
Data access layer for income/expense transactions.
All SQL queries related to the `transactions` table live here.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.transaction import Transaction
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, description, amount, type, category, date, created_at, updated_at"


class TransactionRepository:
    """Repository for CRUD operations on the transactions table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, transaction: Transaction) -> Transaction:
        """
        Insert a new transaction.

        Args:
            transaction: The Transaction domain object to persist.

        Returns:
            The same Transaction with `id`, `created_at` and `updated_at` populated.
        """
        sql = """
            INSERT INTO transactions (description, amount, type, category, date)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    transaction.description, transaction.amount, transaction.type,
                    transaction.category, transaction.date,
                ))
                row = cur.fetchone()
                transaction.id = row[0]
                transaction.created_at = row[1]
                transaction.updated_at = row[2]
            conn.commit()
            logger.info(f"Added {transaction.type} #{transaction.id} ({transaction.category})")
            return transaction
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add transaction: {e}")
            raise
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Transaction]:
        """
        Fetch every transaction, newest first.

        Returns:
            List of Transaction objects ordered by date descending.
        """
        sql = f"SELECT {_COLUMNS} FROM transactions ORDER BY date DESC, id DESC;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_transaction(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, transaction_id: int) -> Optional[Transaction]:
        """Fetch a single transaction, or None if it does not exist."""
        sql = f"SELECT {_COLUMNS} FROM transactions WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (transaction_id,))
                row = cur.fetchone()
                return self._row_to_transaction(row) if row else None
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, transaction: Transaction) -> Optional[Transaction]:
        """
        Overwrite every mutable field of an existing transaction.

        Args:
            transaction: Transaction with updated fields (must have id set).

        Returns:
            The stored Transaction, or None if no row has that id.
        """
        sql = f"""
            UPDATE transactions
            SET description = %s, amount = %s, type = %s, category = %s, date = %s,
                updated_at = LOCALTIMESTAMP
            WHERE id = %s
            RETURNING {_COLUMNS};
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    transaction.description, transaction.amount, transaction.type,
                    transaction.category, transaction.date, transaction.id,
                ))
                row = cur.fetchone()
            conn.commit()
            return self._row_to_transaction(row) if row else None
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update transaction #{transaction.id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, transaction_id: int) -> bool:
        """
        Delete a transaction by ID.

        Returns:
            True if a row was deleted, False otherwise.
        """
        sql = "DELETE FROM transactions WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (transaction_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted transaction #{transaction_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete transaction #{transaction_id}: {e}")
            raise
        finally:
            release_connection(conn)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_transaction(row: tuple) -> Transaction:
        """Convert a database row tuple to a Transaction domain object."""
        return Transaction(
            id=row[0],
            description=row[1],
            amount=float(row[2]),
            type=row[3],
            category=row[4],
            date=row[5],
            created_at=row[6],
            updated_at=row[7],
        )
