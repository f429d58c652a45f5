"""
repositories/spending_limit_repo.py
-----------------------------------
Data access layer for spending limits.
"""

from typing import Optional

from psycopg2 import errors

from db.connection import get_connection, release_connection
from models.spending_limit import SpendingLimit
from utils.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, category, limit_amount, period, created_at, updated_at"


class SpendingLimitRepository:
    """Repository for CRUD operations on the spending_limits table."""

    def upsert(self, category: str, limit: float, period: str) -> SpendingLimit:
        """
        Set or update the limit for a (category, period) pair.
        Uses PostgreSQL's ON CONFLICT so two concurrent calls cannot
        produce duplicate rows.
        """
        sql = f"""
            INSERT INTO spending_limits (category, limit_amount, period)
            VALUES (%s, %s, %s)
            ON CONFLICT (category, period)
            DO UPDATE SET limit_amount = EXCLUDED.limit_amount, updated_at = LOCALTIMESTAMP
            RETURNING {_COLUMNS};
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (category, limit, period))
                row = cur.fetchone()
            conn.commit()
            logger.info(f"Set {period} limit for '{category}' to {limit:.2f}")
            return self._row_to_limit(row)
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to set spending limit: {e}")
            raise
        finally:
            release_connection(conn)

    def list_all(self) -> list[SpendingLimit]:
        sql = f"SELECT {_COLUMNS} FROM spending_limits ORDER BY category, period;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_limit(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, limit_id: int) -> Optional[SpendingLimit]:
        sql = f"SELECT {_COLUMNS} FROM spending_limits WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (limit_id,))
                row = cur.fetchone()
                return self._row_to_limit(row) if row else None
        finally:
            release_connection(conn)

    def find(self, category: str, period: str) -> Optional[SpendingLimit]:
        """Get the limit stored for a (category, period) pair."""
        sql = f"SELECT {_COLUMNS} FROM spending_limits WHERE category = %s AND period = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (category, period))
                row = cur.fetchone()
                return self._row_to_limit(row) if row else None
        finally:
            release_connection(conn)

    def update(self, spending_limit: SpendingLimit) -> Optional[SpendingLimit]:
        """
        Overwrite category, limit and period of an existing row.

        Raises:
            ValidationError: If another row already holds the new (category, period).
        """
        sql = f"""
            UPDATE spending_limits
            SET category = %s, limit_amount = %s, period = %s, updated_at = LOCALTIMESTAMP
            WHERE id = %s
            RETURNING {_COLUMNS};
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    spending_limit.category, spending_limit.limit,
                    spending_limit.period, spending_limit.id,
                ))
                row = cur.fetchone()
            conn.commit()
            return self._row_to_limit(row) if row else None
        except errors.UniqueViolation as e:
            conn.rollback()
            logger.warning(f"Spending limit #{spending_limit.id} collides with an existing row: {e}")
            raise ValidationError(
                f"A {spending_limit.period} limit for '{spending_limit.category}' already exists"
            ) from e
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update spending limit #{spending_limit.id}: {e}")
            raise
        finally:
            release_connection(conn)

    def delete(self, limit_id: int) -> bool:
        sql = "DELETE FROM spending_limits WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (limit_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete spending limit #{limit_id}: {e}")
            raise
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_limit(row: tuple) -> SpendingLimit:
        return SpendingLimit(
            id=row[0],
            category=row[1],
            limit=float(row[2]),
            period=row[3],
            created_at=row[4],
            updated_at=row[5],
        )
