"""
repositories/savings_plan_repo.py
---------------------------------
Data access layer for savings plans.
"""

from typing import Optional

from db.connection import get_connection, release_connection
from models.savings_plan import SavingsPlan
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, name, target_amount, current_amount, category, icon, icon_bg, created_at"


class SavingsPlanRepository:
    """Repository for CRUD operations on the savings_plans table."""

    def add(self, plan: SavingsPlan) -> SavingsPlan:
        """Insert a new plan and populate its `id` and `created_at`."""
        sql = """
            INSERT INTO savings_plans (name, target_amount, current_amount, category, icon, icon_bg)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    plan.name, plan.target_amount, plan.current_amount,
                    plan.category, plan.icon, plan.icon_bg,
                ))
                row = cur.fetchone()
                plan.id = row[0]
                plan.created_at = row[1]
            conn.commit()
            logger.info(f"Added savings plan #{plan.id} '{plan.name}'")
            return plan
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add savings plan: {e}")
            raise
        finally:
            release_connection(conn)

    def list_all(self) -> list[SavingsPlan]:
        """Fetch every plan, most recently created first."""
        sql = f"SELECT {_COLUMNS} FROM savings_plans ORDER BY created_at DESC, id DESC;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql)
                return [self._row_to_plan(r) for r in cur.fetchall()]
        finally:
            release_connection(conn)

    def get_by_id(self, plan_id: int) -> Optional[SavingsPlan]:
        sql = f"SELECT {_COLUMNS} FROM savings_plans WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (plan_id,))
                row = cur.fetchone()
                return self._row_to_plan(row) if row else None
        finally:
            release_connection(conn)

    def update(self, plan: SavingsPlan) -> Optional[SavingsPlan]:
        """Overwrite every mutable field; returns None if the plan is gone."""
        sql = f"""
            UPDATE savings_plans
            SET name = %s, target_amount = %s, current_amount = %s,
                category = %s, icon = %s, icon_bg = %s
            WHERE id = %s
            RETURNING {_COLUMNS};
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (
                    plan.name, plan.target_amount, plan.current_amount,
                    plan.category, plan.icon, plan.icon_bg, plan.id,
                ))
                row = cur.fetchone()
            conn.commit()
            return self._row_to_plan(row) if row else None
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to update savings plan #{plan.id}: {e}")
            raise
        finally:
            release_connection(conn)

    def add_to_current_amount(self, plan_id: int, amount: float) -> Optional[SavingsPlan]:
        """
        Increase a plan's saved amount in a single statement.

        Returns:
            The updated SavingsPlan, or None if no plan has that id.
        """
        sql = f"""
            UPDATE savings_plans
            SET current_amount = current_amount + %s
            WHERE id = %s
            RETURNING {_COLUMNS};
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (amount, plan_id))
                row = cur.fetchone()
            conn.commit()
            return self._row_to_plan(row) if row else None
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to add {amount} to savings plan #{plan_id}: {e}")
            raise
        finally:
            release_connection(conn)

    def delete(self, plan_id: int) -> bool:
        """Delete a plan. Related 'Savings' transactions are left untouched."""
        sql = "DELETE FROM savings_plans WHERE id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (plan_id,))
                deleted = cur.rowcount > 0
            conn.commit()
            if deleted:
                logger.info(f"Deleted savings plan #{plan_id}")
            return deleted
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to delete savings plan #{plan_id}: {e}")
            raise
        finally:
            release_connection(conn)

    @staticmethod
    def _row_to_plan(row: tuple) -> SavingsPlan:
        """Convert a database row tuple to a SavingsPlan domain object."""
        return SavingsPlan(
            id=row[0],
            name=row[1],
            target_amount=float(row[2]),
            current_amount=float(row[3]),
            category=row[4],
            icon=row[5],
            icon_bg=row[6],
            created_at=row[7],
        )
