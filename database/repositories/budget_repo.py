"""
Budget repository for database operations
"""

import logging
from typing import List, Optional
from decimal import Decimal
import asyncpg

from database.interface import DuplicateRecordError
from database.models import Budget, YearMonth

logger = logging.getLogger(__name__)


def _to_budget(row: asyncpg.Record) -> Budget:
    return Budget(
        id=row['id'],
        user_id=row['user_id'],
        year_month=YearMonth(row['year'], row['month']),
        expected_income=Decimal(row['expected_income']),
        expected_expenses=Decimal(row['expected_expenses'])
    )


class BudgetRepository:
    """Repository for Budget operations"""

    def __init__(self, connection: asyncpg.Connection):
        self.conn = connection

    async def get_by_month(self, user_id: int, year_month: YearMonth) -> Optional[Budget]:
        """
        Get user's budget for a month

        Args:
            user_id: User ID
            year_month: Month of the budget

        Returns:
            Budget object or None
        """
        row = await self.conn.fetchrow(
            """
            SELECT * FROM budgets
            WHERE user_id = $1 AND year = $2 AND month = $3
            """,
            user_id, year_month.year, year_month.month
        )

        return _to_budget(row) if row else None

    async def get_between(self, user_id: int, start: YearMonth, end: YearMonth) -> List[Budget]:
        """
        Get user's budgets from start to end inclusive

        Args:
            user_id: User ID
            start: First month
            end: Last month

        Returns:
            List of Budget objects, oldest first
        """
        rows = await self.conn.fetch(
            """
            SELECT * FROM budgets
            WHERE user_id = $1
              AND (year, month) >= ($2, $3)
              AND (year, month) <= ($4, $5)
            ORDER BY year, month
            """,
            user_id, start.year, start.month, end.year, end.month
        )

        return [_to_budget(row) for row in rows]

    async def create(self, budget: Budget) -> Budget:
        """
        Create a new budget

        Args:
            budget: Budget without ID

        Returns:
            Created Budget object
        """
        try:
            async with self.conn.transaction():
                row = await self.conn.fetchrow(
                    """
                    INSERT INTO budgets (user_id, year, month, expected_income, expected_expenses)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING *
                    """,
                    budget.user_id,
                    budget.year_month.year,
                    budget.year_month.month,
                    budget.expected_income,
                    budget.expected_expenses
                )

            logger.info(f"Budget created: user_id={budget.user_id}, month={budget.year_month}")
            return _to_budget(row)

        except asyncpg.UniqueViolationError as e:
            raise DuplicateRecordError(f"Budget for {budget.year_month} already exists") from e

    async def update(self, budget: Budget) -> Optional[Budget]:
        """
        Update expected figures of a budget

        Args:
            budget: Budget with ID

        Returns:
            Updated Budget object or None
        """
        row = await self.conn.fetchrow(
            """
            UPDATE budgets
            SET expected_income = $2,
                expected_expenses = $3
            WHERE id = $1
            RETURNING *
            """,
            budget.id, budget.expected_income, budget.expected_expenses
        )

        if row:
            logger.info(f"Budget updated: id={budget.id}")
            return _to_budget(row)

        return None
