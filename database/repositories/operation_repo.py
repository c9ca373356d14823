"""
Operation repository for database operations
"""

import logging
from collections import OrderedDict
from typing import Optional
from datetime import datetime
from decimal import Decimal
import asyncpg

from database.models import CategoryType, Operation, YearMonth

logger = logging.getLogger(__name__)


class OperationRepository:
    """Repository for Operation operations"""

    def __init__(self, connection: asyncpg.Connection):
        self.conn = connection

    async def create(
        self,
        user_id: int,
        category_id: int,
        amount: Decimal,
        created_at: Optional[datetime] = None
    ) -> Operation:
        """
        Create a new operation

        Args:
            user_id: User ID
            category_id: Category ID
            amount: Positive amount
            created_at: Time of the operation (defaults to now)

        Returns:
            Created Operation object
        """
        try:
            if created_at is None:
                created_at = datetime.now()

            row = await self.conn.fetchrow(
                """
                INSERT INTO operations (user_id, category_id, amount, created_at)
                VALUES ($1, $2, $3, $4)
                RETURNING id, user_id, category_id, amount, created_at
                """,
                user_id, category_id, Decimal(amount), created_at
            )

            logger.info(f"Operation created: user_id={user_id}, category_id={category_id}, amount={amount}")
            return Operation(
                id=row['id'],
                user_id=row['user_id'],
                category_id=row['category_id'],
                amount=Decimal(row['amount']),
                created_at=row['created_at']
            )

        except Exception as e:
            logger.error(f"Error creating operation: {e}", exc_info=True)
            raise

    async def get_month_sums(
        self,
        user_id: int,
        category_type: CategoryType,
        year_month: YearMonth
    ) -> "OrderedDict[str, Decimal]":
        """
        Get month totals grouped by category

        Args:
            user_id: User ID
            category_type: 'income' or 'expense'
            year_month: Month to sum

        Returns:
            Category name -> total, in order of each category's first recorded operation
        """
        rows = await self.conn.fetch(
            """
            SELECT
                c.name AS category_name,
                SUM(o.amount) AS total_amount
            FROM operations o
            INNER JOIN categories c ON o.category_id = c.id
            WHERE o.user_id = $1
              AND c.type = $2
              AND o.created_at >= $3
              AND o.created_at < $4
            GROUP BY c.id, c.name
            ORDER BY MIN(o.id)
            """,
            user_id,
            category_type.value,
            datetime.combine(year_month.first_day, datetime.min.time()),
            datetime.combine(year_month.next_first_day, datetime.min.time())
        )

        return OrderedDict(
            (row['category_name'], Decimal(row['total_amount'])) for row in rows
        )
