"""
User repository for database operations
"""

import logging
from typing import Optional
from decimal import Decimal
import asyncpg

from database.interface import DuplicateRecordError
from database.models import User

logger = logging.getLogger(__name__)


def _to_user(row: asyncpg.Record) -> User:
    return User(
        id=row['id'],
        telegram_user_id=row['telegram_user_id'],
        balance=Decimal(row['balance']),
        created_at=row['created_at']
    )


class UserRepository:
    """Repository for User operations"""

    def __init__(self, connection: asyncpg.Connection):
        self.conn = connection

    async def create(self, telegram_user_id: int, balance: Decimal = Decimal("0")) -> User:
        """
        Create a new user

        Args:
            telegram_user_id: Telegram chat ID
            balance: Starting balance

        Returns:
            Created User object
        """
        try:
            # Savepoint: a duplicate must not abort the surrounding transaction
            async with self.conn.transaction():
                row = await self.conn.fetchrow(
                    """
                    INSERT INTO users (telegram_user_id, balance)
                    VALUES ($1, $2)
                    RETURNING id, telegram_user_id, balance, created_at
                    """,
                    telegram_user_id, balance
                )

            logger.info(f"User created: telegram_id={telegram_user_id}")
            return _to_user(row)

        except asyncpg.UniqueViolationError as e:
            raise DuplicateRecordError(f"User {telegram_user_id} already exists") from e

        except Exception as e:
            logger.error(f"Error creating user: {e}", exc_info=True)
            raise

    async def get_by_telegram_id(self, telegram_user_id: int) -> Optional[User]:
        """
        Get user by Telegram chat ID

        Args:
            telegram_user_id: Telegram chat ID

        Returns:
            User object or None
        """
        row = await self.conn.fetchrow(
            "SELECT * FROM users WHERE telegram_user_id = $1",
            telegram_user_id
        )

        return _to_user(row) if row else None

    async def update_balance(self, user_id: int, balance: Decimal) -> Optional[User]:
        """
        Update user balance

        Args:
            user_id: User ID
            balance: New balance

        Returns:
            Updated User object or None
        """
        try:
            row = await self.conn.fetchrow(
                """
                UPDATE users
                SET balance = $2,
                    updated_at = NOW()
                WHERE id = $1
                RETURNING *
                """,
                user_id, balance
            )

            if row:
                logger.info(f"User balance updated: id={user_id}")
                return _to_user(row)

            return None

        except Exception as e:
            logger.error(f"Error updating user balance: {e}", exc_info=True)
            raise
