"""
Category repository for database operations
"""

import logging
from typing import Optional, List
import asyncpg

from database.interface import DuplicateRecordError
from database.models import Category, CategoryType, PersonalCategory, StandardCategory

logger = logging.getLogger(__name__)


def _to_category(row: asyncpg.Record) -> Category:
    category_type = CategoryType(row['type'])

    if row['user_id'] is None:
        return StandardCategory(id=row['id'], type=category_type, name=row['name'])

    return PersonalCategory(
        id=row['id'],
        type=category_type,
        name=row['name'],
        owner_id=row['user_id']
    )


class CategoryRepository:
    """Repository for Category operations"""

    def __init__(self, connection: asyncpg.Connection):
        self.conn = connection

    async def get_by_name(
        self,
        owner_id: Optional[int],
        category_type: CategoryType,
        name: str
    ) -> Optional[Category]:
        """
        Get category of one scope by name (case-insensitive)

        Args:
            owner_id: Owner ID, None for standard categories
            category_type: 'income' or 'expense'
            name: Category name

        Returns:
            Category object or None
        """
        row = await self.conn.fetchrow(
            """
            SELECT * FROM categories
            WHERE user_id IS NOT DISTINCT FROM $1
              AND type = $2
              AND LOWER(name) = LOWER($3)
            """,
            owner_id, category_type.value, name
        )

        return _to_category(row) if row else None

    async def get_all_named(self, category_type: CategoryType, name: str) -> List[Category]:
        """
        Get categories of every scope with the given name (case-insensitive)
        """
        rows = await self.conn.fetch(
            """
            SELECT * FROM categories
            WHERE type = $1 AND LOWER(name) = LOWER($2)
            ORDER BY id
            """,
            category_type.value, name
        )

        return [_to_category(row) for row in rows]

    async def get_all(self, owner_id: Optional[int], category_type: CategoryType) -> List[Category]:
        """
        Get all categories of one scope

        Args:
            owner_id: Owner ID, None for standard categories
            category_type: 'income' or 'expense'

        Returns:
            List of Category objects in insertion order
        """
        rows = await self.conn.fetch(
            """
            SELECT * FROM categories
            WHERE user_id IS NOT DISTINCT FROM $1 AND type = $2
            ORDER BY id
            """,
            owner_id, category_type.value
        )

        return [_to_category(row) for row in rows]

    async def create(self, owner_id: Optional[int], category_type: CategoryType, name: str) -> Category:
        """
        Create a new category

        Args:
            owner_id: Owner ID, None for a standard category
            category_type: 'income' or 'expense'
            name: Category name

        Returns:
            Created Category object
        """
        try:
            async with self.conn.transaction():
                row = await self.conn.fetchrow(
                    """
                    INSERT INTO categories (user_id, name, type)
                    VALUES ($1, $2, $3)
                    RETURNING *
                    """,
                    owner_id, name, category_type.value
                )

            logger.info(f"Category created: {name} ({category_type.value}, owner={owner_id})")
            return _to_category(row)

        except asyncpg.UniqueViolationError as e:
            raise DuplicateRecordError(f"Category '{name}' already exists") from e

    async def delete(self, category_id: int) -> bool:
        """
        Delete category; its operations go with it (ON DELETE CASCADE)

        Args:
            category_id: Category ID

        Returns:
            True if deleted
        """
        result = await self.conn.execute(
            "DELETE FROM categories WHERE id = $1",
            category_id
        )

        deleted = result.split()[-1] == "1"
        if deleted:
            logger.info(f"Category deleted: id={category_id}")

        return deleted
