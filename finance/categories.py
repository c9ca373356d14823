"""
Category resolver

Personal categories shadow standard categories of the same type and
name. Names are unique per scope and type, ignoring case.
"""

import logging
import re
from typing import Iterable, List, Optional

from database.interface import DuplicateRecordError, Storage
from database.models import Category, CategoryType, PersonalCategory, StandardCategory, User
from finance.errors import (
    CategoryConflict,
    CategoryNotFound,
    InvalidCategoryName,
    PersonalCategoryConflict,
    StandardCategoryConflict,
)
from shared.constants import CATEGORY_NAME_PATTERN

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(CATEGORY_NAME_PATTERN)


def normalize_category_name(name: str) -> str:
    """
    Validate a category name and bring it to the stored form

    The stored form starts with a capital letter, the rest is lower case:
    "тАкСи" -> "Такси".

    Raises:
        InvalidCategoryName: If the name breaks the length or alphabet rules
    """
    stripped = name.strip()

    if not _NAME_RE.fullmatch(stripped):
        raise InvalidCategoryName(name)

    return stripped[0].upper() + stripped[1:].lower()


class CategoryService:
    """Create, remove, list and resolve categories"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def resolve(self, user: User, category_type: CategoryType, name: str) -> Category:
        """
        Find the category a user means by a name

        The user's personal category wins over a standard one.

        Raises:
            CategoryNotFound: If neither exists
        """
        personal = await self.storage.find_category(user.id, category_type, name)
        if personal is not None:
            return personal

        standard = await self.storage.find_category(None, category_type, name)
        if standard is not None:
            return standard

        raise CategoryNotFound(category_type, name)

    async def create(self, user: Optional[User], category_type: CategoryType, name: str) -> Category:
        """
        Create a personal category, or a standard one when user is None

        Raises:
            InvalidCategoryName: Before any storage access
            StandardCategoryConflict: A standard category has this name
            PersonalCategoryConflict: The user (or, for a standard
                category, anyone) already has a personal category with this name
        """
        name = normalize_category_name(name)

        if await self.storage.find_category(None, category_type, name) is not None:
            raise StandardCategoryConflict(category_type, name)

        if user is None:
            if await self.storage.find_categories_named(category_type, name):
                raise PersonalCategoryConflict(category_type, name)
            category = StandardCategory(id=None, type=category_type, name=name)
        else:
            if await self.storage.find_category(user.id, category_type, name) is not None:
                raise PersonalCategoryConflict(category_type, name)
            category = PersonalCategory(id=None, type=category_type, name=name, owner_id=user.id)

        try:
            category = await self.storage.save_category(category)
        except DuplicateRecordError as e:
            raise PersonalCategoryConflict(category_type, name) from e

        logger.info(f"Category '{name}' ({category_type.value}) created, standard={category.is_standard}")
        return category

    async def remove(self, user: User, category_type: CategoryType, name: str) -> Category:
        """
        Remove a personal category of the user

        Raises:
            CategoryNotFound: If the user has no personal category with that
                name, even when a standard one exists
        """
        category = await self.storage.find_category(user.id, category_type, name.strip())
        if category is None:
            raise CategoryNotFound(category_type, name.strip())

        await self.storage.delete_category(category)
        logger.info(f"Personal category '{category.name}' of user {user.id} removed")
        return category

    async def list_standard_and_personal(self, user: User, category_type: CategoryType) -> List[Category]:
        """
        Personal categories of the user followed by standard ones,
        each group in storage order
        """
        personal = await self.storage.list_categories(user.id, category_type)
        standard = await self.storage.list_categories(None, category_type)
        return personal + standard

    async def seed_standard_categories(self, category_type: CategoryType, names: Iterable[str]) -> int:
        """
        Create missing standard categories

        Returns:
            Number of categories created
        """
        created = 0
        for name in names:
            try:
                await self.create(None, category_type, name)
                created += 1
            except CategoryConflict:
                logger.debug(f"Standard category '{name}' already present")
        return created
