"""
Budget rules
"""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Callable

from database.interface import DuplicateRecordError, Storage
from database.models import Budget, User, YearMonth
from finance.errors import BudgetAlreadyExists, BudgetNotFound, InvalidAmountError, PastPeriodError

logger = logging.getLogger(__name__)


class BudgetField(str, Enum):
    """Editable budget figure"""
    INCOME = "income"
    EXPENSES = "expenses"


class BudgetService:
    """Create and edit monthly budgets"""

    def __init__(self, storage: Storage, today: Callable[[], date] = date.today):
        self.storage = storage
        self.today = today

    def is_past(self, year_month: YearMonth) -> bool:
        """Months strictly before the current one are closed"""
        return year_month < YearMonth.from_date(self.today())

    async def create(
        self,
        user: User,
        year_month: YearMonth,
        expected_income: Decimal,
        expected_expenses: Decimal
    ) -> Budget:
        """
        Create a budget for a month

        Raises:
            InvalidAmountError: If a figure is negative
            BudgetAlreadyExists: If the user already planned this month
        """
        if expected_income < 0 or expected_expenses < 0:
            raise InvalidAmountError("Budget figures must not be negative")

        if await self.storage.find_budget(user.id, year_month) is not None:
            raise BudgetAlreadyExists(year_month)

        try:
            budget = await self.storage.save_budget(Budget(
                id=None,
                user_id=user.id,
                year_month=year_month,
                expected_income=expected_income,
                expected_expenses=expected_expenses
            ))
        except DuplicateRecordError as e:
            raise BudgetAlreadyExists(year_month) from e

        logger.info(f"Budget for {year_month} created for user {user.id}")
        return budget

    async def edit(self, user: User, year_month: YearMonth, field: BudgetField, amount: Decimal) -> Budget:
        """
        Change one expected figure of a budget

        Raises:
            PastPeriodError: If the month is already over, whatever the amount
            InvalidAmountError: If the amount is not positive
            BudgetNotFound: If the month has no budget
        """
        if self.is_past(year_month):
            raise PastPeriodError(year_month)

        if amount <= 0:
            raise InvalidAmountError("Amount must be positive")

        budget = await self.storage.find_budget(user.id, year_month)
        if budget is None:
            raise BudgetNotFound(year_month)

        if field is BudgetField.INCOME:
            budget = replace(budget, expected_income=amount)
        else:
            budget = replace(budget, expected_expenses=amount)

        budget = await self.storage.save_budget(budget)
        logger.info(f"Budget for {year_month} of user {user.id}: {field.value} set to {amount}")
        return budget
