"""
Report aggregation
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from database.interface import Storage
from database.models import CategoryType, User, YearMonth
from finance.errors import BudgetNotFound, EmptyReport, NoBudgets

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class BudgetRow:
    """Expected vs actual figures of one month"""
    year_month: YearMonth
    expected_income: Decimal = ZERO
    expected_expenses: Decimal = ZERO
    actual_income: Decimal = ZERO
    actual_expenses: Decimal = ZERO

    @property
    def remaining_expenses(self) -> Decimal:
        return self.expected_expenses - self.actual_expenses


class ReportService:
    """Sums operations per category and month"""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def expense_report(self, user: User, year_month: YearMonth) -> "OrderedDict[str, Decimal]":
        """
        Expenses of a month per category, in order of first spending

        Raises:
            EmptyReport: If nothing was spent that month
        """
        totals = await self.storage.sum_operations(user.id, CategoryType.EXPENSE, year_month)
        if not totals:
            raise EmptyReport(year_month)
        return OrderedDict(totals)

    async def _actual_total(self, user: User, category_type: CategoryType, year_month: YearMonth) -> Decimal:
        totals = await self.storage.sum_operations(user.id, category_type, year_month)
        return sum(totals.values(), ZERO)

    async def budget_list(
        self,
        user: User,
        months: Sequence[YearMonth],
        include_empty_months: bool = False
    ) -> List[BudgetRow]:
        """
        Expected and actual figures for each month of a period

        Args:
            user: Report owner
            months: Ascending months of the period
            include_empty_months: Also list months without a budget, with
                zero expected figures

        Raises:
            NoBudgets: If no month of the period has a budget, even when
                operations exist
        """
        if not months:
            raise NoBudgets("Empty period")

        budgets = {
            budget.year_month: budget
            for budget in await self.storage.list_budgets(user.id, months[0], months[-1])
        }
        if not budgets:
            raise NoBudgets(f"No budgets between {months[0]} and {months[-1]}")

        if not include_empty_months:
            months = [year_month for year_month in months if year_month in budgets]

        rows = []
        for year_month in months:
            budget = budgets.get(year_month)
            rows.append(BudgetRow(
                year_month=year_month,
                expected_income=budget.expected_income if budget else ZERO,
                expected_expenses=budget.expected_expenses if budget else ZERO,
                actual_income=await self._actual_total(user, CategoryType.INCOME, year_month),
                actual_expenses=await self._actual_total(user, CategoryType.EXPENSE, year_month)
            ))

        logger.debug(f"Budget list for user {user.id}: {len(budgets)} month(s) with budget")
        return rows

    async def budget_status(self, user: User, year_month: YearMonth) -> BudgetRow:
        """
        Expected and actual figures of one budgeted month

        Raises:
            BudgetNotFound: If the month has no budget
        """
        budget = await self.storage.find_budget(user.id, year_month)
        if budget is None:
            raise BudgetNotFound(year_month)

        return BudgetRow(
            year_month=year_month,
            expected_income=budget.expected_income,
            expected_expenses=budget.expected_expenses,
            actual_income=await self._actual_total(user, CategoryType.INCOME, year_month),
            actual_expenses=await self._actual_total(user, CategoryType.EXPENSE, year_month)
        )
