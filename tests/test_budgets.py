"""
Tests for budget rules
"""

from datetime import date
from decimal import Decimal

import pytest

from database.models import YearMonth
from finance.budgets import BudgetField, BudgetService
from finance.errors import BudgetAlreadyExists, BudgetNotFound, InvalidAmountError, PastPeriodError

TODAY = date(2023, 3, 15)
CURRENT = YearMonth(2023, 3)
PREVIOUS = YearMonth(2023, 2)
NEXT = YearMonth(2023, 4)


def fixed_today():
    return TODAY


class TestCreateBudget:

    async def test_create(self, storage_provider, user, records):
        async with storage_provider.unit_of_work() as storage:
            budget = await BudgetService(storage, fixed_today).create(
                user, NEXT, Decimal("100000"), Decimal("80000")
            )

        assert budget.id is not None
        stored = await records.find_budget(user, NEXT)
        assert stored.expected_income == Decimal("100000")
        assert stored.expected_expenses == Decimal("80000")

    async def test_zero_figures_allowed(self, storage_provider, user):
        async with storage_provider.unit_of_work() as storage:
            budget = await BudgetService(storage, fixed_today).create(user, CURRENT, Decimal("0"), Decimal("0"))

        assert budget.expected_income == 0

    async def test_past_month_allowed(self, storage_provider, user):
        async with storage_provider.unit_of_work() as storage:
            budget = await BudgetService(storage, fixed_today).create(user, PREVIOUS, Decimal("1"), Decimal("1"))

        assert budget.year_month == PREVIOUS

    async def test_negative_rejected(self, storage_provider, user, records):
        async with storage_provider.unit_of_work() as storage:
            with pytest.raises(InvalidAmountError):
                await BudgetService(storage, fixed_today).create(user, NEXT, Decimal("-1"), Decimal("5"))

        assert await records.find_budget(user, NEXT) is None

    async def test_duplicate_month(self, storage_provider, user, records):
        await records.budget(user, NEXT, 10, 20)

        async with storage_provider.unit_of_work() as storage:
            with pytest.raises(BudgetAlreadyExists) as exc_info:
                await BudgetService(storage, fixed_today).create(user, NEXT, Decimal("1"), Decimal("2"))

        assert exc_info.value.year_month == NEXT
        assert (await records.find_budget(user, NEXT)).expected_income == Decimal("10")


class TestEditBudget:

    @pytest.mark.parametrize("field, income, expenses", [
        (BudgetField.INCOME, Decimal("500"), Decimal("20")),
        (BudgetField.EXPENSES, Decimal("10"), Decimal("500")),
    ])
    async def test_edit_one_field(self, storage_provider, user, records, field, income, expenses):
        await records.budget(user, CURRENT, 10, 20)

        async with storage_provider.unit_of_work() as storage:
            budget = await BudgetService(storage, fixed_today).edit(user, CURRENT, field, Decimal("500"))

        assert (budget.expected_income, budget.expected_expenses) == (income, expenses)
        stored = await records.find_budget(user, CURRENT)
        assert (stored.expected_income, stored.expected_expenses) == (income, expenses)

    async def test_future_month(self, storage_provider, user, records):
        await records.budget(user, NEXT, 10, 20)

        async with storage_provider.unit_of_work() as storage:
            budget = await BudgetService(storage, fixed_today).edit(user, NEXT, BudgetField.INCOME, Decimal("1"))

        assert budget.expected_income == Decimal("1")

    @pytest.mark.parametrize("amount", [Decimal("100"), Decimal("0"), Decimal("-5")])
    async def test_past_month_always_rejected(self, storage_provider, user, records, amount):
        await records.budget(user, PREVIOUS, 10, 20)

        async with storage_provider.unit_of_work() as storage:
            with pytest.raises(PastPeriodError):
                await BudgetService(storage, fixed_today).edit(user, PREVIOUS, BudgetField.INCOME, amount)

        assert (await records.find_budget(user, PREVIOUS)).expected_income == Decimal("10")

    async def test_past_month_without_budget(self, storage_provider, user):
        async with storage_provider.unit_of_work() as storage:
            with pytest.raises(PastPeriodError):
                await BudgetService(storage, fixed_today).edit(user, PREVIOUS, BudgetField.EXPENSES, Decimal("1"))

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
    async def test_amount_checked_before_existence(self, storage_provider, user, amount):
        async with storage_provider.unit_of_work() as storage:
            with pytest.raises(InvalidAmountError):
                await BudgetService(storage, fixed_today).edit(user, CURRENT, BudgetField.INCOME, amount)

    async def test_missing_budget(self, storage_provider, user):
        async with storage_provider.unit_of_work() as storage:
            with pytest.raises(BudgetNotFound):
                await BudgetService(storage, fixed_today).edit(user, NEXT, BudgetField.INCOME, Decimal("1"))


def test_is_past():
    service = BudgetService(storage=None, today=fixed_today)

    assert service.is_past(PREVIOUS)
    assert service.is_past(YearMonth(2022, 12))
    assert not service.is_past(CURRENT)
    assert not service.is_past(NEXT)
