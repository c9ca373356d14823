"""
Command handlers

Each handler parses its arguments, calls one rule component and turns
the result, or the rule error it raised, into a response text.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, List, Sequence

from database.interface import Storage
from database.models import Budget, Category, CategoryType, User, YearMonth
from finance.budgets import BudgetField, BudgetService
from finance.categories import CategoryService
from finance.errors import (
    BudgetAlreadyExists,
    BudgetNotFound,
    CategoryNotFound,
    EmptyReport,
    FinanceError,
    InvalidAmountError,
    InvalidCategoryName,
    InvalidDateError,
    MalformedCommand,
    NoBudgets,
    PastPeriodError,
    PersonalCategoryConflict,
    RangeInvertedError,
    StandardCategoryConflict,
)
from finance.messages import Messages
from finance.operations import OperationService
from finance.periods import Period, PeriodMode, parse_year_month, resolve_period
from finance.reports import BudgetRow, ReportService
from shared.utils import format_amount, get_month_name, join_words, parse_amount

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """One command invocation"""
    storage: Storage
    user: User
    command: str
    args: List[str]


def month_label(year_month: YearMonth) -> str:
    """'Январь 2022'"""
    return f"{get_month_name(year_month.month)} {year_month.year}"


def _parse_amount_arg(text: str) -> Decimal:
    amount = parse_amount(text)
    if amount is None:
        raise MalformedCommand(f"Not a number: {text!r}")
    return amount


class CommandHandler(ABC):
    """Entry point of one command"""

    @abstractmethod
    async def handle(self, ctx: CommandContext) -> str:
        """
        Execute the command

        Returns:
            Response text

        Raises:
            FinanceError: Rendered afterwards by describe_error
        """

    def describe_error(self, error: FinanceError) -> str:
        """Response text for a rule error raised by handle()"""
        logger.warning(f"{type(self).__name__} has no message for {type(error).__name__}: {error}")
        return Messages.ERROR


class StaticTextHandler(CommandHandler):
    """/start, /help"""

    def __init__(self, text: str):
        self.text = text

    async def handle(self, ctx: CommandContext) -> str:
        return self.text


# ==================== BALANCE & OPERATIONS ====================

class SetBalanceHandler(CommandHandler):
    """/set_balance [amount]"""

    async def handle(self, ctx: CommandContext) -> str:
        if len(ctx.args) != 1:
            raise MalformedCommand("set_balance takes one argument")

        amount = _parse_amount_arg(ctx.args[0])
        user = await OperationService(ctx.storage).set_balance(ctx.user, amount)
        return Messages.SET_BALANCE_DONE.format(balance=format_amount(user.balance))

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.SET_BALANCE_USAGE
        return super().describe_error(error)


class AddOperationHandler(CommandHandler):
    """/add_income, /add_expense [amount] [category name]"""

    def __init__(self, category_type: CategoryType):
        self.category_type = category_type

    async def handle(self, ctx: CommandContext) -> str:
        if len(ctx.args) < 2:
            raise MalformedCommand("Amount and category name are required")

        amount = _parse_amount_arg(ctx.args[0])
        category_name = join_words(ctx.args[1:])
        if not category_name:
            raise MalformedCommand("Category name is blank")

        operation, category, user = await OperationService(ctx.storage).record(
            ctx.user, self.category_type, amount, category_name
        )

        template = Messages.INCOME_ADDED if self.category_type is CategoryType.INCOME else Messages.EXPENSE_ADDED
        return template.format(
            category=category.name,
            amount=format_amount(operation.amount),
            balance=format_amount(user.balance)
        )

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.ADD_OPERATION_USAGE.format(command=f"add_{self.category_type.value}")
        if isinstance(error, InvalidAmountError):
            return Messages.AMOUNT_MUST_BE_POSITIVE
        if isinstance(error, CategoryNotFound):
            return Messages.OPERATION_CATEGORY_NOT_FOUND.format(
                type=self.category_type.plural_label,
                name=error.name,
                kind=self.category_type.value
            )
        return super().describe_error(error)


# ==================== CATEGORIES ====================

def _category_name_arg(args: Sequence[str]) -> str:
    name = join_words(args)
    if not name:
        raise MalformedCommand("Category name is blank")
    return name


class AddCategoryHandler(CommandHandler):
    """/add_income_category, /add_expense_category [name]"""

    def __init__(self, category_type: CategoryType):
        self.category_type = category_type

    async def handle(self, ctx: CommandContext) -> str:
        name = _category_name_arg(ctx.args)
        category = await CategoryService(ctx.storage).create(ctx.user, self.category_type, name)
        return Messages.CATEGORY_ADDED.format(type=self.category_type.plural_label, name=category.name)

    def describe_error(self, error: FinanceError) -> str:
        label = self.category_type.plural_label
        if isinstance(error, MalformedCommand):
            return Messages.CATEGORY_NAME_USAGE
        if isinstance(error, InvalidCategoryName):
            return Messages.INVALID_CATEGORY_NAME
        if isinstance(error, StandardCategoryConflict):
            return Messages.STANDARD_CATEGORY_EXISTS.format(type=label, name=error.name)
        if isinstance(error, PersonalCategoryConflict):
            return Messages.PERSONAL_CATEGORY_EXISTS.format(type=label, name=error.name)
        return super().describe_error(error)


class RemoveCategoryHandler(CommandHandler):
    """/remove_income_category, /remove_expense_category [name]"""

    def __init__(self, category_type: CategoryType):
        self.category_type = category_type

    async def handle(self, ctx: CommandContext) -> str:
        name = _category_name_arg(ctx.args)
        category = await CategoryService(ctx.storage).remove(ctx.user, self.category_type, name)
        return Messages.CATEGORY_REMOVED.format(type=self.category_type.plural_label, name=category.name)

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.CATEGORY_NAME_USAGE
        if isinstance(error, CategoryNotFound):
            return Messages.CATEGORY_NOT_EXISTS.format(type=self.category_type.plural_label, name=error.name)
        return super().describe_error(error)


def _numbered(categories: Sequence[Category]) -> str:
    if not categories:
        return Messages.CATEGORY_LIST_EMPTY
    return "\n".join(f"{index}. {category.name}" for index, category in enumerate(categories, 1))


class ListCategoriesHandler(CommandHandler):
    """/list_categories, /list_income_categories, /list_expense_categories"""

    def __init__(self, *category_types: CategoryType):
        self.category_types = category_types

    async def handle(self, ctx: CommandContext) -> str:
        service = CategoryService(ctx.storage)
        sections = []

        for category_type in self.category_types:
            categories = await service.list_standard_and_personal(ctx.user, category_type)
            sections.append(Messages.CATEGORY_LIST.format(
                type=category_type.plural_label,
                standard=_numbered([c for c in categories if c.is_standard]),
                personal=_numbered([c for c in categories if not c.is_standard])
            ))

        return "\n".join(sections)


# ==================== EXPENSE REPORT ====================

class ReportExpenseHandler(CommandHandler):
    """/report_expense [mm.yyyy]"""

    async def handle(self, ctx: CommandContext) -> str:
        if len(ctx.args) != 1:
            raise MalformedCommand("report_expense takes one argument")

        year_month = parse_year_month(ctx.args[0])
        totals = await ReportService(ctx.storage).expense_report(ctx.user, year_month)

        report = [Messages.REPORT_EXPENSE_HEADER]
        for category_name, amount in totals.items():
            report.append(Messages.REPORT_EXPENSE_LINE.format(
                category=category_name,
                amount=format_amount(amount, with_currency=True)
            ))
        return "".join(report)

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.REPORT_EXPENSE_USAGE
        if isinstance(error, InvalidDateError):
            return Messages.INCORRECT_REPORT_DATE
        if isinstance(error, EmptyReport):
            return Messages.EXPENSES_NOT_EXIST
        return super().describe_error(error)


# ==================== BUDGETS ====================

def _budget_figures(budget: Budget) -> Dict[str, str]:
    return {
        "month": month_label(budget.year_month),
        "expected_income": format_amount(budget.expected_income),
        "expected_expenses": format_amount(budget.expected_expenses),
    }


class BudgetStatusHandler(CommandHandler):
    """/budget - plan and actuals of the current month"""

    def __init__(self, today: Callable[[], date] = date.today):
        self.today = today

    async def handle(self, ctx: CommandContext) -> str:
        row = await ReportService(ctx.storage).budget_status(ctx.user, YearMonth.from_date(self.today()))
        return Messages.BUDGET_STATUS.format(
            month=month_label(row.year_month),
            expected_income=format_amount(row.expected_income),
            expected_expenses=format_amount(row.expected_expenses),
            actual_income=format_amount(row.actual_income),
            actual_expenses=format_amount(row.actual_expenses),
            remaining=format_amount(row.remaining_expenses)
        )

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, BudgetNotFound):
            return Messages.BUDGET_NOT_FOUND
        return super().describe_error(error)


class CreateBudgetHandler(CommandHandler):
    """/budget_create [mm.yyyy] [expected income] [expected expenses]"""

    def __init__(self, today: Callable[[], date] = date.today):
        self.today = today

    async def handle(self, ctx: CommandContext) -> str:
        if len(ctx.args) != 3:
            raise MalformedCommand("budget_create takes three arguments")

        year_month = parse_year_month(ctx.args[0])
        expected_income = _parse_amount_arg(ctx.args[1])
        expected_expenses = _parse_amount_arg(ctx.args[2])

        budget = await BudgetService(ctx.storage, self.today).create(
            ctx.user, year_month, expected_income, expected_expenses
        )
        return Messages.BUDGET_CREATED.format(**_budget_figures(budget))

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.BUDGET_CREATE_USAGE
        if isinstance(error, InvalidDateError):
            return Messages.INCORRECT_BUDGET_DATE
        if isinstance(error, InvalidAmountError):
            return Messages.BUDGET_NEGATIVE_AMOUNT
        if isinstance(error, BudgetAlreadyExists):
            return Messages.BUDGET_ALREADY_EXISTS.format(month=month_label(error.year_month))
        return super().describe_error(error)


class EditBudgetHandler(CommandHandler):
    """/budget_set_income, /budget_set_expenses [mm.yyyy] [amount]"""

    def __init__(self, field: BudgetField, today: Callable[[], date] = date.today):
        self.field = field
        self.today = today

    async def handle(self, ctx: CommandContext) -> str:
        if len(ctx.args) != 2:
            raise MalformedCommand("budget_set_* takes two arguments")

        year_month = parse_year_month(ctx.args[0])
        amount = _parse_amount_arg(ctx.args[1])

        budget = await BudgetService(ctx.storage, self.today).edit(ctx.user, year_month, self.field, amount)
        return Messages.BUDGET_EDITED.format(**_budget_figures(budget))

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.BUDGET_EDIT_USAGE
        if isinstance(error, InvalidDateError):
            return Messages.INCORRECT_BUDGET_DATE
        if isinstance(error, PastPeriodError):
            return Messages.BUDGET_PAST_PERIOD
        if isinstance(error, InvalidAmountError):
            return Messages.AMOUNT_MUST_BE_POSITIVE
        if isinstance(error, BudgetNotFound):
            return Messages.BUDGET_NOT_FOUND
        return super().describe_error(error)


def render_budget_list(rows: Sequence[BudgetRow], period: Period) -> str:
    """Budget list text with the footer matching how the period was chosen"""
    parts = [Messages.BUDGET_LIST_HEADER]

    for row in rows:
        parts.append(Messages.BUDGET_LIST_MONTH.format(
            month=month_label(row.year_month),
            expected_income=format_amount(row.expected_income),
            expected_expenses=format_amount(row.expected_expenses),
            actual_income=format_amount(row.actual_income),
            actual_expenses=format_amount(row.actual_expenses)
        ))

    if period.mode is PeriodMode.ROLLING:
        parts.append(Messages.BUDGET_LIST_FOOTER_ROLLING)
    elif period.mode is PeriodMode.YEAR:
        parts.append(Messages.BUDGET_LIST_FOOTER_YEAR.format(year=period.year))
    else:
        parts.append(Messages.BUDGET_LIST_FOOTER_RANGE.format(count=len(period.months)))

    return "".join(parts)


class ListBudgetsHandler(CommandHandler):
    """/budget_list, /budget_list [yyyy], /budget_list [mm.yyyy] [mm.yyyy]"""

    def __init__(self, today: Callable[[], date] = date.today):
        self.today = today

    async def handle(self, ctx: CommandContext) -> str:
        period = resolve_period(ctx.args, self.today())
        rows = await ReportService(ctx.storage).budget_list(ctx.user, period.months)
        return render_budget_list(rows, period)

    def describe_error(self, error: FinanceError) -> str:
        if isinstance(error, MalformedCommand):
            return Messages.BUDGET_LIST_USAGE
        if isinstance(error, InvalidDateError):
            if "." in error.value:
                return Messages.INCORRECT_BUDGET_DATE
            return Messages.INCORRECT_BUDGET_YEAR
        if isinstance(error, RangeInvertedError):
            return Messages.RANGE_INVERTED
        if isinstance(error, NoBudgets):
            return Messages.NO_BUDGETS
        return super().describe_error(error)


def build_command_handlers(today: Callable[[], date] = date.today) -> Dict[str, CommandHandler]:
    """
    Command name -> handler

    Args:
        today: Clock used by the month-sensitive commands
    """
    return {
        "start": StaticTextHandler(Messages.WELCOME),
        "help": StaticTextHandler(Messages.HELP),
        "set_balance": SetBalanceHandler(),
        "add_income": AddOperationHandler(CategoryType.INCOME),
        "add_expense": AddOperationHandler(CategoryType.EXPENSE),
        "add_income_category": AddCategoryHandler(CategoryType.INCOME),
        "add_expense_category": AddCategoryHandler(CategoryType.EXPENSE),
        "remove_income_category": RemoveCategoryHandler(CategoryType.INCOME),
        "remove_expense_category": RemoveCategoryHandler(CategoryType.EXPENSE),
        "list_categories": ListCategoriesHandler(CategoryType.INCOME, CategoryType.EXPENSE),
        "list_income_categories": ListCategoriesHandler(CategoryType.INCOME),
        "list_expense_categories": ListCategoriesHandler(CategoryType.EXPENSE),
        "report_expense": ReportExpenseHandler(),
        "budget": BudgetStatusHandler(today),
        "budget_create": CreateBudgetHandler(today),
        "budget_set_income": EditBudgetHandler(BudgetField.INCOME, today),
        "budget_set_expenses": EditBudgetHandler(BudgetField.EXPENSES, today),
        "budget_list": ListBudgetsHandler(today),
    }
