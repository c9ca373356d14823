"""
Finance Module
Rule engine: categories, periods, budgets, reports and command handling
"""

from .categories import CategoryService
from .periods import Period, PeriodMode, resolve_period, parse_year_month
from .budgets import BudgetService, BudgetField
from .reports import ReportService, BudgetRow
from .operations import OperationService
from .commands import build_command_handlers
from .dispatcher import CommandDispatcher

__version__ = "1.0.0"

__all__ = [
    "CategoryService",
    "Period",
    "PeriodMode",
    "resolve_period",
    "parse_year_month",
    "BudgetService",
    "BudgetField",
    "ReportService",
    "BudgetRow",
    "OperationService",
    "build_command_handlers",
    "CommandDispatcher"
]
