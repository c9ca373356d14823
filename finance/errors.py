"""
Rule engine errors

Every error is recovered at the command boundary and rendered by the
handler that received it.
"""

from typing import Optional

from database.models import CategoryType, YearMonth


class FinanceError(Exception):
    """Base class of all rule failures"""


class MalformedCommand(FinanceError):
    """Wrong number or shape of command arguments"""


class InvalidCategoryName(FinanceError):
    """Category name is empty, too long or has forbidden characters"""

    def __init__(self, name: str):
        super().__init__(f"Invalid category name: {name!r}")
        self.name = name


class InvalidDateError(FinanceError):
    """Month or year argument cannot be parsed"""

    def __init__(self, value: str):
        super().__init__(f"Invalid date: {value!r}")
        self.value = value


class InvalidAmountError(FinanceError):
    """Amount is out of the accepted range"""


class PastPeriodError(FinanceError):
    """Target month is before the current month"""

    def __init__(self, year_month: YearMonth):
        super().__init__(f"{year_month} is in the past")
        self.year_month = year_month


class RangeInvertedError(FinanceError):
    """Start of a month range is after its end"""

    def __init__(self, start: YearMonth, end: YearMonth):
        super().__init__(f"Range start {start} is after end {end}")
        self.start = start
        self.end = end


# ==================== NOT FOUND ====================

class NotFoundError(FinanceError):
    """Requested record does not exist"""


class CategoryNotFound(NotFoundError):

    def __init__(self, category_type: CategoryType, name: str):
        super().__init__(f"Category {category_type.value} '{name}' not found")
        self.category_type = category_type
        self.name = name


class BudgetNotFound(NotFoundError):

    def __init__(self, year_month: YearMonth):
        super().__init__(f"Budget for {year_month} not found")
        self.year_month = year_month


# ==================== CONFLICTS ====================

class ConflictError(FinanceError):
    """Record with the same identity already exists"""


class CategoryConflict(ConflictError):

    def __init__(self, category_type: CategoryType, name: str):
        super().__init__(f"Category {category_type.value} '{name}' already exists")
        self.category_type = category_type
        self.name = name


class StandardCategoryConflict(CategoryConflict):
    """A standard category already has this name"""


class PersonalCategoryConflict(CategoryConflict):
    """A personal category already has this name"""


class BudgetAlreadyExists(ConflictError):

    def __init__(self, year_month: YearMonth):
        super().__init__(f"Budget for {year_month} already exists")
        self.year_month = year_month


# ==================== EMPTY RESULTS ====================

class EmptyResult(FinanceError):
    """Valid query without data; rendered as an informational message"""


class EmptyReport(EmptyResult):
    """No expenses in the requested month"""

    def __init__(self, year_month: Optional[YearMonth] = None):
        super().__init__(f"No expenses in {year_month}")
        self.year_month = year_month


class NoBudgets(EmptyResult):
    """No budget exists in the requested period"""
