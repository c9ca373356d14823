"""
Data models (dataclasses) for database entities
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class CategoryType(str, Enum):
    """Category / operation type"""
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def plural_label(self) -> str:
        """Label used in messages: 'категория доходов' / 'категория расходов'"""
        return "доходов" if self is CategoryType.INCOME else "расходов"


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month"""
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be in 1..12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year must be in 1..9999, got {self.year}")

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def current(cls) -> "YearMonth":
        return cls.from_date(date.today())

    def plus_months(self, months: int) -> "YearMonth":
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(index // 12, index % 12 + 1)

    def minus_months(self, months: int) -> "YearMonth":
        return self.plus_months(-months)

    def months_until(self, other: "YearMonth") -> int:
        """Number of months from self to other (negative if other is earlier)"""
        return (other.year - self.year) * 12 + (other.month - self.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def next_first_day(self) -> date:
        """First day of the following month (exclusive upper bound)"""
        if self.month == 12:
            return date(self.year + 1, 1, 1)
        return date(self.year, self.month + 1, 1)

    def contains(self, moment: Union[date, datetime]) -> bool:
        return (moment.year, moment.month) == (self.year, self.month)

    def __str__(self) -> str:
        return f"{self.month:02d}.{self.year:04d}"


@dataclass
class User:
    """User model"""
    id: Optional[int]
    telegram_user_id: int
    balance: Decimal = Decimal("0")
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Category:
    """Category model: either standard (no owner) or personal"""
    id: Optional[int]
    type: CategoryType
    name: str

    @property
    def is_standard(self) -> bool:
        return isinstance(self, StandardCategory)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StandardCategory(Category):
    """Category visible to every user"""


@dataclass(frozen=True)
class PersonalCategory(Category):
    """Category owned by one user"""
    owner_id: int = 0


@dataclass(frozen=True)
class Operation:
    """Recorded income or expense"""
    id: Optional[int]
    user_id: int
    category_id: int
    amount: Decimal
    created_at: datetime


@dataclass
class Budget:
    """Planned income and expenses of a user for one month"""
    id: Optional[int]
    user_id: int
    year_month: YearMonth
    expected_income: Decimal = Decimal("0")
    expected_expenses: Decimal = Decimal("0")

