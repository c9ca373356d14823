"""
Utility functions
"""

import re
from typing import Optional, Sequence
from decimal import Decimal, InvalidOperation

from shared.constants import CURRENCY_SYMBOL


def format_amount(amount: Decimal, with_currency: bool = False) -> str:
    """
    Format amount for display

    Whole amounts are printed without a fractional part.

    Args:
        amount: Amount to format
        with_currency: Include currency symbol

    Returns:
        Formatted string (e.g., "1 500" or "1 500.50 руб.")
    """
    amount = Decimal(amount)

    if amount == amount.to_integral_value():
        formatted = f"{int(amount):,}".replace(",", " ")
    else:
        formatted = f"{amount:,.2f}".replace(",", " ")

    if with_currency:
        return f"{formatted} {CURRENCY_SYMBOL}"

    return formatted


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse amount from text

    The sign is kept; callers decide which amounts are acceptable.
    Amounts are rounded to kopecks, so "0.001" becomes 0.00.

    Args:
        text: Text containing amount ("1500", "1500.50", "1500,50")

    Returns:
        Parsed amount or None if the text is not a finite number
    """
    cleaned = re.sub(r'[₽\s]', '', text).replace(',', '.')

    if not re.fullmatch(r'[-+]?[0-9]+(\.[0-9]+)?', cleaned):
        return None

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return None

    if abs(amount) > 1_000_000_000_000:
        return None

    return round(amount, 2)


def join_words(args: Sequence[str]) -> str:
    """
    Join command arguments into one phrase, collapsing whitespace

    Args:
        args: Command arguments

    Returns:
        Joined phrase, empty if every argument is blank
    """
    return " ".join(word.strip() for word in args if word.strip())


def get_month_name(month: int) -> str:
    """
    Get Russian month name

    Args:
        month: Month number (1-12)

    Returns:
        Month name in Russian
    """
    month_names = {
        1: 'Январь', 2: 'Февраль', 3: 'Март', 4: 'Апрель',
        5: 'Май', 6: 'Июнь', 7: 'Июль', 8: 'Август',
        9: 'Сентябрь', 10: 'Октябрь', 11: 'Ноябрь', 12: 'Декабрь'
    }
    return month_names.get(month, 'Неизвестно')
