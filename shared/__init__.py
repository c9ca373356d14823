"""
Shared Module
Common utilities, configuration, and constants
"""

from .config import settings
from .constants import STANDARD_CATEGORIES, CURRENCY_SYMBOL
from .logger import setup_logging
from .utils import format_amount, parse_amount, join_words, get_month_name

__version__ = "1.0.0"

__all__ = [
    "settings",
    "STANDARD_CATEGORIES",
    "CURRENCY_SYMBOL",
    "setup_logging",
    "format_amount",
    "parse_amount",
    "join_words",
    "get_month_name"
]
