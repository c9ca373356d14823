"""
Application constants
"""

CURRENCY_SYMBOL = "руб."

CATEGORY_NAME_MAX_LENGTH = 64

# Allowed characters of a category name: Latin and Cyrillic letters, digits, space, hyphen
CATEGORY_NAME_PATTERN = r"^[A-Za-zА-Яа-яЁё0-9\- ]{1,%d}$" % CATEGORY_NAME_MAX_LENGTH

# Number of months shown by /budget_list without arguments
ROLLING_PERIOD_MONTHS = 12

# Standard categories, visible to every user
STANDARD_CATEGORIES = {
    "income": [
        "Зарплата",
        "Стипендия",
        "Подработка",
        "Подарки",
        "Проценты по вкладам",
    ],
    "expense": [
        "Продукты",
        "Кафе и рестораны",
        "Транспорт",
        "Такси",
        "Жильё",
        "Коммунальные платежи",
        "Связь и интернет",
        "Здоровье",
        "Одежда",
        "Развлечения",
        "Образование",
    ],
}
