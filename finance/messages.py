"""
Response texts
"""


class Messages:
    """Bot response templates"""

    WELCOME = (
        "Добро пожаловать в бота для учёта финансов!\n"
        "Записывайте доходы и расходы, планируйте бюджет и смотрите отчёты.\n"
        "Список команд: /help"
    )

    HELP = (
        "Доступные команды:\n"
        "/set_balance [сумма] - установить текущий баланс\n"
        "/add_income [сумма] [категория] - добавить доход\n"
        "/add_expense [сумма] [категория] - добавить расход\n"
        "/add_income_category [название] - добавить категорию доходов\n"
        "/add_expense_category [название] - добавить категорию расходов\n"
        "/remove_income_category [название] - удалить категорию доходов\n"
        "/remove_expense_category [название] - удалить категорию расходов\n"
        "/list_categories - все доступные категории\n"
        "/list_income_categories - категории доходов\n"
        "/list_expense_categories - категории расходов\n"
        "/report_expense [mm.yyyy] - отчёт по расходам за месяц\n"
        "/budget - бюджет на текущий месяц\n"
        "/budget_create [mm.yyyy] [ожидаемый доход] [ожидаемые расходы] - создать бюджет\n"
        "/budget_set_income [mm.yyyy] [сумма] - изменить ожидаемый доход\n"
        "/budget_set_expenses [mm.yyyy] [сумма] - изменить ожидаемые расходы\n"
        "/budget_list - бюджеты за последние 12 месяцев"
    )

    COMMAND_NOT_FOUND = "Команда не распознана. Список доступных команд: /help"

    ERROR = "❌ Произошла ошибка при обработке команды. Попробуйте ещё раз позже."

    # ==================== BALANCE & OPERATIONS ====================

    SET_BALANCE_USAGE = "Команда введена неверно! Введите /set_balance [новый баланс]"

    SET_BALANCE_DONE = "Ваш баланс изменен. Теперь он составляет {balance}"

    ADD_OPERATION_USAGE = (
        "Данная команда принимает аргументы: [сумма] [название категории]. "
        "Например: /{command} 500 Такси"
    )

    AMOUNT_MUST_BE_POSITIVE = "Все суммы должны быть больше нуля!"

    OPERATION_CATEGORY_NOT_FOUND = (
        "Категория {type} '{name}' не существует. "
        "Добавьте её командой /add_{kind}_category {name}"
    )

    INCOME_ADDED = "Добавлен доход по категории '{category}': {amount}\nТекущий баланс: {balance}"

    EXPENSE_ADDED = "Добавлен расход по категории '{category}': {amount}\nТекущий баланс: {balance}"

    # ==================== CATEGORIES ====================

    CATEGORY_NAME_USAGE = "Данная команда принимает [название категории] в одно или несколько слов."

    INVALID_CATEGORY_NAME = (
        "Название категории введено неверно. Оно может содержать от 1 до 64 символов "
        "латиницы, кириллицы, цифр, тире и пробелов"
    )

    CATEGORY_ADDED = "Категория {type} '{name}' успешно добавлена"

    STANDARD_CATEGORY_EXISTS = "Стандартная категория {type} '{name}' уже существует."

    PERSONAL_CATEGORY_EXISTS = "Пользовательская категория {type} '{name}' уже существует."

    CATEGORY_REMOVED = "Пользовательская категория {type} '{name}' успешно удалена"

    CATEGORY_NOT_EXISTS = "Пользовательской категории {type} '{name}' не существует!"

    CATEGORY_LIST = "Все доступные вам категории {type}:\nСтандартные:\n{standard}\nПерсональные:\n{personal}\n"

    CATEGORY_LIST_EMPTY = "Нет категорий"

    # ==================== EXPENSE REPORT ====================

    REPORT_EXPENSE_USAGE = 'Команда /report_expense принимает 1 аргумент [mm.yyyy], например "/report_expense 11.2023"'

    INCORRECT_REPORT_DATE = (
        "Переданы неверные данные месяца и года.\n"
        'Дата должна быть передана в виде "MM.YYYY", например, "11.2023".'
    )

    REPORT_EXPENSE_HEADER = "Подготовил отчёт по вашим расходам за указанный месяц:\n"

    REPORT_EXPENSE_LINE = "{category}: {amount}\n"

    EXPENSES_NOT_EXIST = "Расходы за указанный месяц отсутствуют."

    # ==================== BUDGETS ====================

    BUDGET_CREATE_USAGE = (
        "Неверно введена команда! Введите "
        "/budget_create [mm.yyyy - месяц.год] [ожидаемый доход] [ожидаемый расходы]"
    )

    BUDGET_EDIT_USAGE = (
        "Неверно введена команда! Введите "
        "/budget_set_[income/expenses] [mm.yyyy - месяц.год] [ожидаемый доход/расход]"
    )

    BUDGET_LIST_USAGE = (
        "Неверно введена команда! Введите\n"
        "или /budget_list - вывод бюджетов за 12 месяцев (текущий + предыдущие),\n"
        "или /budget_list [год] - вывод бюджетов за определенный год,\n"
        "или /budget_list [mm.yyyy - месяц.год] [mm.yyyy - месяц.год] - вывод бюджетов за указанный промежуток."
    )

    INCORRECT_BUDGET_DATE = "Дата введена неверно! Введите ее в формате [mm.yyyy - месяц.год]"

    INCORRECT_BUDGET_YEAR = "Год введен неверно! Введите его в формате [yyyy], например /budget_list 2022"

    BUDGET_NEGATIVE_AMOUNT = "Суммы бюджета не могут быть отрицательными!"

    BUDGET_CREATED = (
        "Бюджет на {month} создан.\n"
        "Ожидаемые доходы: {expected_income}\n"
        "Ожидаемые расходы: {expected_expenses}"
    )

    BUDGET_ALREADY_EXISTS = (
        "Бюджет на {month} уже существует! Измените его командой "
        "/budget_set_[income/expenses] [mm.yyyy - месяц.год] [ожидаемый доход/расход]"
    )

    BUDGET_EDITED = (
        "Бюджет на {month} изменен:\n"
        "Ожидаемые доходы: {expected_income}\n"
        "Ожидаемые расходы: {expected_expenses}"
    )

    BUDGET_PAST_PERIOD = "Вы не можете изменять бюджеты за прошедшие месяцы!"

    BUDGET_NOT_FOUND = (
        "Бюджет на этот период не найден! Создайте его командой "
        "/budget_create [mm.yyyy - месяц.год] [ожидаемый доход] [ожидаемый расходы]"
    )

    BUDGET_STATUS = (
        "Бюджет на {month}:\n"
        "Ожидание: + {expected_income} | - {expected_expenses}\n"
        "Реальность: + {actual_income} | - {actual_expenses}\n"
        "Осталось потратить: {remaining}"
    )

    BUDGET_LIST_HEADER = "Ваши запланированные доходы и расходы по месяцам:\n"

    BUDGET_LIST_MONTH = (
        "{month}:\n"
        "Ожидание: + {expected_income} | - {expected_expenses}\n"
        "Реальность: + {actual_income} | - {actual_expenses}\n\n"
    )

    BUDGET_LIST_FOOTER_ROLLING = (
        "Данные показаны за последние 12 месяцев. Чтобы посмотреть данные, например, "
        "за 2022, введите /budget_list 2022.\n"
        "Для показа данных по определенным месяцам, например, с ноября 2022 по январь 2023 введите "
        "/budget_list 11.2022 01.2023"
    )

    BUDGET_LIST_FOOTER_YEAR = "Данные показаны за {year} год."

    BUDGET_LIST_FOOTER_RANGE = "Данные показаны за {count} месяц(-ев)."

    NO_BUDGETS = (
        "У вас не было бюджетов за этот период. Для создания бюджета введите "
        "/budget_create [mm.yyyy - месяц.год] [ожидаемый доход] [ожидаемый расходы]"
    )

    RANGE_INVERTED = "Дата начала не может быть позднее даты конца периода!"
