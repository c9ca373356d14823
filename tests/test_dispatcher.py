"""
End-to-end command tests: dispatcher, handlers and in-memory storage
"""

from datetime import date
from decimal import Decimal

import pytest

from database.memory import MemoryStorage
from database.models import CategoryType, User, YearMonth
from finance.commands import CommandHandler, build_command_handlers
from finance.dispatcher import CommandDispatcher
from finance.messages import Messages

CHAT_ID = 1
TODAY = date(2023, 3, 15)


@pytest.fixture
def fixed_dispatcher(storage_provider) -> CommandDispatcher:
    """Dispatcher whose month-sensitive commands see TODAY"""
    return CommandDispatcher(build_command_handlers(lambda: TODAY), storage_provider)


class TestRouting:

    async def test_unknown_command(self, dispatcher, storage_provider):
        response = await dispatcher.handle_command(CHAT_ID, "unknown", [])

        assert response == Messages.COMMAND_NOT_FOUND
        assert storage_provider.counts()[0] == 0

    async def test_command_name_ignores_case(self, dispatcher):
        assert await dispatcher.handle_command(CHAT_ID, "HELP", []) == Messages.HELP

    async def test_start_creates_user(self, dispatcher, storage_provider):
        response = await dispatcher.handle_command(42, "start", [])

        assert response == Messages.WELCOME
        assert storage_provider.counts()[0] == 1

    async def test_user_created_once(self, dispatcher, storage_provider):
        await dispatcher.handle_command(42, "start", [])
        await dispatcher.handle_command(42, "help", [])

        assert storage_provider.counts()[0] == 1

    async def test_commands_registered(self, dispatcher):
        assert len(dispatcher.commands) == 18
        assert "budget_list" in dispatcher.commands

    async def test_unexpected_failure_rolls_back(self, storage_provider, user):
        class BrokenHandler(CommandHandler):
            async def handle(self, ctx):
                await ctx.storage.save_user(User(id=None, telegram_user_id=777))
                raise RuntimeError("boom")

        dispatcher = CommandDispatcher({"broken": BrokenHandler()}, storage_provider)
        before = storage_provider.counts()

        response = await dispatcher.handle_command(CHAT_ID, "broken", [])

        assert response == Messages.ERROR
        assert storage_provider.counts() == before


class TestBalanceAndOperations:

    async def test_set_balance(self, dispatcher, user, records):
        response = await dispatcher.handle_command(CHAT_ID, "set_balance", ["1500.5"])

        assert response == "Ваш баланс изменен. Теперь он составляет 1 500.50"
        assert (await records.reload(user)).balance == Decimal("1500.5")

    @pytest.mark.parametrize("args", [[], ["abc"], ["1", "2"]])
    async def test_set_balance_usage(self, dispatcher, user, args):
        assert await dispatcher.handle_command(CHAT_ID, "set_balance", args) == Messages.SET_BALANCE_USAGE

    async def test_add_expense(self, dispatcher, user, records):
        await records.category(CategoryType.EXPENSE, "Такси")

        response = await dispatcher.handle_command(CHAT_ID, "add_expense", ["40", "такси"])

        assert response == "Добавлен расход по категории 'Такси': 40\nТекущий баланс: 60"
        assert (await records.reload(user)).balance == Decimal("60")

    async def test_add_income_to_personal_category(self, dispatcher, user, records):
        await records.category(CategoryType.INCOME, "Подработка курьером", owner=user)

        response = await dispatcher.handle_command(CHAT_ID, "add_income", ["500", "Подработка", "курьером"])

        assert response == "Добавлен доход по категории 'Подработка курьером': 500\nТекущий баланс: 600"

    async def test_add_expense_unknown_category(self, dispatcher, user, records, storage_provider):
        response = await dispatcher.handle_command(CHAT_ID, "add_expense", ["40", "Кино"])

        assert response == (
            "Категория расходов 'Кино' не существует. "
            "Добавьте её командой /add_expense_category Кино"
        )
        assert storage_provider.counts()[3] == 0
        assert (await records.reload(user)).balance == Decimal("100")

    @pytest.mark.parametrize("amount", ["0", "-10"])
    async def test_add_expense_amount_not_positive(self, dispatcher, user, records, amount):
        await records.category(CategoryType.EXPENSE, "Такси")

        response = await dispatcher.handle_command(CHAT_ID, "add_expense", [amount, "Такси"])

        assert response == Messages.AMOUNT_MUST_BE_POSITIVE

    async def test_add_expense_below_one_kopeck(self, dispatcher, user, records, storage_provider):
        await records.category(CategoryType.EXPENSE, "Такси")

        response = await dispatcher.handle_command(CHAT_ID, "add_expense", ["0.001", "Такси"])

        assert response == Messages.AMOUNT_MUST_BE_POSITIVE
        assert storage_provider.counts()[3] == 0
        assert (await records.reload(user)).balance == Decimal("100")

    async def test_add_expense_rounded_to_kopecks(self, dispatcher, user, records):
        await records.category(CategoryType.EXPENSE, "Такси")

        response = await dispatcher.handle_command(CHAT_ID, "add_expense", ["10.506", "Такси"])

        assert response == "Добавлен расход по категории 'Такси': 10.51\nТекущий баланс: 89.49"
        assert (await records.reload(user)).balance == Decimal("89.49")

    @pytest.mark.parametrize("args", [[], ["100"], ["сто", "Такси"]])
    async def test_add_income_usage(self, dispatcher, user, args):
        response = await dispatcher.handle_command(CHAT_ID, "add_income", args)

        assert response == Messages.ADD_OPERATION_USAGE.format(command="add_income")


class TestCategoryCommands:

    async def test_add_category(self, dispatcher, user, records):
        response = await dispatcher.handle_command(CHAT_ID, "add_expense_category", ["кафе", "И", "бары"])

        assert response == "Категория расходов 'Кафе и бары' успешно добавлена"
        assert await records.find_category(user, CategoryType.EXPENSE, "Кафе и бары") is not None

    async def test_add_category_twice(self, dispatcher, user):
        await dispatcher.handle_command(CHAT_ID, "add_income_category", ["Фриланс"])

        response = await dispatcher.handle_command(CHAT_ID, "add_income_category", ["фриланс"])

        assert response == "Пользовательская категория доходов 'Фриланс' уже существует."

    async def test_add_category_named_like_standard(self, dispatcher, user, records):
        await records.category(CategoryType.EXPENSE, "Такси")

        response = await dispatcher.handle_command(CHAT_ID, "add_expense_category", ["ТАКСИ"])

        assert response == "Стандартная категория расходов 'Такси' уже существует."

    async def test_add_category_invalid_name(self, dispatcher, user, storage_provider):
        before = storage_provider.counts()

        response = await dispatcher.handle_command(CHAT_ID, "add_expense_category", ["Кафе!"])

        assert response == Messages.INVALID_CATEGORY_NAME
        assert storage_provider.counts() == before

    async def test_add_category_without_name(self, dispatcher, user):
        response = await dispatcher.handle_command(CHAT_ID, "add_expense_category", [])

        assert response == Messages.CATEGORY_NAME_USAGE

    async def test_remove_category(self, dispatcher, user, records):
        category = await records.category(CategoryType.EXPENSE, "Кафе", owner=user)
        await records.operation(user, category, 100)

        response = await dispatcher.handle_command(CHAT_ID, "remove_expense_category", ["кафе"])

        assert response == "Пользовательская категория расходов 'Кафе' успешно удалена"
        assert await records.find_category(user, CategoryType.EXPENSE, "Кафе") is None

    async def test_remove_standard_category(self, dispatcher, user, records):
        await records.category(CategoryType.EXPENSE, "Такси")

        response = await dispatcher.handle_command(CHAT_ID, "remove_expense_category", ["Такси"])

        assert response == "Пользовательской категории расходов 'Такси' не существует!"
        assert await records.find_category(None, CategoryType.EXPENSE, "Такси") is not None

    async def test_list_expense_categories(self, dispatcher, user, records):
        await records.category(CategoryType.EXPENSE, "Такси")
        await records.category(CategoryType.EXPENSE, "Продукты")
        await records.category(CategoryType.EXPENSE, "Кафе", owner=user)

        response = await dispatcher.handle_command(CHAT_ID, "list_expense_categories", [])

        assert response == (
            "Все доступные вам категории расходов:\n"
            "Стандартные:\n"
            "1. Такси\n"
            "2. Продукты\n"
            "Персональные:\n"
            "1. Кафе\n"
        )

    async def test_list_categories_both_types(self, dispatcher, user, records):
        await records.category(CategoryType.INCOME, "Зарплата")

        response = await dispatcher.handle_command(CHAT_ID, "list_categories", [])

        assert response == (
            "Все доступные вам категории доходов:\n"
            "Стандартные:\n"
            "1. Зарплата\n"
            "Персональные:\n"
            "Нет категорий\n"
            "\n"
            "Все доступные вам категории расходов:\n"
            "Стандартные:\n"
            "Нет категорий\n"
            "Персональные:\n"
            "Нет категорий\n"
        )


class TestReportExpense:

    async def test_report(self, dispatcher, user, records, current_month):
        await records.category(CategoryType.EXPENSE, "Такси")
        for amount in (100, 200, 300, 400, 500):
            await dispatcher.handle_command(CHAT_ID, "add_expense", [str(amount), "Такси"])

        response = await dispatcher.handle_command(CHAT_ID, "report_expense", [str(current_month)])

        assert response == (
            "Подготовил отчёт по вашим расходам за указанный месяц:\n"
            "Такси: 1 500 руб.\n"
        )

    async def test_report_of_other_month(self, dispatcher, user, records, current_month):
        taxi = await records.category(CategoryType.EXPENSE, "Такси")
        await records.operation(user, taxi, 100)

        response = await dispatcher.handle_command(
            CHAT_ID, "report_expense", [str(current_month.minus_months(1))]
        )

        assert response == Messages.EXPENSES_NOT_EXIST

    @pytest.mark.parametrize("value", ["13.2023", "1.2023", "01.23", "abc"])
    async def test_invalid_date(self, dispatcher, user, value):
        response = await dispatcher.handle_command(CHAT_ID, "report_expense", [value])

        assert response == Messages.INCORRECT_REPORT_DATE

    @pytest.mark.parametrize("args", [[], ["01.2023", "02.2023"]])
    async def test_usage(self, dispatcher, user, args):
        assert await dispatcher.handle_command(CHAT_ID, "report_expense", args) == Messages.REPORT_EXPENSE_USAGE


class TestBudgetCommands:

    async def test_create(self, fixed_dispatcher, user, records):
        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_create", ["04.2023", "100000", "80000"])

        assert response == "Бюджет на Апрель 2023 создан.\nОжидаемые доходы: 100 000\nОжидаемые расходы: 80 000"
        assert await records.find_budget(user, YearMonth(2023, 4)) is not None

    async def test_create_existing(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2023, 4), 1, 1)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_create", ["04.2023", "100000", "80000"])

        assert response == Messages.BUDGET_ALREADY_EXISTS.format(month="Апрель 2023")

    @pytest.mark.parametrize("args, expected", [
        (["04.2023", "-1", "10"], Messages.BUDGET_NEGATIVE_AMOUNT),
        (["4.2023", "1", "10"], Messages.INCORRECT_BUDGET_DATE),
        (["04.2023", "много", "10"], Messages.BUDGET_CREATE_USAGE),
        (["04.2023", "10"], Messages.BUDGET_CREATE_USAGE),
    ])
    async def test_create_rejected(self, fixed_dispatcher, user, records, args, expected):
        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_create", args)

        assert response == expected
        assert await records.find_budget(user, YearMonth(2023, 4)) is None

    async def test_set_income(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2023, 3), 10, 20)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_set_income", ["03.2023", "5000"])

        assert response == "Бюджет на Март 2023 изменен:\nОжидаемые доходы: 5 000\nОжидаемые расходы: 20"

    async def test_set_expenses(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2023, 5), 10, 20)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_set_expenses", ["05.2023", "750.25"])

        assert response == "Бюджет на Май 2023 изменен:\nОжидаемые доходы: 10\nОжидаемые расходы: 750.25"

    @pytest.mark.parametrize("args, expected", [
        (["02.2023", "100"], Messages.BUDGET_PAST_PERIOD),
        (["02.2023", "0"], Messages.BUDGET_PAST_PERIOD),
        (["03.2023", "0"], Messages.AMOUNT_MUST_BE_POSITIVE),
        (["04.2023", "100"], Messages.BUDGET_NOT_FOUND),
        (["2.2023", "100"], Messages.INCORRECT_BUDGET_DATE),
        (["03.2023"], Messages.BUDGET_EDIT_USAGE),
        (["03.2023", "сто"], Messages.BUDGET_EDIT_USAGE),
    ])
    async def test_set_income_rejected(self, fixed_dispatcher, user, records, args, expected):
        await records.budget(user, YearMonth(2023, 2), 10, 20)
        await records.budget(user, YearMonth(2023, 3), 10, 20)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_set_income", args)

        assert response == expected
        assert (await records.find_budget(user, YearMonth(2023, 2))).expected_income == Decimal("10")
        assert (await records.find_budget(user, YearMonth(2023, 3))).expected_income == Decimal("10")

    async def test_set_income_below_one_kopeck(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2023, 3), 10, 20)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_set_income", ["03.2023", "0.004"])

        assert response == Messages.AMOUNT_MUST_BE_POSITIVE
        assert (await records.find_budget(user, YearMonth(2023, 3))).expected_income == Decimal("10")

    async def test_status(self, fixed_dispatcher, user, records):
        taxi = await records.category(CategoryType.EXPENSE, "Такси")
        await records.budget(user, YearMonth(2023, 3), 100000, 80000)
        await records.operation(user, taxi, 300, YearMonth(2023, 3))

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget", [])

        assert response == (
            "Бюджет на Март 2023:\n"
            "Ожидание: + 100 000 | - 80 000\n"
            "Реальность: + 0 | - 300\n"
            "Осталось потратить: 79 700"
        )

    async def test_status_without_budget(self, fixed_dispatcher, user):
        assert await fixed_dispatcher.handle_command(CHAT_ID, "budget", []) == Messages.BUDGET_NOT_FOUND


class TestBudgetList:

    async def test_rolling(self, fixed_dispatcher, user, records):
        taxi = await records.category(CategoryType.EXPENSE, "Такси")
        await records.budget(user, YearMonth(2023, 1), 100000, 80000)
        await records.operation(user, taxi, 1500, YearMonth(2023, 1))

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", [])

        assert response == (
            "Ваши запланированные доходы и расходы по месяцам:\n"
            "Январь 2023:\n"
            "Ожидание: + 100 000 | - 80 000\n"
            "Реальность: + 0 | - 1 500\n\n"
            + Messages.BUDGET_LIST_FOOTER_ROLLING
        )

    async def test_rolling_excludes_thirteenth_month(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2022, 3), 1, 1)
        await records.budget(user, YearMonth(2022, 4), 2, 2)
        await records.budget(user, YearMonth(2023, 3), 3, 3)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", [])

        assert "Март 2022" not in response
        assert response.index("Апрель 2022") < response.index("Март 2023")

    async def test_year(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2022, 12), 1000, 500)
        await records.budget(user, YearMonth(2023, 1), 1, 1)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", ["2022"])

        assert response == (
            "Ваши запланированные доходы и расходы по месяцам:\n"
            "Декабрь 2022:\n"
            "Ожидание: + 1 000 | - 500\n"
            "Реальность: + 0 | - 0\n\n"
            "Данные показаны за 2022 год."
        )

    async def test_range(self, fixed_dispatcher, user, records):
        await records.budget(user, YearMonth(2022, 11), 1, 2)
        await records.budget(user, YearMonth(2023, 1), 3, 4)
        await records.budget(user, YearMonth(2023, 2), 5, 6)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", ["11.2022", "01.2023"])

        assert "Февраль 2023" not in response
        assert response.index("Ноябрь 2022") < response.index("Январь 2023")
        assert response.endswith("Данные показаны за 3 месяц(-ев).")

    @pytest.mark.parametrize("args, expected", [
        (["2022"], Messages.NO_BUDGETS),
        (["22"], Messages.INCORRECT_BUDGET_YEAR),
        (["٢٠٢٢"], Messages.INCORRECT_BUDGET_YEAR),
        (["12.2022"], Messages.INCORRECT_BUDGET_DATE),
        (["10.22", "01.2023"], Messages.INCORRECT_BUDGET_DATE),
        (["02.2023", "01.2023"], Messages.RANGE_INVERTED),
        (["03.2023", "1", "1", "1"], Messages.BUDGET_LIST_USAGE),
    ])
    async def test_rejected(self, fixed_dispatcher, user, args, expected):
        assert await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", args) == expected

    async def test_no_budgets_with_operations(self, fixed_dispatcher, user, records):
        taxi = await records.category(CategoryType.EXPENSE, "Такси")
        await records.operation(user, taxi, 100, YearMonth(2023, 3))

        assert await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", []) == Messages.NO_BUDGETS

    async def test_widest_range_reads_budgets_once(self, fixed_dispatcher, user, records, monkeypatch):
        await records.budget(user, YearMonth(2023, 3), 3, 3)

        async def lookup_per_month(*args, **kwargs):
            raise AssertionError("budget looked up month by month")

        monkeypatch.setattr(MemoryStorage, "find_budget", lookup_per_month)

        response = await fixed_dispatcher.handle_command(CHAT_ID, "budget_list", ["01.0001", "12.9999"])

        assert "Март 2023" in response
        assert response.endswith("Данные показаны за 119988 месяц(-ев).")
