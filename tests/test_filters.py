from datetime import date, datetime

from core.domain import INCOME, EXPENSE
from core.filters import by_type, by_category, in_month, by_date_range
from conftest import make_tx


def test_by_type():
    t1 = make_tx("t1", INCOME, "salary", 100.0, date(2024, 5, 1))
    t2 = make_tx("t2", EXPENSE, "food", 50.0, date(2024, 5, 2))
    result = list(filter(by_type(EXPENSE), [t1, t2]))
    assert [t.id for t in result] == ["t2"]


def test_by_category():
    t1 = make_tx("t1", EXPENSE, "food", 1000.0, date(2024, 5, 1))
    t2 = make_tx("t2", EXPENSE, "transport", 500.0, date(2024, 5, 2))
    result = list(filter(by_category("food"), [t1, t2]))
    assert len(result) == 1
    assert result[0].id == "t1"


def test_in_month_matches_month_and_year():
    t1 = make_tx("t1", EXPENSE, "food", 10.0, date(2024, 5, 31))
    t2 = make_tx("t2", EXPENSE, "food", 10.0, date(2023, 5, 15))
    t3 = make_tx("t3", EXPENSE, "food", 10.0, date(2024, 6, 1))
    result = list(filter(in_month(date(2024, 5, 1)), [t1, t2, t3]))
    assert [t.id for t in result] == ["t1"]


def test_in_month_accepts_datetime():
    t1 = make_tx("t1", EXPENSE, "food", 10.0, date(2024, 5, 31))
    assert in_month(datetime(2024, 5, 1, 23, 59))(t1)


def test_by_date_range_inclusive():
    t1 = make_tx("t1", EXPENSE, "food", 10.0, date(2024, 1, 1))
    t2 = make_tx("t2", EXPENSE, "food", 10.0, date(2023, 12, 31))
    result = list(filter(by_date_range(date(2024, 1, 1), date(2024, 12, 31)), [t1, t2]))
    assert [t.id for t in result] == ["t1"]
