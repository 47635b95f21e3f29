from datetime import date

from core.domain import Transaction


def by_type(t_type: str):
    def _filter(t: Transaction) -> bool:
        return t.type == t_type

    return _filter


def by_category(category_id: str):
    def _filter(t: Transaction) -> bool:
        return t.category_id == category_id

    return _filter


def in_month(moment: date):
    """Match transactions in the same calendar month and year as `moment`."""
    def _filter(t: Transaction) -> bool:
        return t.date.year == moment.year and t.date.month == moment.month

    return _filter


def by_date_range(start: date, end: date):
    def _filter(t: Transaction) -> bool:
        return start <= t.date <= end

    return _filter
