from datetime import date
from typing import Iterable

from core.aggregation import compute_totals, expense_sums_by_category
from core.catalog import category_name, catalog_rank
from core.domain import Transaction, DashboardStats, INCOME
from core.filters import in_month
from core.functional import pipe

NO_CATEGORY = "none"


def savings_percentage(income: float, expense: float) -> float:
    if income == 0:
        return 0.0
    return (income - expense) / income * 100


def compute_dashboard_stats(trans: Iterable[Transaction], now: date) -> DashboardStats:
    """Single-value dashboard metrics.

    `now` picks the current month for the savings rate; it is never read
    from the clock here. A savings rate below zero means the month's
    spending exceeded its income and is reported as is.
    """
    trans = tuple(trans)

    sums = expense_sums_by_category(trans)
    largest_id = None
    if sums:
        # max() keeps the first of equal sums, so catalog order breaks ties
        largest_id = max(sorted(sums, key=catalog_rank), key=lambda cid: sums[cid])

    highest_income = max((t.amount for t in trans if t.type == INCOME), default=0.0)

    month = pipe(trans, lambda ts: filter(in_month(now), ts), compute_totals)

    return DashboardStats(
        total_transactions=len(trans),
        largest_expense_category_id=largest_id,
        largest_expense_category=category_name(largest_id) if largest_id is not None else NO_CATEGORY,
        highest_income_amount=float(highest_income),
        current_month_savings_percentage=savings_percentage(month.income, month.expense),
    )
