"""Totals, category breakdowns and monthly series over a transaction snapshot.

All functions here are pure: the snapshot is only read, the result is freshly
built. Sums go through math.fsum so the result does not depend on the order
of the input.
"""
import math
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Tuple

from core.catalog import lookup, catalog_rank
from core.domain import (
    Transaction,
    Totals,
    CategoryBreakdown,
    MonthlySummary,
    INCOME,
    EXPENSE,
)


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def compute_totals(trans: Iterable[Transaction]) -> Totals:
    incomes: List[float] = []
    expenses: List[float] = []
    for t in trans:
        if t.type == INCOME:
            incomes.append(t.amount)
        elif t.type == EXPENSE:
            expenses.append(t.amount)

    income = math.fsum(incomes)
    expense = math.fsum(expenses)
    return Totals(income=income, expense=expense, balance=income - expense)


def expense_sums_by_category(trans: Iterable[Transaction]) -> Dict[str, float]:
    """Sum expense amounts per raw category id, resolvable or not."""
    buckets: Dict[str, List[float]] = defaultdict(list)
    for t in trans:
        if t.type == EXPENSE:
            buckets[t.category_id].append(t.amount)
    return {cid: math.fsum(amounts) for cid, amounts in buckets.items()}


def group_expenses_by_category(trans: Iterable[Transaction]) -> List[CategoryBreakdown]:
    """Expense totals per category, named and colored from the catalog.

    Buckets whose id is not in the catalog are left out. Entries come out in
    catalog order.
    """
    sums = expense_sums_by_category(trans)

    result: List[CategoryBreakdown] = []
    for cid in sorted(sums, key=catalog_rank):
        category = lookup(cid).get_or_else(None)
        if category is None:
            continue
        result.append(CategoryBreakdown(
            category_id=cid,
            name=category.name,
            value=sums[cid],
            color=category.color,
        ))
    return result


def group_transactions_by_month(trans: Iterable[Transaction]) -> List[MonthlySummary]:
    """Income and expense sums per calendar month, most recent month first."""
    buckets: Dict[str, Tuple[List[float], List[float]]] = defaultdict(lambda: ([], []))
    for t in trans:
        incomes, expenses = buckets[month_key(t.date)]
        if t.type == INCOME:
            incomes.append(t.amount)
        elif t.type == EXPENSE:
            expenses.append(t.amount)

    return [
        MonthlySummary(month_key=key, income=math.fsum(incomes), expense=math.fsum(expenses))
        for key, (incomes, expenses) in sorted(buckets.items(), reverse=True)
    ]
