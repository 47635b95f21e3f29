"""Static income and expense category tables.

The catalog is compiled in and never changes at runtime. Ids are unique
across both tables, so a single lookup covers income and expense.
"""
from typing import Dict, Tuple

from core.domain import Category, INCOME, EXPENSE
from core.functional import Maybe, Some, Nothing

UNKNOWN_CATEGORY = "unknown"
UNKNOWN_COLOR = "#9CA3AF"

INCOME_CATEGORIES: Tuple[Category, ...] = (
    Category("salary", "Salary", "#10B981", INCOME),
    Category("freelance", "Freelance", "#34D399", INCOME),
    Category("investment", "Investment", "#6EE7B7", INCOME),
    Category("other_income", "Other income", "#A7F3D0", INCOME),
)

EXPENSE_CATEGORIES: Tuple[Category, ...] = (
    Category("food", "Food", "#EF4444", EXPENSE),
    Category("housing", "Housing", "#F87171", EXPENSE),
    Category("transport", "Transport", "#F97316", EXPENSE),
    Category("entertainment", "Entertainment", "#FBBF24", EXPENSE),
    Category("health", "Health", "#3B82F6", EXPENSE),
    Category("shopping", "Shopping", "#A855F7", EXPENSE),
    Category("education", "Education", "#8B5CF6", EXPENSE),
    Category("bills", "Bills", "#6366F1", EXPENSE),
    Category("debts", "Debts", "#EC4899", EXPENSE),
    Category("investment_expense", "Investments", "#14B8A6", EXPENSE),
    Category("leisure", "Leisure", "#D97706", EXPENSE),
    Category("other_expense", "Other expenses", "#6B7280", EXPENSE),
)

_BY_ID: Dict[str, Category] = {c.id: c for c in INCOME_CATEGORIES + EXPENSE_CATEGORIES}


def lookup(category_id: str) -> Maybe[Category]:
    category = _BY_ID.get(category_id)
    if category is None:
        return Nothing()
    return Some(category)


def category_name(category_id: str) -> str:
    return lookup(category_id).map(lambda c: c.name).get_or_else(UNKNOWN_CATEGORY)


def categories_for(t_type: str) -> Tuple[Category, ...]:
    if t_type == INCOME:
        return INCOME_CATEGORIES
    if t_type == EXPENSE:
        return EXPENSE_CATEGORIES
    return ()


def catalog_rank(category_id: str) -> Tuple[int, str]:
    """Sort key placing catalog ids in catalog order, unknown ids after them."""
    ordered = INCOME_CATEGORIES + EXPENSE_CATEGORIES
    for idx, c in enumerate(ordered):
        if c.id == category_id:
            return idx, ""
    return len(ordered), category_id
