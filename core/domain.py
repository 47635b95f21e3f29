from dataclasses import dataclass
from datetime import date
from typing import Literal, Optional, Tuple

INCOME = "income"
EXPENSE = "expense"

TransactionType = Literal["income", "expense"]


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    color: str       # hex color token, e.g. "#EF4444"
    type: str        # INCOME or EXPENSE


@dataclass(frozen=True)
class Transaction:
    id: str
    type: TransactionType         # fixed for the lifetime of the transaction
    category_id: str              # not checked against the catalog
    amount: float                 # non-negative
    date: date
    description: str = ""
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Totals:
    income: float
    expense: float
    balance: float


@dataclass(frozen=True)
class CategoryBreakdown:
    category_id: str
    name: str
    value: float
    color: str


@dataclass(frozen=True)
class MonthlySummary:
    month_key: str   # "YYYY-MM"
    income: float
    expense: float


@dataclass(frozen=True)
class DashboardStats:
    total_transactions: int
    largest_expense_category_id: Optional[str]
    largest_expense_category: str
    highest_income_amount: float
    current_month_savings_percentage: float


@dataclass(frozen=True)
class BudgetStatus:
    category_id: str
    name: str
    limit: float
    spent: float
    percentage: float
    remaining: float   # negative once the limit is exceeded

    @property
    def exceeded(self) -> bool:
        return self.percentage > 100
