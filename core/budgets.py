from datetime import date
from typing import Dict, Iterable, List, Mapping

from core.aggregation import expense_sums_by_category
from core.catalog import category_name, catalog_rank
from core.domain import Transaction, BudgetStatus
from core.filters import in_month

DEFAULT_ALERT_THRESHOLD = 80.0

EXCEEDED = "exceeded"
APPROACHING = "approaching"
OK = "ok"


def normalize_budgets(budgets: Mapping[str, float]) -> Dict[str, float]:
    """Drop entries with a limit of zero or less; they mean "no budget"."""
    return {cid: float(limit) for cid, limit in budgets.items() if limit > 0}


def evaluate_budgets(
    trans: Iterable[Transaction],
    budgets: Mapping[str, float],
    now: date,
) -> List[BudgetStatus]:
    """Current-month consumption of every budgeted category, worst first.

    A budgeted category with no spending this month still gets a row at 0%.
    Categories missing from the catalog are evaluated under the "unknown"
    name. Equal percentages keep catalog order.
    """
    limits = normalize_budgets(budgets)
    spent_by_category = expense_sums_by_category(filter(in_month(now), trans))

    statuses = []
    for cid in sorted(limits, key=catalog_rank):
        limit = limits[cid]
        spent = spent_by_category.get(cid, 0.0)
        statuses.append(BudgetStatus(
            category_id=cid,
            name=category_name(cid),
            limit=limit,
            spent=spent,
            percentage=spent / limit * 100,
            remaining=limit - spent,
        ))

    return sorted(statuses, key=lambda s: s.percentage, reverse=True)


def select_alerts(
    statuses: Iterable[BudgetStatus],
    threshold: float = DEFAULT_ALERT_THRESHOLD,
) -> List[BudgetStatus]:
    return [s for s in statuses if s.percentage >= threshold]


def alert_level(status: BudgetStatus, threshold: float = DEFAULT_ALERT_THRESHOLD) -> str:
    if status.exceeded:
        return EXCEEDED
    if status.percentage >= threshold:
        return APPROACHING
    return OK
