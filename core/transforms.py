import json
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from uuid import uuid4

from core.catalog import lookup
from core.domain import Transaction, INCOME, EXPENSE
from core.functional import Either, Left, Right, Maybe, Some, Nothing

logger = logging.getLogger(__name__)


def new_transaction(
    t_type: str,
    category_id: str,
    amount: float,
    t_date: date,
    description: str = "",
    tags: Tuple[str, ...] = (),
    t_id: Optional[str] = None,
) -> Transaction:
    return Transaction(
        id=t_id or uuid4().hex,
        type=t_type,
        category_id=category_id,
        amount=float(amount),
        date=t_date,
        description=description,
        tags=tuple(tags),
    )


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    # newest first
    return (t,) + tuple(trans)


def delete_transaction(
    trans: Tuple[Transaction, ...], transaction_id: str
) -> Tuple[Transaction, ...]:
    return tuple(t for t in trans if t.id != transaction_id)


def set_budget(
    budgets: Mapping[str, float], category_id: str, limit: float
) -> Dict[str, float]:
    """Return a new budget mapping; a limit of zero or less removes the entry."""
    updated = {cid: value for cid, value in budgets.items() if cid != category_id}
    if limit > 0:
        updated[category_id] = float(limit)
    return updated


def income_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.type == INCOME, trans))


def expense_transactions(trans: Tuple[Transaction, ...]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.type == EXPENSE, trans))


def _parse_date(value: Any) -> Maybe[date]:
    if isinstance(value, datetime):
        return Some(value.date())
    if isinstance(value, date):
        return Some(value)
    try:
        return Some(date.fromisoformat(str(value)[:10]))
    except ValueError:
        return Nothing()


def _check_type(fields: dict) -> Either[dict, dict]:
    t_type = fields.get("type")
    if t_type not in (INCOME, EXPENSE):
        return Left({
            "error": "invalid_type",
            "message": f"Transaction type must be '{INCOME}' or '{EXPENSE}', got {t_type!r}",
            "type": t_type,
        })
    return Right(fields)


def _check_amount(fields: dict) -> Either[dict, dict]:
    try:
        amount = float(fields.get("amount"))
    except (TypeError, ValueError):
        amount = math.nan
    if not math.isfinite(amount) or amount <= 0:
        return Left({
            "error": "invalid_amount",
            "message": "Amount must be a positive number",
            "amount": fields.get("amount"),
        })
    return Right({**fields, "amount": amount})


def _check_date(fields: dict) -> Either[dict, dict]:
    return _parse_date(fields.get("date")).map(
        lambda d: Right({**fields, "date": d})
    ).get_or_else(Left({
        "error": "invalid_date",
        "message": f"Cannot read date {fields.get('date')!r}",
        "date": fields.get("date"),
    }))


def _check_category(fields: dict) -> Either[dict, dict]:
    category_id = fields.get("category_id", "")

    def _matches_type(category) -> Either[dict, dict]:
        if category.type != fields["type"]:
            return Left({
                "error": "category_type_mismatch",
                "message": f"{category.type.capitalize()} category {category.name} cannot be used for {fields['type']}",
                "category_type": category.type,
                "type": fields["type"],
            })
        return Right(fields)

    return lookup(category_id).map(_matches_type).get_or_else(Left({
        "error": "category_not_found",
        "message": f"Category with ID {category_id} does not exist",
        "category_id": category_id,
    }))


def validate_transaction(fields: Mapping[str, Any]) -> Either[dict, Transaction]:
    """Check raw form input before it becomes a Transaction.

    Expected keys: type, category_id, amount, date, and optionally id,
    description and tags. Checks run in that order and stop at the first
    failure. Returns Right(Transaction) or Left(error dict).
    """
    return (
        _check_type(dict(fields))
        .bind(_check_amount)
        .bind(_check_date)
        .bind(_check_category)
        .map(lambda f: new_transaction(
            f["type"],
            f["category_id"],
            f["amount"],
            f["date"],
            description=(f.get("description") or "").strip(),
            tags=tuple(f.get("tags") or ()),
            t_id=str(f["id"]) if f.get("id") else None,
        ))
    )


def transaction_to_dict(t: Transaction) -> Dict[str, Any]:
    return {
        "id": t.id,
        "type": t.type,
        "category_id": t.category_id,
        "amount": t.amount,
        "date": t.date.isoformat(),
        "description": t.description,
        "tags": list(t.tags),
    }


def transaction_from_dict(data: Mapping[str, Any]) -> Transaction:
    """Rebuild a stored transaction. Raises KeyError/ValueError on bad records."""
    t_type = data["type"]
    if t_type not in (INCOME, EXPENSE):
        raise ValueError(f"unknown transaction type {t_type!r}")
    return Transaction(
        id=str(data["id"]),
        type=t_type,
        category_id=data["category_id"],
        amount=float(data["amount"]),
        date=date.fromisoformat(str(data["date"])[:10]),
        description=data.get("description") or "",
        tags=tuple(data.get("tags") or ()),
    )


def load_seed(
    path: Union[str, Path],
) -> Tuple[Tuple[Transaction, ...], Dict[str, float]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    transactions = tuple(transaction_from_dict(t) for t in data.get("transactions", []))
    budgets = {cid: float(limit) for cid, limit in data.get("budgets", {}).items() if limit > 0}

    logger.info("Loaded %d seed transactions from %s", len(transactions), path)
    return transactions, budgets
