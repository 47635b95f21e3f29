import random
from datetime import date

import pytest

from core.domain import Transaction, INCOME, EXPENSE


def make_tx(id, t_type, cat_id, amount, d, description=""):
    return Transaction(id=id, type=t_type, category_id=cat_id, amount=amount, date=d, description=description)


@pytest.fixture
def now():
    return date(2024, 3, 15)


@pytest.fixture
def sample():
    return (
        make_tx("t1", INCOME, "salary", 5000.0, date(2024, 3, 1), "Salary"),
        make_tx("t2", EXPENSE, "food", 300.0, date(2024, 3, 2), "Groceries"),
        make_tx("t3", EXPENSE, "transport", 200.0, date(2024, 3, 5), "Bus"),
        make_tx("t4", EXPENSE, "food", 500.0, date(2024, 2, 20), "Restaurant"),
        make_tx("t5", INCOME, "freelance", 1200.0, date(2024, 1, 10), "Project"),
        make_tx("t6", EXPENSE, "retired_category", 50.0, date(2024, 3, 7), "Old category"),
    )


@pytest.fixture
def history():
    """A few hundred mixed transactions over several months, one of them in an unknown category."""
    rng = random.Random(7)
    income_ids = ("salary", "freelance")
    expense_ids = ("food", "transport", "bills", "retired_category")
    trans = []
    for i in range(200):
        d = date(2024, rng.randint(1, 3), rng.randint(1, 28))
        amount = round(rng.uniform(0.01, 900.0), 2)
        if i % 5 == 0:
            trans.append(make_tx(f"h{i}", INCOME, rng.choice(income_ids), amount, d))
        else:
            trans.append(make_tx(f"h{i}", EXPENSE, rng.choice(expense_ids), amount, d))
    return tuple(trans)


def shuffled(trans, seed):
    items = list(trans)
    random.Random(seed).shuffle(items)
    return tuple(items)
