from datetime import date

from core import config
from core.domain import INCOME, EXPENSE
from core.storage import KeyValueStore, load_transactions, save_transactions, load_budgets, save_budgets, load_theme
from conftest import make_tx


def test_read_missing_file_returns_default(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    assert store.read("theme", "light") == "light"
    assert store.read("theme") is None


def test_write_then_read(tmp_path):
    store = KeyValueStore(tmp_path / "nested" / "store.json")
    store.write("theme", "dark")
    store.write("has_seen_welcome", True)
    assert store.read("theme", "light") == "dark"
    assert store.read("has_seen_welcome", False) is True


def test_delete(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    store.write("theme", "dark")
    assert store.delete("theme") is True
    assert store.delete("theme") is False
    assert store.read("theme", "light") == "light"


def test_corrupt_file_falls_back_to_default(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json", encoding="utf-8")
    store = KeyValueStore(path)
    assert store.read("theme", "light") == "light"

    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert store.read("theme", "light") == "light"


def test_transactions_round_trip(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    trans = (
        make_tx("t1", INCOME, "salary", 100.0, date(2024, 9, 1)),
        make_tx("t2", EXPENSE, "food", 12.5, date(2024, 9, 2), "Lunch"),
    )
    save_transactions(store, trans)
    assert load_transactions(store) == trans


def test_load_transactions_uses_default_when_unset(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    seed = (make_tx("s1", INCOME, "salary", 1.0, date(2024, 1, 1)),)
    assert load_transactions(store, default=seed) == seed

    save_transactions(store, ())
    assert load_transactions(store, default=seed) == ()


def test_load_transactions_skips_invalid_records(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    store.write(config.TRANSACTIONS_KEY, [
        {"id": "ok", "type": EXPENSE, "category_id": "food", "amount": 5, "date": "2024-01-01"},
        {"id": "no-date", "type": EXPENSE, "category_id": "food", "amount": 5},
        {"id": "bad-date", "type": EXPENSE, "category_id": "food", "amount": 5, "date": "soon"},
        {"id": "transfer", "type": "transfer", "category_id": "food", "amount": 5, "date": "2024-01-01"},
    ])
    assert [t.id for t in load_transactions(store)] == ["ok"]


def test_budgets_round_trip_drops_non_positive(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    save_budgets(store, {"food": 500.0, "bills": 0.0})
    assert store.read(config.BUDGETS_KEY) == {"food": 500.0}

    store.write(config.BUDGETS_KEY, {"food": "250", "bills": -1, "health": "lots"})
    assert load_budgets(store) == {"food": 250.0}


def test_load_budgets_default(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    assert load_budgets(store) == {}
    assert load_budgets(store, default={"food": 100.0}) == {"food": 100.0}


def test_load_transactions_ignores_non_list_value(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    seed = (make_tx("s1", INCOME, "salary", 1.0, date(2024, 1, 1)),)
    for value in (5, "t1", {"id": "t1"}):
        store.write(config.TRANSACTIONS_KEY, value)
        assert load_transactions(store) == ()
        assert load_transactions(store, default=seed) == seed


def test_load_theme(tmp_path):
    store = KeyValueStore(tmp_path / "store.json")
    assert load_theme(store) == config.DEFAULT_THEME

    store.write(config.THEME_KEY, "dark")
    assert load_theme(store) == "dark"

    for value in ("solarized", 3, None, ["dark"]):
        store.write(config.THEME_KEY, value)
        assert load_theme(store) == config.DEFAULT_THEME
