"""Key-value persistence backed by a single JSON file.

Stands in for the browser's local storage: every key holds a JSON value,
reads fall back to a default, writes replace the file.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from core import config
from core.domain import Transaction
from core.transforms import transaction_from_dict, transaction_to_dict

logger = logging.getLogger(__name__)


class KeyValueStore:
    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else config.STORE_PATH

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Store %s does not hold a JSON object, ignoring it", self.path)
            return {}
        return data

    def read(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def write(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
        logger.debug("Wrote key %r to %s", key, self.path)

    def delete(self, key: str) -> bool:
        data = self._load()
        if key not in data:
            return False
        del data[key]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
        return True


def load_transactions(store: KeyValueStore, default: Tuple[Transaction, ...] = ()) -> Tuple[Transaction, ...]:
    raw = store.read(config.TRANSACTIONS_KEY)
    if raw is None:
        return tuple(default)
    if not isinstance(raw, list):
        logger.warning("Stored transactions are not a list, using defaults")
        return tuple(default)

    result = []
    for item in raw:
        try:
            result.append(transaction_from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping invalid stored transaction %r: %s", item, e)
    return tuple(result)


def save_transactions(store: KeyValueStore, trans: Tuple[Transaction, ...]) -> None:
    store.write(config.TRANSACTIONS_KEY, [transaction_to_dict(t) for t in trans])


def load_budgets(store: KeyValueStore, default: Optional[Dict[str, float]] = None) -> Dict[str, float]:
    raw = store.read(config.BUDGETS_KEY)
    if raw is None:
        return dict(default or {})
    if not isinstance(raw, dict):
        logger.warning("Stored budgets are not a mapping, ignoring them")
        return {}

    budgets = {}
    for cid, limit in raw.items():
        try:
            value = float(limit)
        except (TypeError, ValueError):
            logger.warning("Skipping budget %r with invalid limit %r", cid, limit)
            continue
        if value > 0:
            budgets[cid] = value
    return budgets


def save_budgets(store: KeyValueStore, budgets: Dict[str, float]) -> None:
    store.write(config.BUDGETS_KEY, {cid: limit for cid, limit in budgets.items() if limit > 0})


def load_theme(store: KeyValueStore) -> str:
    theme = store.read(config.THEME_KEY, config.DEFAULT_THEME)
    if theme not in config.THEMES:
        logger.warning("Ignoring unknown stored theme %r", theme)
        return config.DEFAULT_THEME
    return theme
