"""Paths and defaults for the finance manager.

Every value can be overridden through an environment variable so tests and
alternative installs can point the app at their own data directory.
"""
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("FINANCE_DATA_DIR", _PROJECT_ROOT / "data"))
STORE_PATH = Path(os.getenv("FINANCE_STORE_PATH", DATA_DIR / "store.json"))
SEED_PATH = Path(os.getenv("FINANCE_SEED_PATH", DATA_DIR / "seed.json"))

ALERT_THRESHOLD = float(os.getenv("FINANCE_ALERT_THRESHOLD", "80"))

THEMES = ("light", "dark")
DEFAULT_THEME = os.getenv("FINANCE_THEME", "light")
if DEFAULT_THEME not in THEMES:
    DEFAULT_THEME = "light"

DEVELOPER_INFO = {
    "name": os.getenv("FINANCE_DEVELOPER_NAME", "Finance Manager maintainers"),
    "email": os.getenv("FINANCE_DEVELOPER_EMAIL", "maintainers@example.com"),
}

# keys in the key-value store
TRANSACTIONS_KEY = "transactions"
BUDGETS_KEY = "budgets"
THEME_KEY = "theme"
DEVELOPER_KEY = "developer_info"
WELCOME_KEY = "has_seen_welcome"
