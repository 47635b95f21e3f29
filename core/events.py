from typing import Callable, Dict, List, NamedTuple
from datetime import datetime

from core.budgets import evaluate_budgets, select_alerts, DEFAULT_ALERT_THRESHOLD
from core.domain import EXPENSE

__all__ = [
    'event_bus', 'TRANSACTION_ADDED',
    'Event', 'EventBus', 'budget_alert_handler', 'register_default_handlers',
]


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, dict], dict]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if name not in self._subscribers:
            self._subscribers[name] = []
        if handler not in self._subscribers[name]:
            self._subscribers[name].append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )

        results = []
        for handler in self._subscribers[name]:
            result = handler(event, payload)
            results.append(result)
        return results

    def unsubscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if name in self._subscribers:
            if handler in self._subscribers[name]:
                self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"

event_bus = EventBus()


def budget_alert_handler(event: Event, payload: dict) -> dict:
    """Report budget alerts for the category of a newly added expense.

    payload: transaction, transactions (snapshot including it), budgets,
    now, and optionally threshold.
    """
    t = payload.get("transaction")
    if t is None or t.type != EXPENSE:
        return {"alerts": []}

    budgets = payload.get("budgets") or {}
    if budgets.get(t.category_id, 0) <= 0:
        return {"alerts": []}

    statuses = evaluate_budgets(
        payload.get("transactions", ()),
        {t.category_id: budgets[t.category_id]},
        payload["now"],
    )
    threshold = payload.get("threshold", DEFAULT_ALERT_THRESHOLD)
    return {"alerts": select_alerts(statuses, threshold)}


def register_default_handlers(bus: EventBus = event_bus) -> None:
    bus.subscribe(TRANSACTION_ADDED, budget_alert_handler)


register_default_handlers()
