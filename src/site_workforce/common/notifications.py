from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str, str], None]

ATTENDANCE_TABLE = "attendance"
PAYROLL_TABLE = "payroll"


class ChangeNotifier:
    """In-process "table X changed" signal.

    Subscribers refetch on notification; delivery is best-effort, so a failing
    subscriber is logged and never interrupts the publisher.
    """

    def __init__(self):
        self._subscribers: DefaultDict[str, List[ChangeCallback]] = defaultdict(list)

    def subscribe(self, table: str, callback: ChangeCallback) -> Callable[[], None]:
        self._subscribers[table].append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers[table]:
                self._subscribers[table].remove(callback)

        return unsubscribe

    def publish(self, table: str, event: str = "*") -> None:
        for callback in list(self._subscribers.get(table, [])):
            try:
                callback(table, event)
            except Exception:
                logger.exception("Change subscriber failed for table=%s event=%s", table, event)
