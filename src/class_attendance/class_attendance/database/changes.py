"""In-process change notifications for table writes.

Repositories publish a ``ChangeEvent`` after a committed write; screens that
want live refresh subscribe per table (optionally filtered by column
equality) and must call ``Subscription.unsubscribe()`` on teardown.
"""

from __future__ import annotations

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from ..core.enums import ChangeType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    change_type: ChangeType
    row: Mapping[str, Any] = field(default_factory=dict)


ChangeCallback = Callable[[ChangeEvent], None]


@dataclass
class Subscription:
    subscription_id: int
    table: str
    callback: ChangeCallback
    where: Mapping[str, Any]
    _feed: Optional["ChangeFeed"] = field(default=None, repr=False)

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        return all(event.row.get(col) == value for col, value in self.where.items())

    def unsubscribe(self) -> None:
        if self._feed is not None:
            self._feed.remove(self.subscription_id)
            self._feed = None

    @property
    def active(self) -> bool:
        return self._feed is not None


class ChangeFeed:
    def __init__(self):
        self._subs: dict[int, Subscription] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        *,
        where: Optional[Mapping[str, Any]] = None,
    ) -> Subscription:
        with self._lock:
            sub = Subscription(
                subscription_id=next(self._ids),
                table=table,
                callback=callback,
                where=dict(where or {}),
                _feed=self,
            )
            self._subs[sub.subscription_id] = sub
        return sub

    def remove(self, subscription_id: int) -> None:
        with self._lock:
            self._subs.pop(subscription_id, None)

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            return sum(1 for s in self._subs.values() if table is None or s.table == table)

    def publish(self, event: ChangeEvent) -> int:
        """Deliver to every matching subscriber; returns how many were called."""

        with self._lock:
            targets = [s for s in self._subs.values() if s.matches(event)]

        delivered = 0
        for sub in targets:
            try:
                sub.callback(event)
                delivered += 1
            except Exception:
                logger.exception("Change callback #%s failed for %s", sub.subscription_id, event.table)
        logger.debug("%s on %s delivered to %d subscriber(s)", event.change_type.value, event.table, delivered)
        return delivered

    def notify(self, table: str, change_type: ChangeType, row: Optional[Mapping[str, Any]] = None) -> int:
        return self.publish(ChangeEvent(table=table, change_type=change_type, row=dict(row or {})))
