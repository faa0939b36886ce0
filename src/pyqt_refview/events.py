"""Change streams shared by models, adapters and the façade."""

from __future__ import annotations

import logging
from typing import Any, Callable, List

from PyQt6.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for one callback connected to a ``ChangeEmitter``."""

    def __init__(self, emitter: "ChangeEmitter", callback: Callable[[Any], None]) -> None:
        self._emitter = emitter
        self._callback = callback
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._emitter._release(self)


class ChangeEmitter(QObject):
    """Broadcast a ``node | None`` payload to every subscriber.

    ``None`` means "refresh everything"; a node means only that node's
    subtree is stale. Delivery is synchronous on the emitting thread.
    """

    changed = pyqtSignal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._subscriptions: List[Subscription] = []

    def fire(self, payload: Any = None) -> None:
        self.changed.emit(payload)

    def subscribe(self, callback: Callable[[Any], None]) -> Subscription:
        subscription = Subscription(self, callback)
        self.changed.connect(callback)
        self._subscriptions.append(subscription)
        return subscription

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def dispose(self) -> None:
        """Release every live subscription."""
        for subscription in list(self._subscriptions):
            subscription.dispose()

    def _release(self, subscription: Subscription) -> None:
        if subscription not in self._subscriptions:
            return
        self._subscriptions.remove(subscription)
        try:
            self.changed.disconnect(subscription._callback)
        except TypeError:
            logger.debug("Callback %r was already disconnected", subscription._callback)
