from __future__ import annotations

import logging
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by :meth:`Subject.subscribe`; ``cancel()`` detaches the callback."""

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach: Callable[[], None] | None = detach

    @property
    def active(self) -> bool:
        return self._detach is not None

    def cancel(self) -> None:
        if self._detach is None:
            return
        detach, self._detach = self._detach, None
        detach()


class Subject(Generic[T]):
    """Synchronous push channel.

    - ``send`` hands the value to every current subscriber, in subscription
      order, on the caller's thread/loop before returning.
    - Nothing is buffered, so values arrive in exactly the order they were sent.
    - A failing subscriber is logged and skipped; the producer never sees it.
    """

    def __init__(self, name: str = "subject") -> None:
        self.name = name
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        self._subscribers.append(callback)

        def _detach() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        return Subscription(_detach)

    def send(self, value: T) -> None:
        # Snapshot so subscribe/cancel inside a callback affects only later sends
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:
                logger.exception("Subscriber of %s failed", self.name)
