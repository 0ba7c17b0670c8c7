"""Cancellable, supersede-on-new-input debouncing."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, TypeVar

from config import DEBOUNCE_SECONDS

T = TypeVar("T")

_LOGGER = logging.getLogger(__name__)

_PENDING = object()


class Debouncer(Generic[T]):
    """Deliver only the last submitted value after *delay* seconds of quiet.

    Every :meth:`submit` cancels the pending timer and starts a new one, so a
    burst of updates results in a single callback with the final value.
    ``timer_factory`` must return an object with ``start()``/``cancel()`` and
    a ``daemon`` attribute; it defaults to :class:`threading.Timer`.
    """

    def __init__(
        self,
        callback: Callable[[T], Any],
        delay: float = DEBOUNCE_SECONDS,
        timer_factory: Callable[..., Any] = threading.Timer,
    ):
        self._callback = callback
        self._delay = max(0.0, float(delay))
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer = None
        self._value: Any = _PENDING
        self._generation = 0
        self._closed = False

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._value is not _PENDING

    def submit(self, value: T) -> None:
        with self._lock:
            if self._closed:
                _LOGGER.debug("Debouncer closed; dropping submitted value")
                return
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._value = value
            timer = self._timer_factory(self._delay, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._value is _PENDING:
                return
            value = self._value
            self._value = _PENDING
            self._timer = None
        self._callback(value)

    def flush(self) -> bool:
        """Deliver the pending value now. Returns False when nothing was pending."""

        with self._lock:
            if self._value is _PENDING:
                return False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            value = self._value
            self._value = _PENDING
            self._generation += 1
        self._callback(value)
        return True

    def cancel(self) -> None:
        """Drop any pending value without delivering it."""

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._value = _PENDING
            self._generation += 1

    def close(self) -> None:
        self.cancel()
        with self._lock:
            self._closed = True


__all__ = ["Debouncer"]
