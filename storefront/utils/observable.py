# storefront/utils/observable.py
import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

class StateFlow(Generic[T]):
    """Holds one value; subscribers are told whenever it is replaced by a different one"""

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T):
        if new_value == self._value:
            return
        self._value = new_value
        for callback in list(self._subscribers):
            self._notify(callback, new_value)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a callback; it receives the current value right away"""
        self._subscribers.append(callback)
        self._notify(callback, self._value)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @staticmethod
    def _notify(callback: Callable[[T], None], value: T):
        try:
            callback(value)
        except Exception:
            logger.exception("State subscriber %r failed", callback)
