"""Change notifications emitted by the in-memory stores."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class StoreEventKind(StrEnum):
    LOADED = "loaded"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    TOUCHED = "touched"


@dataclass(frozen=True)
class StoreEvent:
    """A mutation of a store.

    Attributes:
        kind: What happened
        item_id: Affected card/tip id (None for LOADED)
    """

    kind: StoreEventKind
    item_id: int | None = None


StoreListener = Callable[[StoreEvent], None]


class ChangeNotifier:
    """Synchronous listener registry shared by the stores."""

    def __init__(self) -> None:
        self._listeners: list[StoreListener] = []

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
