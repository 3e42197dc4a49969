from __future__ import annotations

from typing import Callable, Generic, TypeVar


T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:
    """Handle returned by `subscribe`; disposing it detaches the observer synchronously."""

    def __init__(self, dispose: Callable[[], None] | None = None) -> None:
        self._dispose = dispose
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def dispose(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._dispose is not None:
            self._dispose()
            self._dispose = None


class CompositeSubscription(Subscription):
    """Groups subscriptions owned by one run so they can be detached together."""

    def __init__(self) -> None:
        super().__init__()
        self._children: list[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        if self.closed:
            subscription.dispose()
            return subscription
        self._children.append(subscription)
        return subscription

    def dispose(self) -> None:
        if self.closed:
            return
        super().dispose()
        children = self._children
        self._children = []
        for child in children:
            child.dispose()


class Subject(Generic[T]):
    """Hot multicast stream: every emission is delivered to all current observers in subscribe order."""

    def __init__(self) -> None:
        self._observers: list[tuple[Observer[T], Callable[[], None] | None]] = []
        self._completed = False

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def subscribe(self, on_next: Observer[T], on_complete: Callable[[], None] | None = None) -> Subscription:
        entry = (on_next, on_complete)
        if self._completed:
            if on_complete is not None:
                on_complete()
            return Subscription()
        self._observers.append(entry)
        return Subscription(lambda: self._detach(entry))

    def on_next(self, value: T) -> None:
        if self._completed:
            raise RuntimeError("cannot emit on a completed subject")
        # Snapshot: observers may unsubscribe (or subscribe) while being notified.
        for entry in list(self._observers):
            if entry in self._observers:
                entry[0](value)

    def on_complete(self) -> None:
        if self._completed:
            return
        self._completed = True
        observers = self._observers
        self._observers = []
        for _, on_complete in observers:
            if on_complete is not None:
                on_complete()

    def _detach(self, entry: tuple[Observer[T], Callable[[], None] | None]) -> None:
        try:
            self._observers.remove(entry)
        except ValueError:
            pass


class ReplaySubject(Subject[T]):
    """Subject that caches its latest value and replays it to late subscribers."""

    def __init__(self, initial: T | None = None, *, has_initial: bool = False) -> None:
        super().__init__()
        self._value = initial
        self._has_value = has_initial

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def value(self) -> T:
        if not self._has_value:
            raise LookupError("subject has not emitted a value yet")
        return self._value  # type: ignore[return-value]

    def subscribe(self, on_next: Observer[T], on_complete: Callable[[], None] | None = None) -> Subscription:
        if self._has_value:
            on_next(self._value)  # type: ignore[arg-type]
        return super().subscribe(on_next, on_complete)

    def on_next(self, value: T) -> None:
        self._value = value
        self._has_value = True
        super().on_next(value)

