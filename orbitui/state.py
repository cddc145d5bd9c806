"""Type-keyed state container with subscribers and derived values."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Iterable, TypeVar

T = TypeVar("T")


class StateContainer:
    """Stores one value per Python type and notifies subscribers on change.

    Values are keyed by their type, so two states created from values of
    the same type share a single slot.
    """

    def __init__(self) -> None:
        self._values: dict[type, Any] = {}
        self._subscribers: dict[type, list[Callable[[], Any]]] = {}
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return "StateContainer(values=[StateMap], subscribers=[SubscriberMap])"

    def create(self, initial: T) -> "State[T]":
        """Store ``initial`` under its type and return a handle to it."""
        key = type(initial)
        self._write(key, initial)
        return State(self, key)

    def computed(
        self, compute: Callable[[], T], dependencies: Iterable[type]
    ) -> "Computed[T]":
        """Store ``compute()`` and recompute it whenever a dependency changes."""
        initial = compute()
        key = type(initial)
        self._write(key, initial)
        return Computed(self, key, compute, dependencies)

    def subscribe(self, key: type, callback: Callable[[], Any]) -> None:
        """Call ``callback`` whenever the value stored under ``key`` changes."""
        with self._lock:
            self._subscribers.setdefault(key, []).append(callback)

    def notify(self, key: type) -> None:
        """Run every subscriber registered for ``key``, in registration order."""
        with self._lock:
            callbacks = list(self._subscribers.get(key, ()))
        for callback in callbacks:
            callback()

    def _read(self, key: type) -> Any:
        with self._lock:
            try:
                return self._values[key]
            except KeyError:
                raise LookupError(f"no state stored for {key.__name__}") from None

    def _write(self, key: type, value: Any) -> None:
        with self._lock:
            self._values[key] = value


class State(Generic[T]):
    """A handle to a value held by a :class:`StateContainer`."""

    def __init__(self, container: StateContainer, key: type) -> None:
        self._container = container
        self._key = key

    @property
    def key(self) -> type:
        """The type under which this value is stored."""
        return self._key

    def get(self) -> T:
        """Return the current value."""
        return self._container._read(self._key)

    def set(self, value: T) -> None:
        """Replace the value and notify subscribers."""
        self._container._write(self._key, value)
        self._container.notify(self._key)

    def update(self, func: Callable[[T], T]) -> None:
        """Replace the value with ``func(value)`` and notify subscribers."""
        new_value = func(self.get())
        self._container._write(self._key, new_value)
        self._container.notify(self._key)

    def on_change(self, callback: Callable[[T], Any]) -> None:
        """Call ``callback`` with the new value each time it changes."""
        self._container.subscribe(self._key, lambda: callback(self.get()))


class Computed(Generic[T]):
    """A value recomputed whenever one of its dependency types changes."""

    def __init__(
        self,
        container: StateContainer,
        key: type,
        compute: Callable[[], T],
        dependencies: Iterable[type],
    ) -> None:
        self._container = container
        self._key = key
        self._compute = compute
        self.dependencies: list[type] = list(dependencies)
        for dependency in self.dependencies:
            container.subscribe(dependency, self._recompute)

    def _recompute(self) -> None:
        self._container._write(self._key, self._compute())

    @property
    def key(self) -> type:
        """The type under which the computed value is stored."""
        return self._key

    def get(self) -> T:
        """Return the most recently computed value."""
        return self._container._read(self._key)