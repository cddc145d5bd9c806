"""Scope-based reactive primitives: signals, effects and lazily computed values."""

from __future__ import annotations

import enum
import threading
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class SignalErrorKind(enum.Enum):
    """The kinds of failure the reactive system reports."""

    SIGNAL_DROPPED = "Signal has been dropped"
    CIRCULAR_DEPENDENCY = "Circular dependency detected"
    INVALID_STATE = "Invalid state transition"


class SignalError(Exception):
    """Raised when a reactive operation cannot complete."""

    def __init__(self, kind: SignalErrorKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


class ReactiveScope:
    """Owner of signals, effects and computed values created together."""


class Signal(Generic[T]):
    """A thread-safe value that records when it has been written."""

    def __init__(self, initial_value: T) -> None:
        self._value = initial_value
        self._dirty = False
        self._lock = threading.RLock()

    @property
    def dirty(self) -> bool:
        """Whether the signal has been written since it was created."""
        with self._lock:
            return self._dirty

    def get(self) -> T:
        """Return the current value."""
        with self._lock:
            return self._value

    def set(self, value: T) -> None:
        """Replace the value and mark the signal dirty."""
        with self._lock:
            self._value = value
            self._dirty = True

    def update(self, func: Callable[[T], Optional[T]]) -> None:
        """Apply ``func`` to the value.

        A non-None result replaces the value; a None result keeps the
        (possibly mutated in place) current value.
        """
        with self._lock:
            result = func(self._value)
            if result is not None:
                self._value = result
            self._dirty = True


class Effect:
    """A callback that can be run on demand; re-entrant runs are ignored."""

    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback: Optional[Callable[[], Any]] = callback
        self._dirty = True
        self._lock = threading.Lock()

    @property
    def dirty(self) -> bool:
        """Whether the effect has yet to complete a run."""
        return self._dirty

    def run(self) -> None:
        """Run the callback unless it is already running."""
        with self._lock:
            callback, self._callback = self._callback, None
        if callback is None:
            return
        try:
            callback()
        finally:
            with self._lock:
                self._callback = callback
        self._dirty = False


class ReactiveComputed(Generic[T]):
    """A value computed on first access and cached afterwards."""

    def __init__(self, compute_fn: Callable[[], T]) -> None:
        self._value: Any = _UNSET
        self._compute_fn: Optional[Callable[[], T]] = compute_fn
        self._dirty = True
        self._lock = threading.Lock()

    def get(self) -> T:
        """Return the computed value, computing it if needed."""
        if self._dirty or self._value is _UNSET:
            self._recompute()
        value = self._value
        if value is _UNSET:
            raise SignalError(SignalErrorKind.INVALID_STATE)
        return value

    def _recompute(self) -> None:
        with self._lock:
            compute_fn, self._compute_fn = self._compute_fn, None
        if compute_fn is None:
            return
        try:
            self._value = compute_fn()
        finally:
            with self._lock:
                self._compute_fn = compute_fn
        self._dirty = False


def create_signal(scope: ReactiveScope, initial_value: T) -> Signal[T]:
    """Create a signal holding ``initial_value``."""
    return Signal(initial_value)


def create_effect(scope: ReactiveScope, callback: Callable[[], Any]) -> Effect:
    """Create an effect and run it once straight away."""
    effect = Effect(callback)
    effect.run()
    return effect


def create_computed(scope: ReactiveScope, compute_fn: Callable[[], T]) -> ReactiveComputed[T]:
    """Create a computed value; it is evaluated on first access."""
    return ReactiveComputed(compute_fn)