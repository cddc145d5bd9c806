"""Reactive signals with automatic dependency tracking inside a scope."""

from __future__ import annotations

import itertools
import weakref
from contextlib import contextmanager
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")

_effect_ids = itertools.count(1)
_signal_ids = itertools.count(1)


class SignalError(Exception):
    """Base error for signal operations."""

    _prefix = "Signal error"

    def __init__(self, message: str) -> None:
        super().__init__(f"{self._prefix}: {message}")
        self.message = message


class AccessError(SignalError):
    """A signal value could not be accessed."""

    _prefix = "Signal access error"


class TypeMismatchError(SignalError):
    """A signal operation met a value of the wrong type."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        Exception.__init__(self, f"Type mismatch: expected {expected}, got {actual}")
        self.message = f"expected {expected}, got {actual}"


class ReactiveScope:
    """Execution context that owns effects and tracks which one is running."""

    def __init__(self) -> None:
        self._current_effect: Optional[int] = None
        self._effects: dict[int, Effect] = {}

    @contextmanager
    def _tracking(self, effect_id: int) -> Iterator[None]:
        previous = self._current_effect
        self._current_effect = effect_id
        try:
            yield
        finally:
            self._current_effect = previous

    def _add_effect(self, effect: "Effect") -> None:
        self._effects[effect.id] = effect


class Signal(Generic[T]):
    """A value that re-runs the effects that read it when it changes."""

    def __init__(self, initial: T, scope: ReactiveScope) -> None:
        self.id = next(_signal_ids)
        self._value = initial
        self._subscribers: set[int] = set()
        self._scope = weakref.ref(scope)

    def get(self) -> T:
        """Return the value, subscribing the running effect if there is one."""
        scope = self._scope()
        if scope is not None and scope._current_effect is not None:
            self._subscribers.add(scope._current_effect)
        return self._value

    def set(self, new_value: T) -> None:
        """Store ``new_value`` and notify subscribers if it differs."""
        if self._value != new_value:
            self._value = new_value
            self._notify()

    def update(self, func: Callable[[T], T]) -> None:
        """Replace the value with ``func(value)``, notifying on change."""
        self.set(func(self._value))

    def _notify(self) -> None:
        scope = self._scope()
        if scope is None:
            return
        for effect_id in sorted(self._subscribers):
            effect = scope._effects.get(effect_id)
            if effect is not None:
                effect.run(scope)


class Effect:
    """A closure whose signal reads are tracked while it runs."""

    def __init__(self, closure: Callable[[], Any]) -> None:
        self.id = next(_effect_ids)
        self._closure = closure

    def run(self, scope: ReactiveScope) -> None:
        """Run the closure with this effect marked as current in ``scope``."""
        with scope._tracking(self.id):
            self._closure()


class Computed(Generic[T]):
    """A signal whose value is derived from other signals."""

    def __init__(self, compute_fn: Callable[[], T], scope: ReactiveScope) -> None:
        self._compute_fn = compute_fn
        self_ref = weakref.ref(self)

        def refresh() -> None:
            computed = self_ref()
            if computed is not None:
                computed._signal.set(computed._compute_fn())

        self._effect = Effect(refresh)
        with scope._tracking(self._effect.id):
            initial = compute_fn()
        self._signal: Signal[T] = Signal(initial, scope)
        scope._add_effect(self._effect)

    def get(self) -> T:
        """Return the current derived value."""
        return self._signal.get()


def create_signal(initial: T, scope: ReactiveScope) -> Signal[T]:
    """Create a signal in ``scope``."""
    return Signal(initial, scope)


def create_computed(compute_fn: Callable[[], T], scope: ReactiveScope) -> Computed[T]:
    """Create a computed signal in ``scope``."""
    return Computed(compute_fn, scope)


def create_effect(closure: Callable[[], Any], scope: ReactiveScope) -> Effect:
    """Register an effect in ``scope`` and run it once to collect its dependencies."""
    effect = Effect(closure)
    scope._add_effect(effect)
    effect.run(scope)
    return effect