import pytest

from orbitui.reactive import (
    ReactiveScope,
    SignalError,
    SignalErrorKind,
    create_computed,
    create_effect,
    create_signal,
)


def test_signal_creation_and_access():
    scope = ReactiveScope()
    signal = create_signal(scope, 42)
    assert signal.get() == 42


def test_signal_update():
    scope = ReactiveScope()
    signal = create_signal(scope, 10)
    signal.update(lambda v: v + 5)
    assert signal.get() == 15


def test_signal_update_in_place():
    scope = ReactiveScope()
    signal = create_signal(scope, [1])
    signal.update(lambda items: items.append(2))
    assert signal.get() == [1, 2]


def test_signal_set_marks_dirty():
    scope = ReactiveScope()
    signal = create_signal(scope, "a")
    assert signal.dirty is False
    signal.set("b")
    assert signal.get() == "b"
    assert signal.dirty is True


def test_effect_creation():
    scope = ReactiveScope()
    counter = [0]

    def bump():
        counter[0] += 1

    effect = create_effect(scope, bump)
    assert counter[0] == 1
    assert effect.dirty is False


def test_effect_runs_again_on_demand():
    scope = ReactiveScope()
    counter = [0]
    effect = create_effect(scope, lambda: counter.__setitem__(0, counter[0] + 1))
    effect.run()
    effect.run()
    assert counter[0] == 3


def test_effect_reentrant_run_is_ignored():
    scope = ReactiveScope()
    counter = [0]
    holder = []

    def callback():
        counter[0] += 1
        if holder:
            holder[0].run()

    holder.append(create_effect(scope, callback))
    holder[0].run()
    assert counter[0] == 2
    assert holder[0].dirty is False


def test_computed_value():
    scope = ReactiveScope()
    signal = create_signal(scope, 5)
    computed = create_computed(scope, lambda: signal.get() * 2)
    assert computed.get() == 10


def test_computed_is_lazy_and_cached():
    scope = ReactiveScope()
    calls = [0]

    def compute():
        calls[0] += 1
        return "value"

    computed = create_computed(scope, compute)
    assert calls[0] == 0
    assert computed.get() == "value"
    assert computed.get() == "value"
    assert calls[0] == 1


def test_self_referencing_computed_is_invalid_state():
    scope = ReactiveScope()
    holder = []
    holder.append(create_computed(scope, lambda: holder[0].get() + 1))
    with pytest.raises(SignalError) as info:
        holder[0].get()
    assert info.value.kind is SignalErrorKind.INVALID_STATE


def test_signal_error_messages():
    assert str(SignalError(SignalErrorKind.SIGNAL_DROPPED)) == "Signal has been dropped"
    assert str(SignalError(SignalErrorKind.CIRCULAR_DEPENDENCY)) == "Circular dependency detected"
    assert str(SignalError(SignalErrorKind.INVALID_STATE)) == "Invalid state transition"