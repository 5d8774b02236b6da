import logging

import pytest

from keylayer.commontypes import InvalidStateError
from keylayer.modifiers import CapsState, CapsTransition, ModifierStateMachine, PunctuationMap


def machine_in(state: CapsState, strict: bool = False):
    machine = ModifierStateMachine(strict=strict)
    machine.state = state
    return machine


@pytest.mark.parametrize(
    "start,expected",
    (
        (CapsState.NONE, CapsState.ONCE),
        (CapsState.ONCE, CapsState.NONE),
        (CapsState.LOCK, CapsState.NONE),
    ),
)
def test_tap_shift(start, expected):
    machine = machine_in(start)
    assert machine.tap_shift() == CapsTransition(before=start, after=expected)
    assert machine.state is expected


@pytest.mark.parametrize(
    "start,expected",
    (
        (CapsState.NONE, CapsState.LOCK),
        (CapsState.ONCE, CapsState.LOCK),
        (CapsState.LOCK, CapsState.NONE),
    ),
)
def test_toggle_lock(start, expected):
    machine = machine_in(start)
    machine.toggle_lock()
    assert machine.state is expected


def test_tap_shift_twice_returns_to_none():
    machine = ModifierStateMachine()
    machine.tap_shift()
    machine.tap_shift()
    assert machine.state is CapsState.NONE


@pytest.mark.parametrize("start", (CapsState.NONE, CapsState.LOCK))
def test_toggle_lock_is_self_inverse(start):
    machine = machine_in(start)
    machine.toggle_lock()
    machine.toggle_lock()
    assert machine.state is start


def test_switch_dispatches_on_lock_flag():
    machine = ModifierStateMachine()
    machine.switch()
    assert machine.state is CapsState.ONCE
    machine.switch(lock=True)
    assert machine.state is CapsState.LOCK


def test_consume_only_reverts_once():
    machine = machine_in(CapsState.ONCE)
    transition = machine.consume()
    assert transition.changed
    assert machine.state is CapsState.NONE

    machine = machine_in(CapsState.LOCK)
    transition = machine.consume()
    assert not transition.changed
    assert machine.state is CapsState.LOCK


def test_reset():
    machine = machine_in(CapsState.LOCK)
    assert machine.reset() == CapsTransition(before=CapsState.LOCK, after=CapsState.NONE)


@pytest.mark.parametrize(
    "state,text,expected",
    (
        (CapsState.NONE, "E", "e"),
        (CapsState.ONCE, "e", "E"),
        (CapsState.LOCK, "ê", "Ê"),
        (CapsState.NONE, "İ", "i̇"),
        (CapsState.LOCK, "ß", "SS"),
    ),
)
def test_transform_alphabet(state, text, expected):
    assert machine_in(state).transform_alphabet(text) == expected


def test_unknown_state_fails_fast_when_strict():
    machine = machine_in("sideways", strict=True)
    with pytest.raises(InvalidStateError):
        machine.tap_shift()


def test_unknown_state_degrades_to_none(caplog):
    machine = machine_in("sideways")
    with caplog.at_level(logging.ERROR, logger="keylayer.modifiers"):
        machine.tap_shift()
    assert machine.state is CapsState.ONCE
    assert "sideways" in caplog.text


def test_reset_recovers_from_unknown_state_even_when_strict():
    machine = machine_in("sideways", strict=True)
    machine.reset()
    assert machine.state is CapsState.NONE


def test_coerce_accepts_values():
    assert ModifierStateMachine.coerce("lock") is CapsState.LOCK


def test_punctuation_map():
    punctuation = PunctuationMap({"'": "’", ",": "，"})
    assert punctuation.transform("'") == "’"
    assert punctuation.transform("?") == "?"
    punctuation.replace({"?": "？"})
    # replaced wholesale, not merged
    assert punctuation.transform("'") == "'"
    assert punctuation.transform("?") == "？"
    punctuation.clear()
    assert punctuation.transform("?") == "?"
