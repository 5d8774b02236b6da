# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import logging
import typing

import msgspec

from .commontypes import InvalidStateError

logger = logging.getLogger(__name__)


@enum.unique
class CapsState(enum.Enum):
    NONE = "none"
    ONCE = "once"
    LOCK = "lock"


class CapsTransition(msgspec.Struct, frozen=True):
    before: CapsState
    after: CapsState

    @property
    def changed(self):
        return self.before is not self.after


class ModifierStateMachine:
    """Caps state for the text keyboard.

    ONCE applies to a single committed letter and then reverts to NONE; LOCK
    stays until toggled off. Casing uses str.lower()/str.upper(), i.e. the
    default Unicode case mappings, which don't depend on the process locale.
    """

    state: CapsState

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.state = CapsState.NONE

    @property
    def current(self) -> CapsState:
        self.state = self.coerce(self.state, self.strict)
        return self.state

    def _move(self, new_state: CapsState) -> CapsTransition:
        transition = CapsTransition(before=self.state, after=new_state)
        self.state = new_state
        if transition.changed:
            logger.debug("Caps state %s -> %s", transition.before.name, transition.after.name)
        return transition

    def tap_shift(self) -> CapsTransition:
        match self.current:
            case CapsState.NONE:
                return self._move(CapsState.ONCE)
            case CapsState.ONCE | CapsState.LOCK:
                return self._move(CapsState.NONE)

    def toggle_lock(self) -> CapsTransition:
        match self.current:
            case CapsState.LOCK:
                return self._move(CapsState.NONE)
            case CapsState.NONE | CapsState.ONCE:
                return self._move(CapsState.LOCK)

    def switch(self, lock: bool = False) -> CapsTransition:
        return self.toggle_lock() if lock else self.tap_shift()

    def consume(self) -> CapsTransition:
        if self.current is CapsState.ONCE:
            return self._move(CapsState.NONE)
        return self._move(self.state)

    def reset(self) -> CapsTransition:
        if not isinstance(self.state, CapsState):
            self.state = CapsState.NONE
        return self._move(CapsState.NONE)

    @property
    def shifted(self):
        return self.current is not CapsState.NONE

    def transform_alphabet(self, text: str) -> str:
        return text.upper() if self.shifted else text.lower()

    @staticmethod
    def coerce(value: typing.Any, strict: bool = False) -> CapsState:
        if isinstance(value, CapsState):
            return value
        try:
            return CapsState(value)
        except ValueError:
            if strict:
                raise InvalidStateError(f"Unknown caps state {value!r}") from None
            logger.error("Unknown caps state %r, falling back to NONE", value)
            return CapsState.NONE


class PunctuationMap:
    mapping: dict[str, str]

    def __init__(self, mapping: typing.Optional[collections.abc.Mapping[str, str]] = None):
        self.mapping = dict(mapping) if mapping else {}

    def replace(self, mapping: collections.abc.Mapping[str, str]):
        self.mapping = dict(mapping)

    def clear(self):
        self.mapping = {}

    def transform(self, text: str) -> str:
        return self.mapping.get(text, text)
