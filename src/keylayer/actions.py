# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import typing

import msgspec

from .modifiers import CapsTransition


class KeyStates(enum.Flag):
    VIRTUAL = enum.auto()
    SHIFT = enum.auto()
    CAPS_LOCK = enum.auto()


@enum.unique
class ActionSource(enum.Enum):
    KEYBOARD = enum.auto()
    # long-press popups and their previews
    POPUP = enum.auto()


class CharacterAction(msgspec.Struct, frozen=True):
    act: str
    states: KeyStates = KeyStates.VIRTUAL


class CapsAction(msgspec.Struct, frozen=True):
    lock: bool = False


class CommitAction(msgspec.Struct, frozen=True):
    text: str


KeyAction = CharacterAction | CapsAction | CommitAction


class ShapedAction(msgspec.Struct, frozen=True):
    action: KeyAction
    source: ActionSource
    transition: typing.Optional[CapsTransition] = None


class PreviewAction(msgspec.Struct, frozen=True):
    content: str


class PreviewUpdateAction(msgspec.Struct, frozen=True):
    content: str


class ShowKeyboardAction(msgspec.Struct, frozen=True):
    label: str


class DismissAction(msgspec.Struct, frozen=True):
    pass


PopupAction = PreviewAction | PreviewUpdateAction | ShowKeyboardAction | DismissAction
