# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import enum
import itertools
import logging
import typing

import attr

if typing.TYPE_CHECKING:
    from .overrides import KeyOverride, OverrideRows

logger = logging.getLogger(__name__)


class Appearance(enum.Enum):
    # main text plus a smaller alternate glyph
    ALT_TEXT = enum.auto()
    TEXT = enum.auto()
    IMAGE = enum.auto()


@attr.frozen(kw_only=True)
class AlphabetKey:
    character: str
    punctuation: str
    weight: float = attr.field(default=0.1)
    appearance: typing.ClassVar[Appearance] = Appearance.ALT_TEXT

    @property
    def display_text(self):
        return self.character


@attr.frozen(kw_only=True)
class SymbolKey:
    symbol: str
    weight: float = attr.field(default=0.1)
    appearance: typing.ClassVar[Appearance] = Appearance.TEXT

    @property
    def display_text(self):
        return self.symbol


@attr.frozen(kw_only=True)
class LayoutSwitchKey:
    label: str = attr.field(default="?123")
    sub_label: str = attr.field(default="")
    weight: float = attr.field(default=0.15)
    appearance: typing.ClassVar[Appearance] = Appearance.TEXT

    @property
    def display_text(self):
        return self.label


@attr.frozen(kw_only=True)
class SpaceKey:
    # zero weight takes up whatever the rest of the row leaves
    weight: float = attr.field(default=0.0)
    appearance: typing.ClassVar[Appearance] = Appearance.TEXT

    @property
    def display_text(self):
        return " "


@attr.frozen(kw_only=True)
class CapsKey:
    weight: float = attr.field(default=0.15)
    appearance: typing.ClassVar[Appearance] = Appearance.IMAGE


@attr.frozen(kw_only=True)
class BackspaceKey:
    weight: float = attr.field(default=0.15)
    appearance: typing.ClassVar[Appearance] = Appearance.IMAGE


@attr.frozen(kw_only=True)
class ReturnKey:
    weight: float = attr.field(default=0.15)
    appearance: typing.ClassVar[Appearance] = Appearance.IMAGE


@attr.frozen(kw_only=True)
class LanguageKey:
    weight: float = attr.field(default=0.1)
    appearance: typing.ClassVar[Appearance] = Appearance.IMAGE


TextKeyDef = AlphabetKey | SymbolKey | LayoutSwitchKey | SpaceKey
KeyDef = TextKeyDef | CapsKey | BackspaceKey | ReturnKey | LanguageKey
Layout = tuple[tuple[KeyDef, ...], ...]


def _alphabet_row(pairs: str) -> tuple[AlphabetKey, ...]:
    return tuple(AlphabetKey(character=character, punctuation=punctuation) for character, punctuation in pairs.split())


TEXT_LAYOUT: Layout = (
    _alphabet_row("Q1 W2 E3 R4 T5 Y6 U7 I8 O9 P0"),
    _alphabet_row("A@ S* D+ F- G= H/ J# K( L)"),
    (
        CapsKey(),
        *_alphabet_row("Z' X: C\" V? B! N~ M\\"),
        BackspaceKey(),
    ),
    (
        LayoutSwitchKey(),
        SymbolKey(symbol=","),
        LanguageKey(),
        SpaceKey(),
        SymbolKey(symbol="."),
        ReturnKey(),
    ),
)


def iter_keys(layout: collections.abc.Iterable[collections.abc.Iterable[KeyDef]]) -> collections.abc.Iterator[KeyDef]:
    return itertools.chain.from_iterable(layout)


def _weighted(override: KeyOverride) -> dict[str, float]:
    return {} if override.weight is None else {"weight": override.weight}


def key_from_override(override: KeyOverride) -> typing.Optional[KeyDef]:
    kwargs = _weighted(override)
    match override.type:
        case "alphabet":
            if not override.main:
                logger.warning("Skipping alphabet key override without a main character: %r", override)
                return None
            return AlphabetKey(character=override.main, punctuation=override.alt or "", **kwargs)
        case "symbol" | "comma":
            symbol = override.main or override.label
            if not symbol:
                logger.warning("Skipping symbol key override without a symbol: %r", override)
                return None
            return SymbolKey(symbol=symbol, **kwargs)
        case "layout_switch":
            return LayoutSwitchKey(label=override.label or "?123", sub_label=override.sub_label or "", **kwargs)
        case "space":
            return SpaceKey(**kwargs)
        case "caps":
            return CapsKey(**kwargs)
        case "backspace":
            return BackspaceKey(**kwargs)
        case "return":
            return ReturnKey(**kwargs)
        case "language":
            return LanguageKey(**kwargs)
        case _:
            logger.warning("Skipping key override of unknown type %r", override.type)
            return None


def layout_from_overrides(rows: OverrideRows) -> Layout:
    built = []
    for row in rows:
        keys = tuple(key for key in map(key_from_override, row) if key is not None)
        if keys:
            built.append(keys)
    return tuple(built)
