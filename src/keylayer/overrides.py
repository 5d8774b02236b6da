# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import itertools
import typing

import msgspec

from .commontypes import ConfigError

if typing.TYPE_CHECKING:
    import pathlib

WILDCARD_LABEL = ""


class StringOverride(msgspec.Struct, frozen=True):
    text: str


class LabeledOverride(msgspec.Struct, frozen=True):
    labels: collections.abc.Mapping[str, str]


DisplayOverride = StringOverride | LabeledOverride


class KeyOverride(msgspec.Struct, frozen=True, rename="camel"):
    type: str
    main: typing.Optional[str] = None
    alt: typing.Optional[str] = None
    display_text: typing.Union[str, dict[str, str], None] = None
    label: typing.Optional[str] = None
    sub_label: typing.Optional[str] = None
    weight: typing.Optional[float] = None

    @property
    def display_override(self) -> typing.Optional[DisplayOverride]:
        match self.display_text:
            case None:
                return None
            case str(text):
                return StringOverride(text=text)
            case dict(labels):
                return LabeledOverride(labels=labels)


OverrideRows = tuple[tuple[KeyOverride, ...], ...]
OverrideTable = dict[str, OverrideRows]

_table_decoder = msgspec.json.Decoder(OverrideTable)


def decode_override_table(data: bytes | str) -> OverrideTable:
    """Decode and validate a layout override document.

    Raises msgspec.DecodeError (which includes msgspec.ValidationError) for
    malformed JSON or a document that doesn't match the expected shape, and
    UnicodeDecodeError for invalid UTF-8 inside a string.
    """
    return _table_decoder.decode(data)


def load_override_table(path: pathlib.Path) -> OverrideTable:
    try:
        return decode_override_table(path.read_bytes())
    except (msgspec.DecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(path, str(exc)) from exc


def find_override(rows: OverrideRows, character: str) -> typing.Optional[KeyOverride]:
    for key in itertools.chain.from_iterable(rows):
        if key.main == character:
            return key
    return None


def resolve_display_text(
    entry: typing.Union[DisplayOverride, str, collections.abc.Mapping[str, str], None],
    active_label: str,
    fallback: str,
) -> str:
    """Pick the text to display for a key.

    A plain string is used as-is. A labeled mapping is consulted for the
    active sub-mode label, then for the wildcard entry; anything else gives
    the fallback.
    """
    match entry:
        case None:
            return fallback
        case StringOverride(text=text):
            return text
        case LabeledOverride(labels=labels):
            return _lookup_label(labels, active_label, fallback)
        case str():
            return entry
        case collections.abc.Mapping():
            return _lookup_label(entry, active_label, fallback)
        case _:
            return fallback


def _lookup_label(labels: collections.abc.Mapping[str, str], active_label: str, fallback: str) -> str:
    if active_label in labels:
        return labels[active_label]
    if WILDCARD_LABEL in labels:
        return labels[WILDCARD_LABEL]
    return fallback
