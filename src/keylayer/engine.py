# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import collections.abc
import logging
import typing

import msgspec

from .actions import (
    ActionSource,
    CapsAction,
    CharacterAction,
    KeyAction,
    KeyStates,
    PopupAction,
    PreviewAction,
    PreviewUpdateAction,
    ShapedAction,
    ShowKeyboardAction,
)
from .layout import (
    TEXT_LAYOUT,
    AlphabetKey,
    KeyDef,
    Layout,
    LayoutSwitchKey,
    SpaceKey,
    SymbolKey,
    iter_keys,
    layout_from_overrides,
)
from .modifiers import CapsState, CapsTransition, ModifierStateMachine, PunctuationMap
from .overrides import OverrideRows, find_override, resolve_display_text

if typing.TYPE_CHECKING:
    from .config_cache import ConfigCache

logger = logging.getLogger(__name__)


class InputContext(msgspec.Struct, frozen=True):
    unique_name: str
    display_name: str = ""
    sub_mode_label: str = ""
    sub_mode_name: str = ""

    @classmethod
    def named(cls, name: str):
        return cls(unique_name=name, display_name=name)


class KeyDisplay(msgspec.Struct, frozen=True):
    key: KeyDef
    main_text: str
    alt_text: typing.Optional[str] = None


def _is_single_letter(text: str):
    return len(text) == 1 and text.isalpha()


class LayoutTransformEngine:
    """Works out what every text key shows and how outgoing key actions look.

    All of the state lives here: the caps state machine, the punctuation
    mapping from the input method, and the active input context. The override
    table comes from the ConfigCache on every refresh, so edits to the layout
    file show up the next time anything changes.

    With layout_from_rows set, the key grid itself comes from the active
    override rows (see layout_from_overrides) and falls back to the base
    layout when there are no rows or none of them build a key.
    """

    context: typing.Optional[InputContext]
    rows: typing.Optional[OverrideRows]
    displays: tuple[KeyDisplay, ...]
    active_layout: Layout

    def __init__(
        self,
        cache: ConfigCache,
        layout: Layout = TEXT_LAYOUT,
        keep_letters_uppercase: bool = False,
        strict: bool = False,
        layout_from_rows: bool = False,
    ):
        self.cache = cache
        self.layout = layout
        self.layout_from_rows = layout_from_rows
        self.active_layout = layout
        self.keep_letters_uppercase = keep_letters_uppercase
        self.caps = ModifierStateMachine(strict=strict)
        self.punctuation = PunctuationMap()
        self.context = None
        self.rows = None
        self.displays = ()

    @property
    def caps_state(self) -> CapsState:
        return self.caps.current

    @property
    def sub_mode_label(self):
        return self.context.sub_mode_label if self.context is not None else ""

    def on_attach(self) -> tuple[KeyDisplay, ...]:
        self.caps.reset()
        self.punctuation.clear()
        return self.refresh_key_displays()

    def on_context_change(self, context: InputContext | str) -> tuple[KeyDisplay, ...]:
        if isinstance(context, str):
            context = InputContext.named(context)
        logger.debug("Input context is now %r (sub-mode %r)", context.unique_name, context.sub_mode_label)
        self.context = context
        self.caps.reset()
        self.punctuation.clear()
        return self.refresh_key_displays()

    def on_punctuation_update(self, mapping: collections.abc.Mapping[str, str]) -> tuple[KeyDisplay, ...]:
        self.punctuation.replace(mapping)
        return self.refresh_key_displays()

    def set_keep_letters_uppercase(self, value: bool) -> tuple[KeyDisplay, ...]:
        self.keep_letters_uppercase = value
        return self.refresh_key_displays()

    def switch_caps(self, lock: bool = False) -> CapsTransition:
        transition = self.caps.switch(lock)
        self.refresh_key_displays()
        return transition

    def refresh_key_displays(self) -> tuple[KeyDisplay, ...]:
        self.rows = self.cache.rows_for(self.context.unique_name if self.context is not None else None)
        self.active_layout = self._layout_for(self.rows)
        self.displays = tuple(
            display for display in (self._display_for(key) for key in iter_keys(self.active_layout)) if display is not None
        )
        return self.displays

    def _layout_for(self, rows: typing.Optional[OverrideRows]) -> Layout:
        if self.layout_from_rows and rows:
            built = layout_from_overrides(rows)
            if built:
                return built
            logger.warning("Override rows build no keys, keeping the base layout")
        return self.layout

    def _display_for(self, key: KeyDef) -> typing.Optional[KeyDisplay]:
        match key:
            case AlphabetKey():
                override = find_override(self.rows, key.character) if self.rows is not None else None
                alt_text = self.punctuation.transform(
                    override.alt if override is not None and override.alt is not None else key.punctuation
                )
                if override is not None and override.main and override.alt:
                    # keys that override both glyphs show the alternate up front
                    return KeyDisplay(key=key, main_text=alt_text, alt_text=alt_text)
                return KeyDisplay(key=key, main_text=self._alphabet_text(key), alt_text=alt_text)
            case SpaceKey():
                return KeyDisplay(key=key, main_text=self.space_label())
            case SymbolKey() | LayoutSwitchKey():
                text = key.display_text
                if text and not (text[0].isalpha() or text[0].isspace()):
                    text = self.punctuation.transform(text)
                return KeyDisplay(key=key, main_text=text)
            case _:
                return None

    def _alphabet_text(self, key: AlphabetKey) -> str:
        if self.rows is None:
            if not _is_single_letter(key.character):
                return key.character
            return key.character.upper() if self.keep_letters_uppercase else self.caps.transform_alphabet(key.character)
        override = find_override(self.rows, key.character)
        if override is None:
            text = key.character
        else:
            text = resolve_display_text(override.display_override, self.sub_mode_label, override.main or key.character)
        return text.upper() if self.keep_letters_uppercase else self.caps.transform_alphabet(text)

    def display_for(self, character: str) -> typing.Optional[KeyDisplay]:
        for display in self.displays:
            if isinstance(display.key, AlphabetKey) and display.key.character == character:
                return display
        return None

    def shape_action(self, action: KeyAction, source: ActionSource = ActionSource.KEYBOARD) -> ShapedAction:
        transition = None
        shaped = action
        match action, source:
            case CharacterAction(act=act), ActionSource.KEYBOARD:
                match self.caps.current:
                    case CapsState.NONE:
                        shaped = msgspec.structs.replace(action, act=act.lower())
                    case CapsState.ONCE:
                        shaped = msgspec.structs.replace(
                            action, act=act.upper(), states=KeyStates.VIRTUAL | KeyStates.SHIFT
                        )
                        transition = self.caps.consume()
                    case CapsState.LOCK:
                        shaped = msgspec.structs.replace(
                            action, act=act.upper(), states=KeyStates.VIRTUAL | KeyStates.CAPS_LOCK
                        )
            case CharacterAction(), ActionSource.POPUP:
                # popup picks are committed as shown; they only use up a one-shot shift
                if self.caps.current is CapsState.ONCE:
                    transition = self.caps.consume()
            case CapsAction(lock=lock), _:
                transition = self.caps.switch(lock)
        if transition is not None and transition.changed:
            self.refresh_key_displays()
        return ShapedAction(action=shaped, source=source, transition=transition)

    def shape_popup_preview(self, text: str) -> str:
        if len(text) != 1:
            return text
        if text.isalpha():
            return self.caps.transform_alphabet(text)
        return self.punctuation.transform(text)

    def shape_popup_action(self, action: PopupAction) -> PopupAction:
        match action:
            case PreviewAction(content=content) | PreviewUpdateAction(content=content):
                return msgspec.structs.replace(action, content=self.shape_popup_preview(content))
            case ShowKeyboardAction(label=label) if _is_single_letter(label):
                return msgspec.structs.replace(action, label=self.caps.transform_alphabet(label))
            case _:
                return action

    def space_label(self) -> str:
        if self.context is None:
            return ""
        sub_mode = self.context.sub_mode_label or self.context.sub_mode_name
        if sub_mode:
            return f"{self.context.display_name} ({sub_mode})"
        return self.context.display_name
