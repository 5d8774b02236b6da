import logging

from keylayer.layout import (
    TEXT_LAYOUT,
    AlphabetKey,
    Appearance,
    BackspaceKey,
    CapsKey,
    LayoutSwitchKey,
    SpaceKey,
    SymbolKey,
    iter_keys,
    layout_from_overrides,
)
from keylayer.overrides import decode_override_table


def test_text_layout_shape():
    assert [len(row) for row in TEXT_LAYOUT] == [10, 9, 9, 6]
    assert TEXT_LAYOUT[0][2] == AlphabetKey(character="E", punctuation="3")
    assert TEXT_LAYOUT[2][0] == CapsKey()
    assert TEXT_LAYOUT[2][-2] == AlphabetKey(character="M", punctuation="\\")
    assert TEXT_LAYOUT[3][1] == SymbolKey(symbol=",")


def test_iter_keys_flattens_rows():
    letters = "".join(key.character for key in iter_keys(TEXT_LAYOUT) if isinstance(key, AlphabetKey))
    assert letters == "QWERTYUIOPASDFGHJKLZXCVBNM"


def test_appearances():
    assert AlphabetKey.appearance is Appearance.ALT_TEXT
    assert SymbolKey(symbol=".").appearance is Appearance.TEXT
    assert BackspaceKey().appearance is Appearance.IMAGE


def test_layout_from_overrides(caplog):
    rows = decode_override_table(
        """
        {"myIME": [
          [{"type": "alphabet", "main": "Ş", "alt": "1", "weight": 0.2}, {"type": "alphabet"}],
          [{"type": "layout_switch", "label": "ABC", "subLabel": "abc"}, {"type": "comma", "main": "，"},
           {"type": "space"}, {"type": "joystick"}],
          [{"type": "bogus"}]
        ]}
        """
    )["myIME"]
    with caplog.at_level(logging.WARNING, logger="keylayer.layout"):
        layout = layout_from_overrides(rows)
    assert layout == (
        (AlphabetKey(character="Ş", punctuation="1", weight=0.2),),
        (LayoutSwitchKey(label="ABC", sub_label="abc"), SymbolKey(symbol="，"), SpaceKey()),
    )
    assert "joystick" in caplog.text
    assert "without a main character" in caplog.text
