# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import trio

from keylayer.actions import ActionSource, CapsAction, CharacterAction, DismissAction, KeyStates, PreviewAction
from keylayer.config_cache import ConfigCache
from keylayer.engine import LayoutTransformEngine
from keylayer.keystreams import ActionRequest, make_action_stream
from keylayer.modifiers import CapsState, CapsTransition


def run_through_stream(engine, items):
    async def runner():
        send_channel, receive_channel = trio.open_memory_channel(len(items))
        async with make_action_stream(receive_channel, engine) as stream:
            for item in items:
                await send_channel.send(item)
            return [await stream.receive() for _ in items]

    return trio.run(runner)


def test_shape_actions_stage(tmp_path):
    engine = LayoutTransformEngine(ConfigCache(tmp_path / "missing.json"))
    engine.on_attach()

    results = run_through_stream(
        engine,
        [
            ActionRequest(action=CapsAction()),
            PreviewAction(content="h"),
            ActionRequest(action=CharacterAction(act="h")),
            ActionRequest(action=CharacterAction(act="i")),
            PreviewAction(content="i"),
            DismissAction(),
            "not an action",
        ],
    )

    assert results[0].transition == CapsTransition(before=CapsState.NONE, after=CapsState.ONCE)
    assert results[1] == PreviewAction(content="H")
    assert results[2].action == CharacterAction(act="H", states=KeyStates.VIRTUAL | KeyStates.SHIFT)
    assert results[2].source is ActionSource.KEYBOARD
    assert results[3].action == CharacterAction(act="i")
    assert results[4] == PreviewAction(content="i")
    assert results[5] == DismissAction()
    assert results[6] == "not an action"
    assert engine.caps_state is CapsState.NONE


def test_popup_requests_keep_their_case(tmp_path):
    engine = LayoutTransformEngine(ConfigCache(tmp_path / "missing.json"))
    engine.switch_caps()

    (shaped,) = run_through_stream(engine, [ActionRequest(action=CharacterAction(act="ä"), source=ActionSource.POPUP)])

    assert shaped.action.act == "ä"
    assert shaped.source is ActionSource.POPUP
    assert engine.caps_state is CapsState.NONE
