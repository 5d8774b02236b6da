# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
from contextlib import aclosing, asynccontextmanager
from typing import TYPE_CHECKING, Any, cast

import msgspec
import trio

from .actions import ActionSource, DismissAction, KeyAction, PopupAction, PreviewAction, PreviewUpdateAction, ShowKeyboardAction

if TYPE_CHECKING:
    from .engine import LayoutTransformEngine

logger = logging.getLogger(__name__)


class ActionRequest(msgspec.Struct, frozen=True):
    action: KeyAction
    source: ActionSource = ActionSource.KEYBOARD


POPUP_ACTIONS = (PreviewAction, PreviewUpdateAction, ShowKeyboardAction, DismissAction)


# shape key actions and popup actions against the current keyboard state
class ShapeActions:
    def __init__(self, engine: LayoutTransformEngine):
        self.engine = engine

    async def pump(self, source: trio.MemoryReceiveChannel[Any], sink: trio.MemorySendChannel[Any]):
        async with aclosing(source), aclosing(sink):
            async for item in source:
                if isinstance(item, ActionRequest):
                    await sink.send(self.engine.shape_action(item.action, item.source))
                elif isinstance(item, POPUP_ACTIONS):
                    await sink.send(self.engine.shape_popup_action(cast(PopupAction, item)))
                else:
                    logger.debug("Passing through unshaped item %r", item)
                    await sink.send(item)


@asynccontextmanager
async def make_action_stream(action_channel: trio.MemoryReceiveChannel[Any], engine: LayoutTransformEngine):
    shaped_send_channel, shaped_receive_channel = trio.open_memory_channel(0)
    async with trio.open_nursery() as nursery:
        nursery.start_soon(ShapeActions(engine).pump, action_channel, shaped_send_channel)
        yield shaped_receive_channel
        nursery.cancel_scope.cancel()
