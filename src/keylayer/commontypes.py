# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import typing

if typing.TYPE_CHECKING:
    import pathlib


class KeylayerError(Exception):
    pass


class ConfigError(KeylayerError):
    def __init__(self, path: pathlib.Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class InvalidStateError(KeylayerError):
    pass
