# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import logging
import pathlib
import threading
import typing

import msgspec

from .overrides import OverrideRows, OverrideTable, decode_override_table

logger = logging.getLogger(__name__)

DEFAULT_CONTEXT = "default"


@enum.unique
class FailurePolicy(enum.Enum):
    # remember that a given file version failed to parse; retry once its mtime changes
    CACHE_UNTIL_MODIFIED = "cache_until_modified"
    # re-parse a broken file on every lookup
    RETRY_EVERY_CALL = "retry_every_call"


class _CacheEntry(msgspec.Struct, frozen=True):
    table: typing.Optional[OverrideTable]
    modified_at: int


class ConfigCache:
    """Memoizes the layout override file, keyed on its modification time.

    A missing or malformed file is not an error; get() returns None and the
    keyboard carries on with its base layout.
    """

    _entry: typing.Optional[_CacheEntry]

    def __init__(self, path: pathlib.Path | str, failure_policy: FailurePolicy = FailurePolicy.CACHE_UNTIL_MODIFIED):
        self.path = pathlib.Path(path)
        self.failure_policy = failure_policy
        self._entry = None
        self._lock = threading.Lock()

    def get(self) -> typing.Optional[OverrideTable]:
        with self._lock:
            try:
                modified_at = self.path.stat().st_mtime_ns
            except FileNotFoundError:
                if self._entry is not None:
                    logger.debug("Layout override file %s is gone", self.path)
                self._entry = None
                return None
            except OSError as exc:
                logger.warning("Unable to stat layout override file %s: %s", self.path, exc)
                self._entry = None
                return None

            entry = self._entry
            if entry is not None and entry.modified_at == modified_at:
                if entry.table is not None or self.failure_policy is FailurePolicy.CACHE_UNTIL_MODIFIED:
                    return entry.table

            table = self._load()
            self._entry = _CacheEntry(table=table, modified_at=modified_at)
            return table

    def rows_for(self, context_id: typing.Optional[str]) -> typing.Optional[OverrideRows]:
        table = self.get()
        if table is None:
            return None
        if context_id is not None and context_id in table:
            return table[context_id]
        return table.get(DEFAULT_CONTEXT)

    def invalidate(self):
        with self._lock:
            self._entry = None

    def _load(self) -> typing.Optional[OverrideTable]:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            logger.warning("Unable to read layout override file %s: %s", self.path, exc)
            return None
        try:
            table = decode_override_table(data)
        except (msgspec.DecodeError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring malformed layout override file %s: %s", self.path, exc)
            return None
        logger.debug("Loaded layout overrides for %d contexts from %s", len(table), self.path)
        return table
