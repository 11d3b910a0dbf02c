# SPDX-License-Identifier: MIT

from typing import TypedDict

from travellog.model.entry import EntryId


class IdMapping(TypedDict):
    synthetic_to_real: dict[int, EntryId]
    real_to_synthetic: dict[EntryId, int]


class IdMap(TypedDict):
    entries: IdMapping
