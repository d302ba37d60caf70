# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Visited-object map threaded through equal, clone and to_json."""

from __future__ import annotations

from typing import Any

# ###############
# Public Interface
# ###############


class EqualStack:
    """Maps already-visited objects to their counterpart.

    For ``clone`` the counterpart is the copy made for the source object;
    for ``equal`` it is the object the source was compared against. Keys
    are compared by identity, so unhashable containers can be tracked and
    two equal-but-distinct objects never collide. Sources are kept alive for
    the lifetime of the stack, which is one top-level call.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, Any]] = {}

    def get(self, source: object) -> Any:
        """Return the counterpart recorded for *source*, or None."""
        entry = self._entries.get(id(source))
        return entry[1] if entry is not None else None

    def add(self, source: object, counterpart: object) -> None:
        """Record *counterpart* for *source*, replacing any earlier record."""
        self._entries[id(source)] = (source, counterpart)

    def __contains__(self, source: object) -> bool:
        return id(source) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
