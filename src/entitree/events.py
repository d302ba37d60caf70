# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Synchronous named-channel notifications for models and collections.

Listeners are plain callables subscribed to a channel name. ``trigger``
calls them in subscription order, in the caller's stack frame, and lets
their exceptions propagate. The ``all`` channel additionally receives every
event as ``(name, *args)``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

# ###############
# Public Interface
# ###############

ALL_EVENTS = "all"

Handler = Callable[..., object]


@dataclass(frozen=True)
class ChangeKeyEvent:
    """Payload of ``change:<field>``: the field's previous and new value."""

    prev: Any
    change: Any


@dataclass(frozen=True)
class ChangeEvent:
    """Payload of ``change``: the previous row and the changed fields."""

    prev: Mapping[str, Any]
    changes: Mapping[str, Any]


@dataclass(frozen=True)
class CollectionEvent:
    """Payload of ``add`` and ``remove`` on a collection."""

    type: str
    model: Any
    collection: Any


class EventTrigger:
    """Mixin giving an object its own listener table."""

    def on(self, name: str, handler: Handler) -> Handler:
        """Subscribe *handler* to *name* and return it."""
        self._listener_table().setdefault(name, []).append(handler)
        return handler

    def once(self, name: str, handler: Handler) -> Handler:
        """Subscribe *handler* to the next *name* event only."""

        def _once(*args: Any) -> object:
            self.off(name, _once)
            return handler(*args)

        _once.__wrapped__ = handler  # type: ignore[attr-defined]
        return self.on(name, _once)

    def off(self, name: str | None = None, handler: Handler | None = None) -> None:
        """Unsubscribe listeners.

        With no arguments every listener is removed; with only *name* every
        listener of that channel; otherwise just *handler* (also when it was
        subscribed through :meth:`once`).
        """
        table = self._listener_table()
        if name is None:
            if handler is None:
                table.clear()
                return
            names = list(table)
        else:
            names = [name]

        for channel in names:
            if handler is None:
                table.pop(channel, None)
                continue
            remaining = [
                listener
                for listener in table.get(channel, [])
                if listener is not handler and getattr(listener, "__wrapped__", None) is not handler
            ]
            if remaining:
                table[channel] = remaining
            else:
                table.pop(channel, None)

    def trigger(self, name: str, *args: Any) -> None:
        """Call every listener of *name*, then every ``all`` listener."""
        table = self._listener_table()
        for listener in list(table.get(name, ())):
            listener(*args)
        if name != ALL_EVENTS:
            for listener in list(table.get(ALL_EVENTS, ())):
                listener(name, *args)

    def has_listeners(self, name: str) -> bool:
        """Return True if *name* (or ``all``) has at least one listener."""
        table = self._listener_table()
        return bool(table.get(name)) or bool(table.get(ALL_EVENTS))

    # ################
    # Implementation
    # ################

    def _listener_table(self) -> dict[str, list[Handler]]:
        # Created lazily: clones are built without running __init__.
        table = self.__dict__.get("_listeners")
        if table is None:
            table = {}
            self.__dict__["_listeners"] = table
        return table
