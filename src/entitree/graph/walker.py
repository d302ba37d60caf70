# Copyright 2026 Entitree Contributors
# SPDX-License-Identifier: Apache-2.0

"""Traversal control handed to ``Model.walk`` callbacks."""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class Walker:
    """One-shot signals a walk callback can raise for the current node.

    ``exit()`` abandons the whole traversal; ``skip()`` keeps walking the
    siblings but does not descend into the current node's children. The
    walk driver checks both flags after the callback returns.
    """

    def __init__(self) -> None:
        self._exited = False
        self._skipped = False

    def exit(self) -> None:
        """Stop the traversal entirely."""
        self._exited = True

    def skip(self) -> None:
        """Do not descend into the current node's children."""
        self._skipped = True

    @property
    def exited(self) -> bool:
        return self._exited

    @property
    def skipped(self) -> bool:
        return self._skipped
