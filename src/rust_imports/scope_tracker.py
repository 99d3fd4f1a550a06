"""Scope tracking utilities for syntax tree traversal.

This module tracks which names are locally visible while walking a Rust file,
so that a reference to a local module or a renamed import is not mistaken for
an external crate. It also tracks whether the current position is only compiled
in test builds.

Key Components:
    - ScopeStack: last-in-first-out stack of Scope frames, never empty
    - Shadow set: a count map of every name declared by any open frame

The root frame is created with the stack and is never popped. Test-only status
is inherited: a frame pushed under a test-only frame is test-only as well.
"""

import logging
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager

from rust_imports.models import Scope

logger = logging.getLogger(__name__)


class ScopeStack:
    """Stack of lexical scopes with O(1) shadowing queries."""

    def __init__(self) -> None:
        """Create a stack holding only the root scope."""
        self._frames: list[Scope] = [Scope()]
        self._shadowed: Counter[str] = Counter()

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self, *, is_test_marker: bool = False) -> Scope:
        """Open a new scope.

        Args:
            is_test_marker: Whether the construct opening this scope marks it as
                test-only (a #[test] function or a #[cfg(test)] module)

        Returns:
            The new top frame
        """
        frame = Scope(is_test_only=is_test_marker or self.current_is_test_only())
        self._frames.append(frame)
        return frame

    def pop(self) -> Scope:
        """Close the top scope and forget every name it declared.

        Raises:
            AssertionError: If attempting to remove the root scope
        """
        assert len(self._frames) > 1, "Cannot pop root scope"
        frame = self._frames.pop()
        for name in frame.local_names:
            self._shadowed[name] -= 1
            if self._shadowed[name] <= 0:
                del self._shadowed[name]
        return frame

    @contextmanager
    def scope(self, *, is_test_marker: bool = False) -> Iterator[Scope]:
        """Push a scope for the duration of the ``with`` block."""
        frame = self.push(is_test_marker=is_test_marker)
        try:
            yield frame
        finally:
            self.pop()

    def declare_local(self, name: str) -> None:
        """Make ``name`` visible as a local module or rename in the current scope.

        Re-declaring a name that is already shadowed does nothing; the first
        declaration stays in effect until the scope that made it is popped.
        """
        if name in self._shadowed:
            return
        self._frames[-1].local_names.append(name)
        self._shadowed[name] += 1
        logger.debug("Declared local name %r at depth %d", name, self.depth)

    def is_shadowed(self, name: str) -> bool:
        return name in self._shadowed

    def current_is_test_only(self) -> bool:
        return self._frames[-1].is_test_only

    def is_root(self) -> bool:
        return len(self._frames) == 1
