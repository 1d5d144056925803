"""Mutation depth tracking.

set() notifies channels synchronously, and a binding or an input handler
may call set() again while that notification is still running. Nothing
stops such a chain from recursing forever (a directive bound to a handler
that writes its own key is enough), so every set() runs inside
mutation(), which counts the nesting and fails fast past a limit.

The counter is module-wide: the runtime is single-threaded and a chain
can hop between models.
"""

from __future__ import annotations

from contextlib import contextmanager

from vmbind.exceptions import ReentrantMutationError

DEFAULT_MAX_DEPTH = 100

# Number of set() calls currently on the stack.
_depth: int = 0


def begin_mutation(limit: int = DEFAULT_MAX_DEPTH, path=None) -> int:
    """Enter a set() call. Raises ReentrantMutationError past the limit."""
    global _depth
    if _depth >= limit:
        raise ReentrantMutationError(limit, path)
    _depth += 1
    return _depth


def end_mutation() -> None:
    """Leave a set() call."""
    global _depth
    _depth -= 1


@contextmanager
def mutation(limit: int = DEFAULT_MAX_DEPTH, path=None):
    """Context manager around one set() call.

    Usage:
        with mutation(config.max_mutation_depth, path):
            store(value)
            channel.notify(value)
    """
    begin_mutation(limit, path)
    try:
        yield
    finally:
        end_mutation()


def get_depth() -> int:
    """Current nesting of set() calls. Useful for testing."""
    return _depth
