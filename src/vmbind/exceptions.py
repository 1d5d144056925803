"""Exceptions raised by vmbind."""

from __future__ import annotations


class VMBindError(Exception):
    """Base exception for all vmbind errors."""
    pass


class MissingKeyError(VMBindError, KeyError):
    """Raised when a template token, directive value or set target names no model key."""

    def __init__(self, key, message: str | None = None):
        self.key = key
        super().__init__(message or f"No model key matches {key!r}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class AmbiguousKeyError(MissingKeyError):
    """Raised when a bare name matches more than one nested path."""

    def __init__(self, key: str, candidates):
        self.candidates = tuple(candidates)
        paths = ", ".join(".".join(p) for p in self.candidates)
        super().__init__(key, f"Key {key!r} is ambiguous, candidates: {paths}")


class MalformedTemplateError(VMBindError):
    """
    Raised when a text template holds a stray '{{' or '}}'.

    Every delimiter in a bound template must belong to a well-formed
    {{identifier}} token, otherwise literal and token segments would
    be misaligned on render.
    """

    def __init__(self, template: str, message: str | None = None):
        self.template = template
        super().__init__(message or f"Unbalanced template delimiters in {template!r}")


class ReentrantMutationError(VMBindError):
    """Raised when nested set() calls inside notifications go past the depth limit."""

    def __init__(self, depth: int, path=None):
        self.depth = depth
        self.path = path
        where = f" while setting {'.'.join(path)!r}" if path else ""
        super().__init__(f"Mutation depth limit {depth} exceeded{where}")


class ModelCycleError(VMBindError):
    """Raised when the data mapping contains itself."""
    pass


class UnknownDirectiveError(VMBindError, LookupError):
    """Raised when looking up a directive that was never registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown directive {name!r}")
