"""Runtime settings shared by models, scanners and view models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from vmbind._tracking import DEFAULT_MAX_DEPTH
from vmbind.binding import default_formatter


@dataclass(frozen=True)
class BindConfig:
    """
    Settings for one binding setup.

    strict: raise the first scan-time error instead of skipping the
        offending binding site.
    max_mutation_depth: how many set() calls may nest inside each other's
        notifications before ReentrantMutationError is raised.
    formatter: turns a model value into the text written to a node.
    """
    strict: bool = False
    max_mutation_depth: int = DEFAULT_MAX_DEPTH
    formatter: Callable[[Any], str] = default_formatter
