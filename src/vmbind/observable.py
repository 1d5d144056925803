"""Observable models — plain mappings whose every key owns a Channel.

ObservableModel wraps a caller-supplied mapping and writes through into
it. Construction walks the mapping recursively and registers one Channel
per key at every depth, keyed by the full path from the root, so that
same-named fields at different depths never share a channel.

Reads and writes are explicit method calls (model.get / model.set, or an
Observable handle from model.observable(key)); nothing is trapped
implicitly. set() notifies unconditionally and synchronously: by the
time it returns, every subscribed binding has re-rendered.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Generic, Iterator, TypeVar

from vmbind._tracking import mutation
from vmbind.channel import Channel, Path
from vmbind.config import BindConfig
from vmbind.exceptions import AmbiguousKeyError, MissingKeyError, ModelCycleError

logger = logging.getLogger("vmbind.observable")

T = TypeVar("T")

Key = str | Path


def split_key(key: Key) -> Path:
    """Normalize a tuple path or a dotted string into a path tuple."""
    if isinstance(key, tuple):
        return key
    return tuple(key.split("."))


class Observable(Generic[T]):
    """Handle for one model path. Every read and write goes through the model."""

    __slots__ = ("_model", "path")

    def __init__(self, model: ObservableModel, path: Path) -> None:
        self._model = model
        self.path = path

    def get(self) -> T:
        return self._model.get(self.path)

    def set(self, value: T) -> None:
        self._model.set(self.path, value)

    @property
    def channel(self) -> Channel:
        return self._model.channel(self.path)

    def subscribe(self, binding) -> None:
        """Subscribe a binding to this path's channel."""
        self.channel.subscribe(binding)

    def __repr__(self) -> str:
        return f"Observable({'.'.join(self.path)!r})"


class ObservableModel:
    """A mapping from key to value where every key additionally owns a Channel."""

    def __init__(self, data: MutableMapping, config: BindConfig | None = None) -> None:
        self._data = data
        self._config = config or BindConfig()
        self._channels: dict[Path, Channel] = {}
        self._register(data, (), set())

    @property
    def data(self) -> MutableMapping:
        """The wrapped mapping. Writing to it directly bypasses notification."""
        return self._data

    @property
    def config(self) -> BindConfig:
        return self._config

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._channels)

    @property
    def channels(self) -> dict[Path, Channel]:
        """A copy of the path -> Channel table, in registration order."""
        return dict(self._channels)

    # ─── Construction ────────────────────────────────────────────────────────

    def _register(self, data: Mapping, prefix: Path, visiting: set[int]) -> None:
        """Create a Channel for every key under data. visiting holds the ids of enclosing mappings."""
        if id(data) in visiting:
            where = ".".join(prefix) or "<root>"
            raise ModelCycleError(f"Data mapping at {where!r} contains itself")
        visiting.add(id(data))
        for key, value in data.items():
            path = prefix + (key,)
            if path not in self._channels:
                self._channels[path] = Channel(path)
            if isinstance(value, Mapping):
                self._register(value, path, visiting)
        visiting.discard(id(data))

    # ─── Key resolution ──────────────────────────────────────────────────────

    def resolve(self, key: Key) -> Path:
        """Resolve a bare name, dotted path or tuple path to a registered path.

        A bare name matches a top-level key first, then the unique nested
        path ending in that name.
        """
        if isinstance(key, tuple) or "." in key:
            path = split_key(key)
            if path not in self._channels:
                raise MissingKeyError(".".join(path))
            return path

        if (key,) in self._channels:
            return (key,)
        candidates = [path for path in self._channels if path[-1] == key]
        if len(candidates) == 1:
            return candidates[0]
        if candidates:
            raise AmbiguousKeyError(key, candidates)
        raise MissingKeyError(key)

    def has_key(self, key: Key) -> bool:
        try:
            self.resolve(key)
        except MissingKeyError:
            return False
        return True

    def channel(self, key: Key) -> Channel:
        return self._channels[self.resolve(key)]

    def observable(self, key: Key) -> Observable:
        return Observable(self, self.resolve(key))

    # ─── Read / write ────────────────────────────────────────────────────────

    def _container(self, path: Path) -> MutableMapping | None:
        """Walk to the mapping that holds the last element of path.

        Returns None when an intermediate value is no longer a mapping.
        """
        node = self._data
        for part in path[:-1]:
            if not isinstance(node, Mapping):
                return None
            node = node.get(part)
        return node if isinstance(node, MutableMapping) else None

    def _value_at(self, path: Path):
        container = self._container(path)
        return None if container is None else container.get(path[-1])

    def get(self, key: Key):
        """Return the current stored value, None if an enclosing mapping is gone."""
        value = self._value_at(self.resolve(key))
        logger.debug("get value %r", value)
        return value

    def set(self, key: Key, value) -> None:
        """Store value and notify the path's channel, even if the value is unchanged.

        Every channel below path is notified too, parent first, with its
        value in the new state: None where the new value no longer holds
        that key.
        """
        path = self.resolve(key)
        with mutation(self._config.max_mutation_depth, path):
            container = self._container(path)
            if container is None:
                raise MissingKeyError(
                    ".".join(path),
                    f"Cannot set {'.'.join(path)!r}: its parent is not a mapping",
                )
            if isinstance(value, Mapping):
                self._register(value, path, self._ancestor_ids(path))
            logger.debug("value change from %r to %r", container.get(path[-1]), value)
            container[path[-1]] = value
            self._channels[path].notify(value)
            self._notify_descendants(path)

    def _ancestor_ids(self, path: Path) -> set[int]:
        ids = {id(self._data)}
        node = self._data
        for part in path[:-1]:
            node = node[part]
            ids.add(id(node))
        return ids

    def _notify_descendants(self, prefix: Path) -> None:
        # Channels are registered parent before child, so dict order is parent first.
        depth = len(prefix)
        descendants = [
            (path, channel) for path, channel in self._channels.items()
            if len(path) > depth and path[:depth] == prefix
        ]
        for path, channel in descendants:
            channel.notify(self._value_at(path))

    def __contains__(self, key: Key) -> bool:
        return self.has_key(key)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._channels)

    def __repr__(self) -> str:
        return f"ObservableModel({self._data!r})"
