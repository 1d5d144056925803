"""Directive registry: attribute names mapped to reverse-binding handlers.

A directive is an attribute on an element node, e.g. v-model="name",
that links a model key to the node's value field in both directions.
The scanner handles the model -> node direction; the registered handler
attaches the node -> model direction.

Handlers live in an explicit table. handler_id() derives the camel-case
identifier for a directive once, at registration, for display and
introspection only; nothing is looked up by a synthesized name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping

from vmbind.exceptions import UnknownDirectiveError

if TYPE_CHECKING:
    from vmbind.binding import DirectiveBinding
    from vmbind.channel import Path
    from vmbind.observable import ObservableModel

Handler = Callable[[Any, "Path", "ObservableModel", "DirectiveBinding | None"], None]


def handler_id(name: str) -> str:
    """'v-model' -> 'vModel': words joined, every word after the first capitalized."""
    first, *rest = name.split("-")
    return first + "".join(word[:1].upper() + word[1:] for word in rest)


def bind_v_model(
    node, path: Path, model: ObservableModel, binding: DirectiveBinding | None = None
) -> None:
    """Write every input event on node back into the model.

    With a binding, events go through binding.on_input so the echo of
    the binding's own write is dropped.
    """
    if binding is not None:
        node.add_input_listener(binding.on_input)
        return

    def _on_input(value) -> None:
        model.set(path, value)

    node.add_input_listener(_on_input)


DEFAULT_DIRECTIVES: Mapping[str, Handler] = {
    "v-model": bind_v_model,
}


class DirectiveRegistry:
    """Static table: directive attribute name -> handler."""

    def __init__(self, handlers: Mapping[str, Handler] | None = None) -> None:
        self._handlers: dict[str, Handler] = {}
        self.handler_ids: dict[str, str] = {}
        for name, handler in (DEFAULT_DIRECTIVES if handlers is None else handlers).items():
            self.register(name, handler)

    def register(self, name: str, handler: Handler) -> None:
        self._handlers[name] = handler
        self.handler_ids[name] = handler_id(name)

    def is_directive(self, name: str) -> bool:
        return name in self._handlers

    def lookup(self, name: str) -> Handler:
        try:
            return self._handlers[name]
        except KeyError:
            raise UnknownDirectiveError(name) from None

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def __contains__(self, name: str) -> bool:
        return self.is_directive(name)

    def __repr__(self) -> str:
        return f"DirectiveRegistry({list(self._handlers)!r})"


def default_registry() -> DirectiveRegistry:
    """A fresh registry holding the built-in directives."""
    return DirectiveRegistry()
