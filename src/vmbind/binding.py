"""
Bindings: discovered sites in a node tree that re-render on channel updates.

This module provides two update strategies:
- TextBinding: rebuilds a text node from its {{token}} template
- DirectiveBinding: keeps a form node's value field and one model key in sync

A binding keeps a cache of the last value seen for each path it depends
on. A text template that references several keys therefore renders
correctly when only one of them is notified.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

if TYPE_CHECKING:
    from .channel import Channel, Path
    from .observable import ObservableModel
    from .template import Template


# Type aliases
Formatter = Callable[[Any], str]


def default_formatter(value: Any) -> str:
    """Default formatter: convert value to string."""
    if value is None:
        return ""
    if isinstance(value, float):
        # Format floats nicely
        if value.is_integer():
            return str(int(value))
        return f"{value:.6g}"
    return str(value)


class Binding:
    """
    Base class for all bindings.

    A binding owns a reference to one external node (the node itself
    belongs to the host tree), the template it renders and a cache of
    the values of its dependency paths.
    """

    strategy: str = ""

    def __init__(self, node: Any, template: Any, formatter: Optional[Formatter] = None):
        self.node = node
        self.template = template
        self.formatter = formatter or default_formatter
        self.data: dict[Path, Any] = {}

    def subscribe(self, channel: Channel) -> None:
        """Subscribe to a channel; the channel will call update() on change."""
        channel.subscribe(self)

    def update(self, path: Path, value: Any) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.template)!r})"


class TextBinding(Binding):
    """
    Text node binding: template -> text content.

    On update the cache is refreshed and the whole template re-rendered,
    visiting tokens in template order.
    """

    strategy = "text"

    def __init__(
        self,
        node: Any,
        template: Template,
        paths: Mapping[str, Path],
        formatter: Optional[Formatter] = None,
    ):
        super().__init__(node, template, formatter)
        # token name -> resolved model path
        self.paths = dict(paths)

    def render(self) -> str:
        values = {token: self.data.get(path) for token, path in self.paths.items()}
        return self.template.render(values, self.formatter)

    def update(self, path: Path, value: Any) -> None:
        self.data[path] = value
        self.node.set_text(self.render())


class DirectiveBinding(Binding):
    """
    Directive binding: model value <-> node value field.

    One key, one node. update() pushes the model value into the field and
    on_input() writes the field back into the model. While update() is
    writing, on_input() ignores the field, so a host that echoes
    programmatic writes back as input events does not notify the channel
    a second time.
    """

    strategy = "directive"

    def __init__(
        self,
        node: Any,
        path: Path,
        model: ObservableModel,
        formatter: Optional[Formatter] = None,
    ):
        super().__init__(node, ".".join(path), formatter)
        self.path = path
        self.model = model
        self._updating = False

    def update(self, path: Path, value: Any) -> None:
        self.data[path] = value
        text = self.formatter(value)
        if self.node.get_value() == text:
            return
        self._updating = True
        try:
            self.node.set_value(text)
        finally:
            self._updating = False

    def on_input(self, value: Any) -> None:
        """Node -> model. Ignored while update() is writing the field."""
        if self._updating:
            return
        self.model.set(self.path, value)
