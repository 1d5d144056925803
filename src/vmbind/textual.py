"""Textual integration for vmbind. Opt-in — requires textual.

Exposes a running Textual app's widget tree through the node interface
the scanner expects:

- Static (and Label) widgets are text nodes: content is the template,
  update() writes the rendered text.
- Input widgets are form nodes: value is the reciprocal field, and
  Input.Changed messages are the input events.
- every other widget is a structural node.

Textual widgets carry no free-form attributes, so directive attributes
are supplied per widget id:

    self.bound_tree, vm = bind_app(
        app, {"name": "Saitama"}, attributes={"name-input": {"v-model": "name"}}
    )

Textual delivers Input.Changed through the message queue rather than to
per-widget listeners, so the app forwards them:

    def on_input_changed(self, event):
        self.bound_tree.dispatch(event)

Writing Input.value posts an Input.Changed of its own; the bridge
remembers the value it pushed and drops that echo.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Mapping

from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Input, Static

from vmbind.viewmodel import ViewModel

logger = logging.getLogger("vmbind.textual")

# Module-owned pause state — keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Stop routing input events while widgets are being replaced."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a state where events may be routed?"""
    return app.is_running and id(app) not in _paused_apps


class WidgetNode:
    """Structural node around any widget."""

    is_text = False

    def __init__(self, tree: TextualTree, widget: Widget) -> None:
        self.tree = tree
        self.widget = widget

    @property
    def children(self) -> list:
        return [self.tree.node(child) for child in self.widget.children]

    @property
    def attributes(self) -> dict[str, str]:
        return self.tree.attributes_for(self.widget)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.widget!r})"


class StaticNode:
    """Text node around a Static widget."""

    is_text = True

    def __init__(self, tree: TextualTree, widget: Static) -> None:
        self.tree = tree
        self.widget = widget

    def get_text(self) -> str:
        return str(self.widget.content)

    def set_text(self, text: str) -> None:
        self.widget.update(text)

    def __repr__(self) -> str:
        return f"StaticNode({self.widget!r})"


class InputNode(WidgetNode):
    """Form node around an Input widget."""

    def __init__(self, tree: TextualTree, widget: Input) -> None:
        super().__init__(tree, widget)
        self._listeners: list = []
        self._pushed: str | None = None

    def get_value(self) -> str:
        return self.widget.value

    def set_value(self, value: str) -> None:
        self._pushed = value
        self.widget.value = value

    def add_input_listener(self, callback) -> None:
        self._listeners.append(callback)

    def deliver(self, value: str) -> None:
        """Fire listeners for a user edit; drop the echo of our own write."""
        if self._pushed is not None and value == self._pushed:
            self._pushed = None
            return
        self._pushed = None
        for listener in list(self._listeners):
            listener(value)


class TextualTree:
    """Node-interface view of one Textual app."""

    def __init__(self, app, attributes: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self.app = app
        self._attributes = {wid: dict(attrs) for wid, attrs in (attributes or {}).items()}
        self._nodes: dict[int, Any] = {}

    def node(self, widget: Widget):
        """The (cached) adapter for widget."""
        key = id(widget)
        if key not in self._nodes:
            if isinstance(widget, Static):
                self._nodes[key] = StaticNode(self, widget)
            elif isinstance(widget, Input):
                self._nodes[key] = InputNode(self, widget)
            else:
                self._nodes[key] = WidgetNode(self, widget)
        return self._nodes[key]

    def root(self) -> WidgetNode:
        """The current screen as a structural node. Warns about unknown widget ids."""
        screen = self.app.screen
        for wid in self._attributes:
            try:
                screen.query_one(f"#{wid}")
            except NoMatches:
                logger.warning("No widget with id %r; its directives are ignored", wid)
        return self.node(screen)

    def attributes_for(self, widget: Widget) -> dict[str, str]:
        if widget.id is None:
            return {}
        return dict(self._attributes.get(widget.id, {}))

    def dispatch(self, event: Input.Changed) -> None:
        """Route an Input.Changed message to the listeners of its input."""
        if not is_safe(self.app):
            return
        node = self._nodes.get(id(event.input))
        if not isinstance(node, InputNode):
            return
        # The app records the thread its loop runs on; call_from_thread refuses that thread.
        app_thread = getattr(self.app, "_thread_id", None)
        if app_thread is not None and threading.get_ident() != app_thread:
            self.app.call_from_thread(node.deliver, event.value)
        else:
            node.deliver(event.value)


def bind_app(app, data, attributes=None, **kwargs) -> tuple[TextualTree, ViewModel]:
    """Scan app's current screen against data. kwargs go to ViewModel."""
    tree = TextualTree(app, attributes)
    return tree, ViewModel(tree.root(), data, **kwargs)
