"""Node tree interface, plus a small in-memory tree that implements it.

vmbind never owns the node tree. The scanner and bindings only need the
duck-typed surface described by the protocols below; any host (a browser
bridge, a Textual app, the classes in this module) can provide it.

The in-memory tree mirrors a browser DOM closely enough for the binding
rules: TextNode is a leaf, Element carries ordered attributes and
children, InputElement has a value field and input listeners. Assigning
the value programmatically does not fire listeners; dispatch_input()
simulates a user edit and does.
"""

from __future__ import annotations

from typing import Callable, Iterable, Protocol, Sequence, runtime_checkable

InputListener = Callable[[str], None]


@runtime_checkable
class TextLike(Protocol):
    is_text: bool

    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...


@runtime_checkable
class ElementLike(Protocol):
    is_text: bool

    @property
    def children(self) -> Sequence: ...

    @property
    def attributes(self) -> dict[str, str]: ...


@runtime_checkable
class InputLike(ElementLike, Protocol):
    def get_value(self) -> str: ...

    def set_value(self, value: str) -> None: ...

    def add_input_listener(self, callback: InputListener) -> None: ...


class TextNode:
    """Leaf node holding text content."""

    is_text = True

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.parent: Element | None = None

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


class Element:
    """Structural node: a tag, ordered attributes and children."""

    is_text = False

    def __init__(
        self,
        tag: str,
        attributes: dict[str, str] | None = None,
        children: Iterable[Element | TextNode | str] = (),
    ) -> None:
        self.tag = tag
        self.attributes: dict[str, str] = dict(attributes or {})
        self.parent: Element | None = None
        self._children: list[Element | TextNode] = []
        for child in children:
            self.append(child)

    @property
    def children(self) -> tuple[Element | TextNode, ...]:
        return tuple(self._children)

    def append(self, child: Element | TextNode | str) -> Element | TextNode:
        """Append a child node; a plain string becomes a TextNode."""
        if isinstance(child, str):
            child = TextNode(child)
        child.parent = self
        self._children.append(child)
        return child

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes."""
        return "".join(
            child.text if child.is_text else child.text_content
            for child in self._children
        )

    def find(self, predicate: Callable[[Element], bool]) -> Element | None:
        """First descendant element (depth-first) for which predicate is true."""
        for child in self._children:
            if child.is_text:
                continue
            if predicate(child):
                return child
            found = child.find(predicate)
            if found is not None:
                return found
        return None

    def __repr__(self) -> str:
        return f"<{self.tag} {self.attributes!r}>"


class InputElement(Element):
    """Form input: a value field and input-change listeners."""

    def __init__(self, attributes: dict[str, str] | None = None, value: str = "") -> None:
        super().__init__("input", attributes)
        self.value = value
        self._listeners: list[InputListener] = []

    def get_value(self) -> str:
        return self.value

    def set_value(self, value: str) -> None:
        self.value = value

    def add_input_listener(self, callback: InputListener) -> None:
        self._listeners.append(callback)

    def dispatch_input(self, value: str) -> None:
        """Simulate the user typing: store value, then fire every listener."""
        self.value = value
        for listener in list(self._listeners):
            listener(value)
