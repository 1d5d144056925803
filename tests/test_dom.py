"""Tests for the in-memory node tree."""

from vmbind.dom import Element, ElementLike, InputElement, InputLike, TextLike, TextNode


class TestTree:
    def test_strings_become_text_nodes(self):
        root = Element("div", children=["hi", Element("b", children=["there"])])
        first, bold = root.children
        assert isinstance(first, TextNode)
        assert first.parent is root
        assert root.text_content == "hithere"

    def test_find(self):
        field = InputElement({"id": "x"})
        root = Element("div", children=[Element("form", children=[field])])
        assert root.find(lambda el: el.attributes.get("id") == "x") is field
        assert root.find(lambda el: el.tag == "table") is None

    def test_protocols(self):
        assert isinstance(TextNode("a"), TextLike)
        assert isinstance(Element("div"), ElementLike)
        assert isinstance(InputElement(), InputLike)


class TestInputElement:
    def test_set_value_does_not_fire(self):
        field = InputElement()
        log = []
        field.add_input_listener(log.append)
        field.set_value("quiet")
        assert log == []
        assert field.get_value() == "quiet"

    def test_dispatch_input_fires(self):
        field = InputElement()
        log = []
        field.add_input_listener(log.append)
        field.dispatch_input("typed")
        assert log == ["typed"]
        assert field.value == "typed"
