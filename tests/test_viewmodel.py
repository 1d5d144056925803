"""End-to-end tests for ViewModel over the in-memory tree."""

from vmbind import ViewModel
from vmbind.dom import Element, InputElement, TextNode


class _EchoInput(InputElement):
    """Input that fires its listeners on programmatic writes too."""

    def set_value(self, value):
        self.dispatch_input(value)


class _Spy:
    def __init__(self):
        self.values = []

    def update(self, path, value):
        self.values.append(value)


class TestOneWay:
    def test_multi_token_template(self):
        node = TextNode("A {{x}} B {{y}} C")
        vm = ViewModel(Element("div", children=[node]), {"x": "1", "y": "2"}, two_way=False)
        assert node.text == "A 1 B 2 C"
        vm.set("x", "9")
        assert node.text == "A 9 B 2 C"

    def test_only_subscribed_nodes_change(self):
        a = TextNode("{{a}}")
        b = TextNode("{{b}}")
        vm = ViewModel(Element("div", children=[a, b]), {"a": 1, "b": 2}, two_way=False)
        vm.set("a", 10)
        assert a.text == "10"
        assert b.text == "2"

    def test_idempotent_set(self):
        node = TextNode("[{{x}}]")
        vm = ViewModel(Element("div", children=[node]), {"x": "v"}, two_way=False)
        vm.set("x", "w")
        first = node.text
        vm.set("x", "w")
        assert node.text == first == "[w]"

    def test_directives_left_alone(self):
        field = InputElement({"v-model": "x"})
        vm = ViewModel(Element("div", children=[field]), {"x": "1"}, two_way=False)
        assert field.value == ""
        assert not vm.two_way
        assert vm.bindings == []

    def test_reset_buttons_drive_page(self):
        """Button handlers drive the page by calling set()."""
        root = Element("div", children=[
            Element("p", children=["{{start}}: {{color}} {{size}} {{name}} says {{greeting}} {{end}}"]),
        ])
        data = {
            "color": "red", "size": "large", "name": "Tony",
            "greeting": "hello!", "start": "begin", "end": "finish",
        }
        vm = ViewModel(root, data, two_way=False)
        assert root.text_content == "begin: red large Tony says hello! finish"
        for key, value in {"color": "black", "size": "small", "name": "Saitama"}.items():
            vm.set(key, value)
        assert root.text_content == "begin: black small Saitama says hello! finish"


class TestTwoWay:
    def _page(self):
        field = _EchoInput({"v-model": "name"})
        label = TextNode("Hero: {{name}}")
        root = Element("div", children=[field, Element("p", children=[label])])
        return root, field, label

    def test_sync_cycle(self):
        root, field, label = self._page()
        vm = ViewModel(root, {"name": "Saitama"})
        assert field.value == "Saitama"
        assert label.text == "Hero: Saitama"

        field.dispatch_input("Genos")
        assert vm.get("name") == "Genos"
        assert label.text == "Hero: Genos"

        spy = _Spy()
        vm.model.channel("name").subscribe(spy)
        vm.set("name", "King")
        assert field.value == "King"
        assert label.text == "Hero: King"
        assert spy.values == ["King"]

    def test_nested_object(self):
        label = TextNode("{{name}}")
        field = InputElement({"v-model": "user.name"})
        vm = ViewModel(Element("div", children=[label, field]), {"user": {"name": "A"}})
        assert label.text == "A"
        vm.set("name", "B")
        assert label.text == "B"
        assert field.value == "B"
        field.dispatch_input("C")
        assert vm.data == {"user": {"name": "C"}}
        assert label.text == "C"

    def test_no_subscriber_key(self):
        root, _, _ = self._page()
        vm = ViewModel(root, {"name": "x", "unused": 0})
        vm.set("unused", 1)  # no error
        assert vm.get("unused") == 1

    def test_several_inputs_same_key(self):
        a = InputElement({"v-model": "q"})
        b = InputElement({"v-model": "q"})
        vm = ViewModel(Element("div", children=[a, b]), {"q": ""})
        a.dispatch_input("typed")
        assert b.value == "typed"
        assert vm.get("q") == "typed"

    def test_errors_exposed(self):
        vm = ViewModel(Element("div", children=["{{missing}}"]), {"x": 1})
        assert len(vm.errors) == 1
        assert "one-way" not in repr(vm)

    def test_observable_handle(self):
        label = TextNode("{{x}}")
        vm = ViewModel(Element("div", children=[label]), {"x": 1})
        vm.observable("x").set(2)
        assert label.text == "2"


class TestNestedReplace:
    def test_emptied_parent_clears_text(self):
        label = TextNode("Hi {{name}}")
        vm = ViewModel(Element("div", children=[label]), {"user": {"name": "A"}}, two_way=False)
        assert label.text == "Hi A"
        vm.set("user", {})
        assert label.text == "Hi "
        assert vm.get("name") is None

    def test_replaced_parent_updates_field(self):
        field = InputElement({"v-model": "user.name"})
        vm = ViewModel(Element("div", children=[field]), {"user": {"name": "A"}})
        vm.set("user", {"name": "B"})
        assert field.value == "B"
        vm.set("user", None)
        assert field.value == ""
