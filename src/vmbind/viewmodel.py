"""ViewModel: wrap a data mapping and bind a node tree to it in one step.

Usage:
    root = Element("div", children=[
        Element("p", children=["Hello {{name}}"]),
        InputElement({"v-model": "name"}),
    ])
    vm = ViewModel(root, {"name": "Saitama"})
    # root's text now reads "Hello Saitama", the input shows "Saitama"

    vm.set("name", "Genos")
    # both follow

two_way=False gives the one-way variant: text templates only, directive
attributes are left alone.
"""

from __future__ import annotations

from typing import Any, MutableMapping

from vmbind.binding import Binding
from vmbind.config import BindConfig
from vmbind.directives import DirectiveRegistry, default_registry
from vmbind.observable import Key, Observable, ObservableModel
from vmbind.scanner import TreeScanner


class ViewModel:
    """Observable model plus the bindings discovered under one root node."""

    def __init__(
        self,
        root: Any,
        data: MutableMapping,
        *,
        two_way: bool = True,
        registry: DirectiveRegistry | None = None,
        config: BindConfig | None = None,
    ) -> None:
        self.root = root
        self.model = ObservableModel(data, config)
        if two_way:
            registry = registry or default_registry()
        else:
            registry = None
        self._scanner = TreeScanner(self.model, registry)
        self._scanner.scan(root)

    @property
    def data(self) -> MutableMapping:
        return self.model.data

    @property
    def bindings(self) -> list[Binding]:
        return list(self._scanner.bindings)

    @property
    def errors(self) -> list[Exception]:
        """Binding sites skipped during the scan."""
        return list(self._scanner.errors)

    @property
    def two_way(self) -> bool:
        return self._scanner.registry is not None

    def get(self, key: Key) -> Any:
        return self.model.get(key)

    def set(self, key: Key, value: Any) -> None:
        self.model.set(key, value)

    def observable(self, key: Key) -> Observable:
        return self.model.observable(key)

    def __repr__(self) -> str:
        mode = "two-way" if self.two_way else "one-way"
        return f"ViewModel({mode}, bindings={len(self._scanner.bindings)})"
