"""Tree scanner: the one-time traversal that wires a node tree to a model.

For every text node holding {{token}} placeholders the scanner builds a
TextBinding, renders it and subscribes it to each referenced path. For
every element attribute that names a registered directive it builds a
DirectiveBinding, pushes the current value into the node and lets the
directive handler attach the reverse listener.

Errors found at a single site (unknown key, malformed template) are
logged and collected in scanner.errors; that site is skipped and the
scan goes on. BindConfig(strict=True) raises the first one instead.

The scanner keeps no record of visited nodes: scanning a subtree twice
binds it twice.
"""

from __future__ import annotations

import logging
from typing import Any

from vmbind.binding import Binding, DirectiveBinding, TextBinding
from vmbind.config import BindConfig
from vmbind.directives import DirectiveRegistry
from vmbind.exceptions import MalformedTemplateError, MissingKeyError
from vmbind.observable import ObservableModel
from vmbind.template import Template, has_tokens

logger = logging.getLogger("vmbind.scanner")

# Errors that fail one binding site without aborting the scan.
SITE_ERRORS = (MissingKeyError, MalformedTemplateError)


class TreeScanner:
    """Discovers binding sites under a root node and subscribes them."""

    def __init__(
        self,
        model: ObservableModel,
        registry: DirectiveRegistry | None = None,
        config: BindConfig | None = None,
    ) -> None:
        self.model = model
        self.registry = registry
        self.config = config or model.config
        self.bindings: list[Binding] = []
        self.errors: list[Exception] = []

    def scan(self, root: Any) -> list[Binding]:
        """Walk root's descendants depth-first. Returns the bindings created by this call."""
        start, skipped = len(self.bindings), len(self.errors)
        self._walk(root)
        created = self.bindings[start:]
        logger.info(
            "Scanned tree: %d bindings, %d skipped sites",
            len(created), len(self.errors) - skipped,
        )
        return created

    def _walk(self, node: Any) -> None:
        for child in list(node.children):
            if child.is_text:
                self._guard(self._bind_text, child)
            else:
                if self.registry is not None:
                    for name, value in list(child.attributes.items()):
                        if self.registry.is_directive(name):
                            self._guard(self._bind_directive, child, name, value)
                self._walk(child)

    def _guard(self, fn, *args) -> None:
        try:
            fn(*args)
        except SITE_ERRORS as e:
            if self.config.strict:
                raise
            logger.warning("Skipping binding: %s", e)
            self.errors.append(e)

    def _bind_text(self, node: Any) -> None:
        text = node.get_text()
        if not has_tokens(text):
            return
        template = Template.parse(text)
        paths = {token: self.model.resolve(token) for token in template.names()}

        binding = TextBinding(node, template, paths, self.config.formatter)
        for path in paths.values():
            binding.data[path] = self.model.get(path)
        node.set_text(binding.render())

        for path in dict.fromkeys(paths.values()):
            binding.subscribe(self.model.channel(path))
        self.bindings.append(binding)

    def _bind_directive(self, node: Any, name: str, key: str) -> None:
        path = self.model.resolve(key)
        handler = self.registry.lookup(name)

        binding = DirectiveBinding(node, path, self.model, self.config.formatter)
        binding.subscribe(self.model.channel(path))
        binding.update(path, self.model.get(path))
        handler(node, path, self.model, binding)
        self.bindings.append(binding)


def scan(
    root: Any,
    model: ObservableModel,
    registry: DirectiveRegistry | None = None,
    config: BindConfig | None = None,
) -> list[Binding]:
    """Scan root once against model. Shortcut for TreeScanner(...).scan(root)."""
    return TreeScanner(model, registry, config).scan(root)
