"""Text templates with {{identifier}} placeholders.

A template is parsed once into literal segments interleaved with token
names, in document order:

    "A {{x}} B {{y}} C"  ->  literals ("A ", " B ", " C"), tokens ("x", "y")

Rendering walks the tokens in that order, so a template that mentions the
same key twice, or several keys, comes out unshuffled no matter which key
changed last.

An identifier is [A-Za-z_$][A-Za-z0-9_]*, optionally followed by
.segments naming an explicit nested path ("user.name").
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping

from vmbind.exceptions import MalformedTemplateError

IDENTIFIER = r"[A-Za-z_$][A-Za-z0-9_]*"
TOKEN_PATTERN = re.compile(r"\{\{(" + IDENTIFIER + r"(?:\." + IDENTIFIER + r")*)\}\}")
DELIMITER_PATTERN = re.compile(r"\{\{|\}\}")


def has_tokens(text: str) -> bool:
    return TOKEN_PATTERN.search(text) is not None


@dataclass(frozen=True)
class Template:
    """A parsed template. len(literals) == len(tokens) + 1."""

    source: str
    literals: tuple[str, ...]
    tokens: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> Template:
        """Split text into literals and tokens.

        Raises MalformedTemplateError if a '{{' or '}}' is left in a literal
        segment, i.e. a delimiter that is not part of a well-formed token.
        """
        parts = TOKEN_PATTERN.split(text)
        literals = tuple(parts[0::2])
        tokens = tuple(parts[1::2])
        for literal in literals:
            stray = DELIMITER_PATTERN.search(literal)
            if stray is not None:
                raise MalformedTemplateError(
                    text,
                    f"Stray {stray.group()!r} in template {text!r}",
                )
        return cls(text, literals, tokens)

    def names(self) -> list[str]:
        """Distinct token names, in order of first appearance."""
        return list(dict.fromkeys(self.tokens))

    def render(self, values: Mapping[str, object], formatter: Callable[[object], str] = str) -> str:
        """Substitute every token with formatter(values[token])."""
        out = [self.literals[0]]
        for token, literal in zip(self.tokens, self.literals[1:]):
            out.append(formatter(values.get(token)))
            out.append(literal)
        return "".join(out)

    def __str__(self) -> str:
        return self.source
