from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Union

if TYPE_CHECKING:
    from .config import MinifyOptions

# Nested lists/dicts of plain JSON values
TokenTree = list[dict[str, Any]]


@dataclass(frozen=True)
class LiteralId:
    """Template registered under a fixed string baked into the output."""
    value: str


@dataclass(frozen=True)
class DeferredId:
    """Template registered under the load-time ``__filename``/``__dirname``."""


Identifier = Union[LiteralId, DeferredId]


class Tokenizer(Protocol):
    def tokenize(self, name: str, source: str) -> TokenTree:
        """Return the token tree for ``source``; raise TokenizeError on bad syntax."""
        ...


class Minifier(Protocol):
    def minify(self, source: str, options: MinifyOptions) -> str:
        """Return minified markup; raise MinifyError on rejected input."""
        ...
