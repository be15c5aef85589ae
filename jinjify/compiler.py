from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field

from .config import BuildConfig
from .jinja import JinjaTokenizer
from .minify import HtmlMinifier
from .types import DeferredId, Identifier, LiteralId, Minifier, Tokenizer, TokenTree

logger = logging.getLogger(__name__)

# Runtime namespace and factory the generated module calls
RUNTIME_NAMESPACE = "Twig"
RUNTIME_FACTORY = "twig"

# Load-time placeholders the bundler fills in
FILENAME_PLACEHOLDER = "__filename"
DIRNAME_PLACEHOLDER = "__dirname"


def serialize_tokens(tree: TokenTree) -> str:
    """Deterministic JSON text for a token tree, usable as a JS literal."""
    return json.dumps(tree, separators=(",", ":"))


def constructor_call(identifier: Identifier, tokens: str) -> str:
    """Render the template constructor expression for either identifier shape."""
    factory = f"{RUNTIME_NAMESPACE}.{RUNTIME_FACTORY}"
    if isinstance(identifier, DeferredId):
        return (
            f"{factory}({{ id: {FILENAME_PLACEHOLDER}, path: {DIRNAME_PLACEHOLDER}, "
            f"data:{tokens}, precompiled: true, allowInlineIncludes: true }})"
        )
    return (
        f"{factory}({{ id: {json.dumps(identifier.value)}, "
        f"data:{tokens}, precompiled: true, allowInlineIncludes: true }})"
    )


def wrap_module(fragment: str) -> str:
    """Turn a constructor expression into a CommonJS module body."""
    return "\nmodule.exports = " + fragment + ";"


@dataclass
class TemplateCompiler:
    """Minify (optionally), tokenize and render one template.

    Errors from either step propagate as MinifyError or TokenizeError.
    """
    tokenizer: Tokenizer = field(default_factory=JinjaTokenizer)
    minifier: Minifier = field(default_factory=HtmlMinifier)

    def compile(self, identifier: Identifier, source: str, config: BuildConfig, name: str | None = None) -> str:
        """Return the constructor expression for ``source``.

        ``name`` is what the tokenizer reports errors against; it defaults to
        the literal identifier and must be given for deferred identifiers.
        """
        if name is None:
            name = identifier.value if isinstance(identifier, LiteralId) else "<template>"
        if config.minify is not None:
            source = self.minifier.minify(source, config.minify)
        tree = self.tokenizer.tokenize(name, source)
        tokens = serialize_tokens(tree)
        logger.debug("Compiled %s: %d bytes of tokens", name, len(tokens))
        return constructor_call(identifier, tokens)
