from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from jinja2 import Environment, TemplateSyntaxError
from jinja2.lexer import Token

from .errors import TokenizeError
from .types import TokenTree

"""Jinja2 environment and the tokenizer built on it.

The environment is created once at import time and reused for every template
in the build; it is only ever used to parse and lex, never to render.
"""

logger = logging.getLogger(__name__)

# Singleton environment reused across the process
JINJA_ENV: Environment = Environment(
    autoescape=False,
    extensions=["jinja2.ext.do", "jinja2.ext.loopcontrols"],
)

# Tags whose body runs until a matching end<tag>
BLOCK_TAGS = frozenset({"if", "for", "block", "macro", "call", "filter", "with", "autoescape"})
# Tags that start a new branch inside the innermost open block
BRANCH_TAGS = frozenset({"elif", "else"})


def _expr(token: Token) -> dict[str, Any]:
    return {"type": token.type, "value": token.value, "line": token.lineno}


def _collect(tokens: Iterator[Token], end_type: str) -> list[dict[str, Any]]:
    stack: list[dict[str, Any]] = []
    for token in tokens:
        if token.type == end_type:
            break
        stack.append(_expr(token))
    return stack


def _opens_block(tag: str, stack: list[dict[str, Any]]) -> bool:
    if tag == "set":
        # {% set x %}...{% endset %} has no '=' in the tag
        return not any(t["type"] == "assign" for t in stack)
    return tag in BLOCK_TAGS


def fold_tokens(tokens: Iterator[Token]) -> TokenTree:
    """Fold a flat Jinja2 token stream into raw/output/logic nodes.

    Block bodies nest under their opening tag's ``output``; ``elif``/``else``
    start entries in ``branches``. The stream must come from a template that
    already parsed, so every end tag has an open block to close.
    """
    root: TokenTree = []
    target = root
    frames: list[tuple[dict[str, Any], TokenTree]] = []

    for token in tokens:
        if token.type == "data":
            if target and target[-1]["type"] == "raw":
                target[-1]["value"] += token.value
            else:
                target.append({"type": "raw", "value": token.value})
        elif token.type == "variable_begin":
            target.append({"type": "output", "stack": _collect(tokens, "variable_end")})
        elif token.type == "block_begin":
            stack = _collect(tokens, "block_end")
            tag = str(stack.pop(0)["value"]) if stack else ""
            logic: dict[str, Any] = {"type": tag, "line": token.lineno, "stack": stack}
            if tag.startswith("end") and frames and frames[-1][0]["type"] == tag[3:]:
                _, target = frames.pop()
            elif tag in BRANCH_TAGS and frames:
                logic["output"] = []
                frames[-1][0].setdefault("branches", []).append(logic)
                target = logic["output"]
            elif _opens_block(tag, stack):
                logic["output"] = []
                target.append({"type": "logic", "token": logic})
                frames.append((logic, target))
                target = logic["output"]
            else:
                target.append({"type": "logic", "token": logic})
    return root


class JinjaTokenizer:
    """Tokenizer backed by the shared Jinja2 environment."""

    def __init__(self, env: Environment | None = None) -> None:
        self.env = env or JINJA_ENV

    def tokenize(self, name: str, source: str) -> TokenTree:
        try:
            # Parsing first catches unclosed tags and blocks the lexer lets through
            self.env.parse(source, name=name)
            stream = self.env.lexer.tokenize(source, name=name)
            tree = fold_tokens(iter(stream))
        except TemplateSyntaxError as e:
            raise TokenizeError(e.message or str(e), name=name, lineno=e.lineno) from e
        logger.debug("Tokenized %s into %d top-level nodes", name, len(tree))
        return tree
