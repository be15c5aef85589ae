from __future__ import annotations

import logging
from typing import Any

import minify_html

from .config import MinifyOptions
from .errors import MinifyError

logger = logging.getLogger(__name__)

# html-minifier switches minify-html has no equivalent for
_UNSUPPORTED = (
    "conservative_collapse",
    "remove_redundant_attributes",
    "preserve_line_breaks",
    "collapse_boolean_attributes",
    "remove_empty_attributes",
    "remove_style_link_type_attributes",
    "remove_ignored",
    "remove_empty_elements",
    "lint",
    "case_sensitive",
    "minify_urls",
)


def minify_kwargs(options: MinifyOptions) -> dict[str, Any]:
    """Translate html-minifier style options to minify_html.minify keywords."""
    return {
        "keep_comments": not options.remove_comments,
        "keep_closing_tags": options.keep_closing_slash,
        "keep_html_and_head_opening_tags": not options.remove_optional_tags,
        # Leave {{ }}, {% %} and {# #} untouched for the tokenizer
        "preserve_brace_template_syntax": True,
    }


class HtmlMinifier:
    """Minifier backed by minify-html."""

    def __init__(self) -> None:
        self._warned: set[str] = set()

    def minify(self, source: str, options: MinifyOptions) -> str:
        for name in _UNSUPPORTED:
            if getattr(options, name) and name not in self._warned:
                self._warned.add(name)
                logger.debug("Minify option %s has no effect", name)
        try:
            return minify_html.minify(source, **minify_kwargs(options))
        except Exception as e:
            raise MinifyError(f"minification failed: {e}") from e
