from __future__ import annotations

import os
from collections.abc import Iterable

from .config import BuildConfig
from .types import DeferredId, Identifier, LiteralId


def extension_of(path: str) -> str:
    """Lower-cased extension of the last path segment, leading dot included."""
    return os.path.splitext(path)[1].lower()


def is_eligible(path: str, extensions: Iterable[str]) -> bool:
    ext = extension_of(path)
    if not ext:
        return False
    return ext in {e.lower() for e in extensions}


def resolve_identifier(path: str, config: BuildConfig) -> Identifier:
    """Work out the name a compiled template is registered under.

    With ``relative_path`` the name is left to the module loader. Otherwise the
    first ``replace_paths`` key found anywhere in the path (declaration order,
    no segment anchoring) cuts the path at that point and is swapped for its
    alias.
    """
    if config.relative_path:
        return DeferredId()
    identifier = path
    for search, alias in (config.replace_paths or {}).items():
        pos = identifier.find(search)
        if pos > -1:
            identifier = identifier[pos:].replace(search, alias, 1)
            break
    return LiteralId(identifier)
