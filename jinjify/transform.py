from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .compiler import TemplateCompiler
from .config import BuildConfig, TransformOptions, coerce_options
from .processor import FileTransform


def transformer(
    options: TransformOptions | Mapping[str, Any] | None = None,
    *,
    config: BuildConfig | None = None,
    compiler: TemplateCompiler | None = None,
) -> Callable[[str], FileTransform]:
    """Bind options once and return the per-file transform factory.

    Without ``config`` every file merges into the process-wide CONFIG.
    """
    opts = coerce_options(options)
    shared_compiler = compiler or TemplateCompiler()

    def transform(path: str) -> FileTransform:
        return FileTransform(path, opts, config=config, compiler=shared_compiler)

    return transform


def transform_file(
    path: str,
    options: TransformOptions | Mapping[str, Any] | None = None,
    *,
    config: BuildConfig | None = None,
    compiler: TemplateCompiler | None = None,
) -> FileTransform:
    """Create the transform for a single file."""
    return FileTransform(path, coerce_options(options), config=config, compiler=compiler)
