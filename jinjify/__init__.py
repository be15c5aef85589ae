"""Precompile Jinja templates into CommonJS modules at bundle time."""

from .compiler import TemplateCompiler, wrap_module
from .config import CONFIG, BuildConfig, MinifyOptions, TransformOptions, load_options, reset_config
from .errors import CompileError, MinifyError, TokenizeError
from .processor import FileTransform, TransformState
from .transform import transform_file, transformer

__all__ = [
    "CONFIG",
    "BuildConfig",
    "CompileError",
    "FileTransform",
    "MinifyError",
    "MinifyOptions",
    "TemplateCompiler",
    "TokenizeError",
    "TransformOptions",
    "TransformState",
    "load_options",
    "reset_config",
    "transform_file",
    "transformer",
    "wrap_module",
]
