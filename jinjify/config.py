from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".twig", ".html")


class MinifyOptions(BaseModel):
    """Markup minification switches, keyed the way html-minifier names them.

    Both ``removeComments`` and ``remove_comments`` are accepted. Only a
    subset has an equivalent in the minifier actually used, see minify.py.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    remove_comments: bool = True
    collapse_whitespace: bool = True
    conservative_collapse: bool = False
    preserve_line_breaks: bool = False
    collapse_boolean_attributes: bool = False
    remove_attribute_quotes: bool = True
    remove_redundant_attributes: bool = False
    remove_empty_attributes: bool = False
    remove_style_link_type_attributes: bool = False
    remove_optional_tags: bool = False
    remove_ignored: bool = False
    remove_empty_elements: bool = False
    lint: bool = False
    keep_closing_slash: bool = False
    case_sensitive: bool = False
    minify_urls: bool = Field(default=False, alias="minifyURLs")


class TransformOptions(BaseModel):
    """Options passed to a single transform invocation.

    Every field is optional: only the ones actually supplied are merged into
    the shared BuildConfig.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    extensions: list[str] | None = Field(default=None, description="File extensions to compile, e.g. ['.twig']")
    minify: MinifyOptions | bool | None = Field(default=None, description="Minify options, or false to disable")
    relative_path: bool | None = Field(default=None, alias="relativePath")
    replace_paths: dict[str, str] | None = Field(
        default=None,
        alias="replacePaths",
        description="Map of path fragment to alias, first match in declaration order wins",
    )

    @field_validator("extensions", mode="before")
    @classmethod
    def _unwrap_extensions(cls, v: Any) -> Any:
        # A bare string is neither a list nor a record: fall back to the defaults
        if isinstance(v, str):
            return None
        if isinstance(v, Mapping):
            return v.get("extensions")
        return v

    @field_validator("replace_paths", mode="before")
    @classmethod
    def _drop_malformed_replace_paths(cls, v: Any) -> Any:
        # Anything but a mapping disables aliasing instead of failing the build
        if not isinstance(v, Mapping):
            return None
        return {str(k): str(val) for k, val in v.items()}


class BuildConfig(BaseModel):
    """Configuration a template is compiled against.

    One instance (CONFIG) is shared by every transform in the process. Each
    eligible file merges its options into it when the transform is created and
    compiles against whatever it holds when the file ends, so the last writer
    wins. Pass a separate instance to get per-build isolation.
    """
    model_config = ConfigDict(validate_assignment=True)

    minify: MinifyOptions | None = Field(default_factory=MinifyOptions)
    relative_path: bool = False
    replace_paths: dict[str, str] | None = None

    def merge(self, options: TransformOptions) -> None:
        supplied = options.model_fields_set
        if "minify" in supplied and options.minify is not None:
            # Only an options record enables minification; true and false both disable it
            if isinstance(options.minify, MinifyOptions):
                self.minify = options.minify
            else:
                self.minify = None
        if "relative_path" in supplied and options.relative_path is not None:
            self.relative_path = bool(options.relative_path)
        if "replace_paths" in supplied:
            self.replace_paths = options.replace_paths
        logger.debug(
            "Build config now minify=%s relative_path=%s replace_paths=%s",
            self.minify is not None,
            self.relative_path,
            self.replace_paths,
        )


# Process-wide configuration shared by all transforms (single writer, last write wins)
CONFIG = BuildConfig()


def reset_config(config: BuildConfig | None = None) -> BuildConfig:
    """Restore defaults in place so existing references see them."""
    target = CONFIG if config is None else config
    defaults = BuildConfig()
    target.minify = defaults.minify
    target.relative_path = defaults.relative_path
    target.replace_paths = defaults.replace_paths
    return target


def resolve_extensions(option: Any = None) -> tuple[str, ...]:
    """Pick the extension set to compile, lower-cased.

    Accepts nothing (defaults), a sequence of extensions, or a record carrying
    an ``extensions`` field.
    """
    extensions: Sequence[str] = DEFAULT_EXTENSIONS
    if option is not None:
        if isinstance(option, (list, tuple)):
            extensions = option
        elif isinstance(option, Mapping) and option.get("extensions") is not None:
            extensions = option["extensions"]
        elif isinstance(option, TransformOptions) and option.extensions is not None:
            extensions = option.extensions
    return tuple(ext.lower() for ext in extensions)


def coerce_options(options: TransformOptions | Mapping[str, Any] | None) -> TransformOptions:
    if options is None:
        return TransformOptions()
    if isinstance(options, TransformOptions):
        return options
    try:
        return TransformOptions.model_validate(options)
    except ValidationError as e:
        raise ValueError(str(e))


def load_options(path: str | Path) -> TransformOptions:
    """Load transform options from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}")
    return coerce_options(data)
