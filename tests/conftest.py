"""Pytest configuration and fixtures."""

import pytest

from jinjify.config import BuildConfig, reset_config
from jinjify.errors import MinifyError, TokenizeError


@pytest.fixture(autouse=True)
def _reset_shared_config():
    """Every test starts and ends with a default process-wide config."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> BuildConfig:
    """Isolated config with minification off."""
    return BuildConfig(minify=None)


class RecordingTokenizer:
    """Tokenizer double that remembers what it was asked to tokenize."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def tokenize(self, name, source):
        self.calls.append((name, source))
        if self.fail:
            raise TokenizeError("unexpected end of template", name=name, lineno=1)
        return [{"type": "raw", "value": source}]


class StrippingMinifier:
    """Minifier double that drops HTML comments, or rejects everything."""

    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def minify(self, source, options):
        self.calls.append(source)
        if self.fail:
            raise MinifyError("unclosed tag")
        out = source
        while "<!--" in out and "-->" in out:
            start = out.index("<!--")
            end = out.index("-->", start) + 3
            out = out[:start] + out[end:]
        return out


@pytest.fixture
def tokenizer() -> RecordingTokenizer:
    return RecordingTokenizer()


@pytest.fixture
def minifier() -> StrippingMinifier:
    return StrippingMinifier()
