"""Tests for extension matching and identifier resolution."""

import pytest

from jinjify.config import BuildConfig
from jinjify.paths import extension_of, is_eligible, resolve_identifier
from jinjify.types import DeferredId, LiteralId


class TestExtensionMatching:

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("views/page.twig", ".twig"),
            ("views/page.TWIG", ".twig"),
            ("/a.b/page.html", ".html"),
            ("archive.tar.gz", ".gz"),
            ("Makefile", ""),
            ("/a.b/README", ""),
            (".twig", ""),
        ],
    )
    def test_extension_of(self, path, expected):
        assert extension_of(path) == expected

    @pytest.mark.parametrize("path", ["a.twig", "a.TWIG", "a.Twig", "dir/a.tWiG"])
    def test_case_permutations_match(self, path):
        assert is_eligible(path, (".twig", ".html"))

    @pytest.mark.parametrize("extensions", [(".TWIG",), (".Twig",), (".twig",)])
    def test_configured_extension_case_is_ignored(self, extensions):
        assert is_eligible("page.twig", extensions)

    def test_other_extension_does_not_match(self):
        assert not is_eligible("styles.css", (".twig", ".html"))

    def test_no_extension_never_matches(self):
        assert not is_eligible("templates/layout", (".twig", ""))


class TestResolveIdentifier:

    def test_plain_path_is_literal(self):
        assert resolve_identifier("/src/app/a.twig", BuildConfig()) == LiteralId("/src/app/a.twig")

    def test_relative_path_defers(self):
        config = BuildConfig(relative_path=True, replace_paths={"/app": "@app"})
        assert resolve_identifier("/src/app/a.twig", config) == DeferredId()

    def test_replace_paths_truncates_and_aliases(self):
        config = BuildConfig(replace_paths={"/app": "@app"})
        assert resolve_identifier("/home/me/proj/app/views/a.twig", config) == LiteralId("@app/views/a.twig")

    def test_first_declared_key_wins(self):
        config = BuildConfig(replace_paths={"/app": "@app", "/ap": "@X"})
        assert resolve_identifier("/app/foo.twig", config) == LiteralId("@app/foo.twig")

    def test_first_declared_key_wins_even_if_less_specific(self):
        config = BuildConfig(replace_paths={"/ap": "@X", "/app": "@app"})
        assert resolve_identifier("/app/foo.twig", config) == LiteralId("@Xp/foo.twig")

    def test_match_is_not_anchored_to_segments(self):
        config = BuildConfig(replace_paths={"/app": "@app"})
        assert resolve_identifier("/apple/x.twig", config) == LiteralId("@apple/x.twig")

    def test_no_match_leaves_path(self):
        config = BuildConfig(replace_paths={"/common": "@common"})
        assert resolve_identifier("/app/x.twig", config) == LiteralId("/app/x.twig")

    def test_empty_mapping_leaves_path(self):
        config = BuildConfig(replace_paths={})
        assert resolve_identifier("/app/x.twig", config) == LiteralId("/app/x.twig")
