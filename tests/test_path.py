"""Tests for roost.routing.path — pattern parsing, matching, and building."""

import pytest

from roost.errors import ConfigurationError
from roost.routing.path import PathParam, compile_path, tokenize


class TestTokenize:
    def test_literal(self) -> None:
        assert tokenize("/users") == ("/users",)

    def test_colon_param(self) -> None:
        assert tokenize("/users/:id") == ("/users/", PathParam("id", "[^/]+"))

    def test_colon_param_with_pattern(self) -> None:
        assert tokenize("/users/:id(\\d+)") == ("/users/", PathParam("id", "\\d+"))

    def test_brace_param(self) -> None:
        assert tokenize("/users/{id}") == ("/users/", PathParam("id", "[^/]+"))

    def test_typed_brace_param(self) -> None:
        assert tokenize("/users/{id:int}") == ("/users/", PathParam("id", "\\d+"))

    def test_unnamed_groups_numbered(self) -> None:
        tokens = tokenize("/a/(.*)/b/(\\d+)")
        assert tokens == ("/a/", PathParam("0", ".*"), "/b/", PathParam("1", "\\d+"))

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter 'uuid'"):
            tokenize("/items/{id:uuid}")


class TestMatch:
    def test_literal(self) -> None:
        pattern = compile_path("/users")
        assert pattern.match("/users") == {}
        assert pattern.match("/users/1") is None

    def test_param(self) -> None:
        assert compile_path("/users/:id").match("/users/42") == {"id": "42"}

    def test_param_does_not_cross_segments(self) -> None:
        assert compile_path("/users/:id").match("/users/42/posts") is None

    def test_custom_pattern(self) -> None:
        pattern = compile_path("/users/:id(\\d+)")
        assert pattern.match("/users/42") == {"id": "42"}
        assert pattern.match("/users/bob") is None

    def test_path_converter_spans_segments(self) -> None:
        assert compile_path("/files/{rest:path}").match("/files/a/b.txt") == {"rest": "a/b.txt"}

    def test_trailing_slash_optional(self) -> None:
        assert compile_path("/users").match("/users/") == {}
        assert compile_path("/users/").match("/users") == {}

    def test_strict_trailing_slash(self) -> None:
        assert compile_path("/users", strict=True).match("/users/") is None
        assert compile_path("/users/", strict=True).match("/users") is None

    def test_case_insensitive_by_default(self) -> None:
        assert compile_path("/Users").match("/users") == {}

    def test_sensitive(self) -> None:
        assert compile_path("/Users", sensitive=True).match("/users") is None

    def test_prefix_match_at_segment_boundary(self) -> None:
        pattern = compile_path("/api", end=False)
        assert pattern.match("/api") == {}
        assert pattern.match("/api/users") == {}
        assert pattern.match("/apiary") is None

    def test_empty_prefix_matches_everything(self) -> None:
        pattern = compile_path("", end=False)
        assert pattern.match("/") == {}
        assert pattern.match("/anything/at/all") == {}

    def test_keys(self) -> None:
        assert compile_path("/:a/(.*)/{b}").keys == ("a", "0", "b")

    def test_invalid_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid route pattern"):
            compile_path("/:id([a-)")

    def test_non_capturing_group_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="does not capture"):
            compile_path("/x/(?:a|b)")

    def test_unnamed_alternation(self) -> None:
        pattern = compile_path("/x/(a|b)/:id")
        assert pattern.match("/x/b/7") == {"0": "b", "id": "7"}
        assert pattern.match("/x/c/7") is None


class TestBuild:
    def test_substitutes_params(self) -> None:
        assert compile_path("/book/:id").build({"id": "1234"}) == "/book/1234"

    def test_quotes_values(self) -> None:
        assert compile_path("/tag/:name").build({"name": "a b"}) == "/tag/a%20b"

    def test_path_values_keep_slashes(self) -> None:
        assert compile_path("/files/{rest:path}").build({"rest": "a/b"}) == "/files/a/b"

    def test_missing_param(self) -> None:
        with pytest.raises(ConfigurationError, match="Missing parameter 'id'"):
            compile_path("/book/:id").build({})

    def test_value_must_match_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="does not match"):
            compile_path("/book/:id(\\d+)").build({"id": "abc"})

    def test_root(self) -> None:
        assert compile_path("").build() == "/"
