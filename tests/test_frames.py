"""Tests for roost.frames — the frame stack and the recorder."""

import asyncio

import pytest

from roost.directives import ALL, Param, Prefix, Redirect, Use, Verb
from roost.errors import ComponentError, DirectiveError, NoActiveComponent
from roost.frames import Frame, Recorder, current_recorder, depth, open_frame


def _handler(request):
    return "ok"


class TestFrame:
    def test_records_in_order(self) -> None:
        frame = Frame("component")
        first = Prefix("/a")
        second = Param("id", _handler)
        frame.append(first)
        frame.append(second)
        assert frame.directives == (first, second)
        assert list(frame) == [first, second]
        assert len(frame) == 2

    def test_sealed_frame_rejects_directives(self) -> None:
        frame = Frame("component")
        frame.seal()
        assert frame.sealed
        with pytest.raises(ComponentError, match="already returned"):
            frame.append(Prefix("/a"))

    def test_repr(self) -> None:
        frame = Frame()
        assert "<anonymous>" in repr(frame)
        assert "open" in repr(frame)


class TestOpenFrame:
    def test_depth_balanced(self) -> None:
        assert depth() == 0
        with open_frame("outer"):
            assert depth() == 1
            with open_frame("inner"):
                assert depth() == 2
            assert depth() == 1
        assert depth() == 0

    def test_released_on_error(self) -> None:
        with pytest.raises(ValueError), open_frame("boom"):
            raise ValueError("boom")
        assert depth() == 0
        with pytest.raises(NoActiveComponent):
            current_recorder()

    def test_frame_sealed_on_exit(self) -> None:
        with open_frame("component") as recorder:
            pass
        assert recorder.frame.sealed
        with pytest.raises(ComponentError):
            recorder.prefix("/late")

    def test_innermost_frame_is_current(self) -> None:
        with open_frame("outer") as outer:
            current_recorder().prefix("/outer")
            with open_frame("inner") as inner:
                current_recorder().prefix("/inner")
            current_recorder().prefix("/outer-again")

        assert [d.path for d in outer.frame] == ["/outer", "/outer-again"]
        assert [d.path for d in inner.frame] == ["/inner"]


class TestCurrentRecorder:
    def test_outside_component(self) -> None:
        with pytest.raises(NoActiveComponent, match=r"get\(\) was called outside a component"):
            current_recorder("get")

    def test_error_is_a_runtime_error(self) -> None:
        with pytest.raises(RuntimeError):
            current_recorder()


class TestRecorder:
    def test_verb_helpers(self) -> None:
        with open_frame() as r:
            r.get("/g", _handler)
            r.post("/p", _handler)
            r.put("/u", _handler)
            r.patch("/a", _handler)
            r.delete("/d", _handler)
            r.head("/h", _handler)
            r.options("/o", _handler)
            r.all_("/x", _handler)

        methods = [d.methods for d in r.frame]
        assert methods == [
            frozenset({"GET"}),
            frozenset({"POST"}),
            frozenset({"PUT"}),
            frozenset({"PATCH"}),
            frozenset({"DELETE"}),
            frozenset({"HEAD"}),
            frozenset({"OPTIONS"}),
            frozenset({ALL}),
        ]

    def test_named_route_positional(self) -> None:
        with open_frame() as r:
            directive = r.get("book", "/books/:id", _handler)
        assert directive == Verb(frozenset({"GET"}), "/books/:id", (_handler,), name="book")

    def test_named_route_keyword(self) -> None:
        with open_frame() as r:
            directive = r.get("/books/:id", _handler, name="book")
        assert directive.name == "book"
        assert directive.path == "/books/:id"

    def test_name_given_twice(self) -> None:
        with open_frame() as r, pytest.raises(DirectiveError, match="both positionally"):
            r.get("book", "/books/:id", _handler, name="other")

    def test_verb_lowercase_methods(self) -> None:
        with open_frame() as r:
            directive = r.verb(["get", "post"], "/", _handler)
        assert directive.methods == frozenset({"GET", "POST"})

    def test_use_positional_path(self) -> None:
        with open_frame() as r:
            directive = r.use("/api", _handler)
        assert directive == Use(handlers=(_handler,), path="/api")

    def test_use_path_list(self) -> None:
        with open_frame() as r:
            directive = r.use(["/a", "/b"], _handler)
        assert directive.path == ("/a", "/b")

    def test_use_path_keyword(self) -> None:
        with open_frame() as r:
            directive = r.use(_handler, path="/api")
        assert directive.path == "/api"

    def test_use_path_given_twice(self) -> None:
        with open_frame() as r, pytest.raises(DirectiveError):
            r.use("/a", _handler, path="/b")

    def test_use_without_path(self) -> None:
        with open_frame() as r:
            directive = r.use(_handler)
        assert directive.path is None

    def test_redirect(self) -> None:
        with open_frame() as r:
            directive = r.redirect("/old", "/new", 301)
        assert directive == Redirect("/old", "/new", 301)

    def test_failed_directive_not_recorded(self) -> None:
        with open_frame() as r:
            with pytest.raises(DirectiveError):
                r.get("/")
            r.get("/ok", _handler)
        assert len(r.frame) == 1

    def test_explicit_recorder(self) -> None:
        frame = Frame("manual")
        Recorder(frame).prefix("/manual")
        assert frame.directives == (Prefix("/manual"),)


class TestIsolation:
    async def test_concurrent_tasks_have_separate_stacks(self) -> None:
        started = asyncio.Event()
        release = asyncio.Event()

        async def first() -> tuple:
            with open_frame("first") as r:
                current_recorder().prefix("/first")
                started.set()
                await release.wait()
                current_recorder().prefix("/first-again")
            return r.frame.directives

        async def second() -> tuple:
            await started.wait()
            with open_frame("second") as r:
                current_recorder().prefix("/second")
            release.set()
            return r.frame.directives

        a, b = await asyncio.gather(first(), second())
        assert [d.path for d in a] == ["/first", "/first-again"]
        assert [d.path for d in b] == ["/second"]

