"""Tests for roost.testing — request and next helpers."""

from roost.http.response import Response
from roost.testing import RecordingNext, make_next, make_request


class TestMakeRequest:
    def test_defaults(self) -> None:
        request = make_request()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.path_params == {}

    def test_method_uppercased(self) -> None:
        assert make_request("/", "post").method == "POST"

    def test_query_string_split(self) -> None:
        request = make_request("/search?q=roost&q=nest")
        assert request.path == "/search"
        assert request.query.get_list("q") == ["roost", "nest"]

    def test_headers(self) -> None:
        request = make_request("/", headers={"X-Token": "abc"})
        assert request.headers["x-token"] == "abc"


class TestMakeNext:
    async def test_records_calls(self) -> None:
        next_ = make_next()
        assert isinstance(next_, RecordingNext)
        assert not next_.called

        request = make_request("/a")
        response = await next_(request)
        assert next_.called
        assert next_.calls == [request]
        assert response.status == 404

    async def test_custom_response(self) -> None:
        next_ = make_next(Response("downstream"))
        assert (await next_(make_request())).text == "downstream"
