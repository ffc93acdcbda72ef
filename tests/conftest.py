import json
from datetime import timezone

import httpx
import pytest


@pytest.fixture
def utc():
    return timezone.utc


@pytest.fixture
def router_page():
    """HTML page carrying a douyin ``window._ROUTER_DATA`` blob."""
    def _make(loader: dict, extra: str = "") -> str:
        blob = json.dumps({"loaderData": loader}, ensure_ascii=False)
        return (
            "<!DOCTYPE html><html><head><title>抖音</title></head><body>"
            f"{extra}<script>window._ROUTER_DATA = {blob}</script></body></html>"
        )
    return _make


@pytest.fixture
def initial_state_page():
    """HTML page carrying a bilibili ``window.__INITIAL_STATE__`` blob."""
    def _make(state: dict, title: str = "视频_哔哩哔哩_bilibili") -> str:
        blob = json.dumps(state, ensure_ascii=False)
        return (
            f"<html><head><title>{title}</title></head><body><script>"
            f"window.__INITIAL_STATE__={blob};(function(){{var s;}}());</script></body></html>"
        )
    return _make


@pytest.fixture
def aweme_detail():
    return {
        "desc": "Hello",
        "video": {"cover": {"url_list": ["http://x/1.jpg", "http://x/2.jpg"]}},
        "author": {"nickname": "Bob", "unique_id": "bob123"},
        "create_time": 1700000000,
    }


@pytest.fixture
def mock_client():
    """Build an ``httpx.AsyncClient`` backed by a route table.

    Route values are dicts (``status``, ``text``, ``headers``) or an
    ``httpx`` exception class to raise. Unknown routes answer 404.
    """
    def _factory(routes=None, calls=None):
        routes = routes or {}

        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append((request.method, str(request.url), request.headers.get("User-Agent", "")))
            route = routes.get((request.method, str(request.url)))
            if isinstance(route, type) and issubclass(route, Exception):
                raise route("mocked failure", request=request)
            if route is None:
                return httpx.Response(404, text="")
            return httpx.Response(
                route.get("status", 200),
                text=route.get("text", ""),
                headers=route.get("headers"),
            )

        return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)

    return _factory
