"""Tests for htex.app — request handling over ASGI."""

import logging
from pathlib import Path
from typing import Any

import pytest

from htex.app import Htex
from htex.config import HtexConfig
from htex.engine.context import RenderContext
from htex.http.request import Request
from htex.http.response import Response
from htex.middleware.protocol import Next
from htex.testing import TestClient


@pytest.fixture
def site(tmp_path: Path) -> Path:
    (tmp_path / "layout.htex").write_text("<html><title><!get title></title><!content></html>")
    (tmp_path / "index.htex").write_text("<!layout layout.htex><!set title Home><h1>Home</h1>")
    (tmp_path / "echo.htex").write_text(
        "<!method get>form<!method post>hello <!data name><!method any>|<!url>"
    )
    (tmp_path / "search.htex").write_text("q=<!query q>,raw=<!query>")
    (tmp_path / "broken.htex").write_text("<!layout missing.htex>x")
    (tmp_path / "style.css").write_text("body { color: red; }")
    (tmp_path / "blob.bin").write_bytes(b"\x00\x01")
    (tmp_path / "posts").mkdir()
    (tmp_path / "posts" / "_.htex").write_text("post at <!url>")
    (tmp_path / "about.html").write_text("<p>about</p>")
    return tmp_path


@pytest.fixture
def app(site: Path) -> Htex:
    return Htex(HtexConfig(root=site), markdown=lambda md: md)


# ── Dynamic pages ────────────────────────────────────────────────────────


class TestDynamicPages:
    async def test_index_with_layout(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/")
        assert response.status == 200
        assert response.content_type == "text/html; charset=utf-8"
        assert response.text == "<html><title>Home</title><h1>Home</h1></html>"

    async def test_method_sections(self, app: Htex) -> None:
        async with TestClient(app) as client:
            get = await client.get("/echo")
            post = await client.post("/echo", form={"name": "alice"})
        assert get.text == "form|/echo"
        assert post.text == "hello alice|/echo"

    async def test_post_falls_back_to_query_values(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.post("/echo?name=bob", form={})
        assert response.text == "hello bob|/echo"

    async def test_posted_value_wins_over_query(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.post("/echo?name=bob", form={"name": "alice"})
        assert response.text == "hello alice|/echo"

    async def test_query(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/search?q=htex&x=a%20b")
        assert response.text == "q=htex,raw=q=htex&x=a%20b"

    async def test_wildcard_page(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/posts/first")
        assert response.text == "post at /posts/first"

    async def test_edits_show_up_on_next_request(self, app: Htex, site: Path) -> None:
        async with TestClient(app) as client:
            first = await client.get("/search")
            (site / "search.htex").write_text("changed")
            second = await client.get("/search")
        assert first.text == "q=,raw="
        assert second.text == "changed"


# ── Static files ─────────────────────────────────────────────────────────


class TestStaticFiles:
    async def test_css(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/style.css")
        assert response.status == 200
        assert response.content_type == "text/css; charset=utf-8"
        assert response.text == "body { color: red; }"

    async def test_unknown_extension(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/blob.bin")
        assert response.content_type == "application/octet-stream"
        assert response.body_bytes == b"\x00\x01"

    async def test_html_fallback(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/about")
        assert response.content_type == "text/html; charset=utf-8"
        assert response.text == "<p>about</p>"

    async def test_htex_source_is_not_served(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/index.htex")
        assert response.status == 404


# ── Errors ───────────────────────────────────────────────────────────────


class TestErrors:
    async def test_not_found(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.get("/nope")
        assert response.status == 404
        assert "404 Not Found" in response.text

    async def test_missing_layout_is_500(self, app: Htex, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="htex.server"):
            async with TestClient(app) as client:
                response = await client.get("/broken")
        assert response.status == 500
        assert "500 Internal Server Error" in response.text
        assert "missing.htex" in caplog.text

    async def test_malformed_multipart_is_400(self, app: Htex) -> None:
        async with TestClient(app) as client:
            response = await client.post(
                "/echo",
                headers={"content-type": "multipart/form-data"},
                body=b"garbage",
            )
        assert response.status == 400


# ── HEAD ─────────────────────────────────────────────────────────────────


class TestHead:
    async def test_head_has_no_body(self, app: Htex) -> None:
        async with TestClient(app) as client:
            get = await client.get("/style.css")
            head = await client.head("/style.css")
        assert head.status == 200
        assert head.body_bytes == b""
        assert dict(head.headers)["content-length"] == dict(get.headers)["content-length"]


# ── Middleware ───────────────────────────────────────────────────────────


class TestMiddleware:
    async def test_access_log_in_verbose_mode(self, site: Path, caplog: pytest.LogCaptureFixture) -> None:
        app = Htex(HtexConfig(root=site, verbose=True))
        with caplog.at_level(logging.INFO, logger="htex.access"):
            async with TestClient(app) as client:
                await client.get("/search?q=1")
        assert "127.0.0.1:0 GET /search?q=1" in caplog.text
        assert "-> response code 200" in caplog.text

    async def test_no_access_log_by_default(self, app: Htex) -> None:
        assert app.middleware == ()

    async def test_custom_middleware(self, site: Path) -> None:
        async def stamp(request: Request, next: Next) -> Response:
            response = await next(request)
            return response.with_header("X-Htex", "1")

        app = Htex(HtexConfig(root=site), middleware=(stamp,))
        async with TestClient(app) as client:
            response = await client.get("/style.css")
        assert dict(response.headers)["x-htex"] == "1"


# ── ASGI ─────────────────────────────────────────────────────────────────


class TestLifespan:
    async def test_startup_and_shutdown(self, app: Htex) -> None:
        messages = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return messages.pop(0)

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]


# ── Direct rendering ─────────────────────────────────────────────────────


class TestRenderFile:
    def test_render_file(self, app: Htex, site: Path) -> None:
        body = app.render_file(site / "echo.htex", RenderContext.for_get("/x"))
        assert body == b"form|/x"
