"""Tests for htex.middleware.access_log — verbose request logging."""

import logging

import pytest

from htex.errors import NotFound
from htex.http.headers import Headers
from htex.http.query import QueryParams
from htex.http.request import Request
from htex.http.response import Response
from htex.middleware import AccessLog


def _request(path: str = "/", query: bytes = b"") -> Request:
    async def receive() -> dict:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(
        method="GET",
        path=path,
        headers=Headers(),
        query=QueryParams(query),
        client=("10.0.0.1", 4000),
        _receive=receive,
    )


class TestAccessLog:
    async def test_logs_request_and_status(self, caplog: pytest.LogCaptureFixture) -> None:
        async def ok(request: Request) -> Response:
            return Response("hi", status=201)

        with caplog.at_level(logging.INFO, logger="htex.access"):
            response = await AccessLog()(_request("/a", b"x=1"), ok)

        assert response.status == 201
        assert caplog.messages[0] == "10.0.0.1:4000 GET /a?x=1"
        assert caplog.messages[1].startswith(" -> response code 201 time ")

    async def test_http_error_status_is_logged_and_reraised(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        async def missing(request: Request) -> Response:
            raise NotFound

        with caplog.at_level(logging.INFO, logger="htex.access"), pytest.raises(NotFound):
            await AccessLog()(_request(), missing)
        assert " -> response code 404" in caplog.text

    async def test_unexpected_error_logs_500(self, caplog: pytest.LogCaptureFixture) -> None:
        async def boom(request: Request) -> Response:
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO, logger="htex.access"), pytest.raises(RuntimeError):
            await AccessLog()(_request(), boom)
        assert " -> response code 500" in caplog.text

    async def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        async def ok(request: Request) -> Response:
            return Response()

        with caplog.at_level(logging.INFO, logger="site.requests"):
            await AccessLog(logging.getLogger("site.requests"))(_request(), ok)
        assert {record.name for record in caplog.records} == {"site.requests"}
