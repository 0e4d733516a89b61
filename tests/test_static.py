"""Tests for htex.server.static — content types and file responses."""

from pathlib import Path

import pytest

from htex.server.static import DEFAULT_CONTENT_TYPE, file_response, guess_content_type


class TestGuessContentType:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("style.css", "text/css; charset=utf-8"),
            ("index.html", "text/html; charset=utf-8"),
            ("notes.txt", "text/plain; charset=utf-8"),
            ("logo.svg", "image/svg+xml; charset=utf-8"),
            ("photo.png", "image/png"),
            ("data.unknownext", DEFAULT_CONTENT_TYPE),
            ("README", DEFAULT_CONTENT_TYPE),
        ],
    )
    def test_guess(self, name: str, expected: str) -> None:
        assert guess_content_type(Path(name)) == expected


class TestFileResponse:
    def test_reads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "style.css"
        path.write_text("body {}")
        response = file_response(path)
        assert response.status == 200
        assert response.body_bytes == b"body {}"
        assert response.content_type == "text/css; charset=utf-8"

    def test_explicit_content_type(self, tmp_path: Path) -> None:
        path = tmp_path / "page.html"
        path.write_text("<p>")
        response = file_response(path, "text/html; charset=utf-8")
        assert response.content_type == "text/html; charset=utf-8"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            file_response(tmp_path / "gone.css")
