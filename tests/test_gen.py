"""Tests for htex.gen — static site generation."""

import logging
from pathlib import Path

import pytest

from htex.app import Htex
from htex.config import HtexConfig
from htex.gen import FileSink, page_output_path


@pytest.fixture
def site(tmp_path: Path) -> Path:
    root = tmp_path / "public"
    root.mkdir()
    (root / "layout.htex").write_text("<main><!content></main>")
    (root / "index.htex").write_text("<!layout layout.htex>home <!url>")
    (root / "blog").mkdir()
    (root / "blog" / "index.htex").write_text("blog <!url>")
    (root / "blog" / "post.htex").write_text("<!method get>post <!url><!method post>never")
    (root / "style.css").write_text("body {}")
    (root / ".secret").write_text("hidden")
    return root


def generate(site: Path, tmp_path: Path) -> tuple[int, Path]:
    output = tmp_path / "out"
    failures = Htex(HtexConfig(root=site, output=output)).generate()
    return failures, output


class TestOutputPaths:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [("/", "index.html"), ("/about", "about/index.html"), ("/blog/", "blog/index.html")],
    )
    def test_page_output_path(self, url: str, expected: str) -> None:
        assert page_output_path(Path("/out"), url) == Path("/out") / expected


class TestGenerate:
    def test_pages_render_as_get_of_their_url(self, site: Path, tmp_path: Path) -> None:
        failures, output = generate(site, tmp_path)
        assert failures == 0
        assert (output / "index.html").read_text() == "<main>home /</main>"
        assert (output / "blog" / "index.html").read_text() == "blog /blog"
        assert (output / "blog" / "post" / "index.html").read_text() == "post /blog/post"

    def test_static_files_are_copied(self, site: Path, tmp_path: Path) -> None:
        _, output = generate(site, tmp_path)
        assert (output / "style.css").read_text() == "body {}"

    def test_hidden_files_are_skipped(self, site: Path, tmp_path: Path) -> None:
        _, output = generate(site, tmp_path)
        assert not (output / ".secret").exists()

    def test_layouts_are_pages_too(self, site: Path, tmp_path: Path) -> None:
        _, output = generate(site, tmp_path)
        assert (output / "layout" / "index.html").read_text() == "<main></main>"

    def test_announces_each_file(
        self, site: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        generate(site, tmp_path)
        out = capsys.readouterr().out
        assert f"{site / 'style.css'} -> {tmp_path / 'out' / 'style.css'}" in out

    def test_existing_output_is_replaced(self, site: Path, tmp_path: Path) -> None:
        target = tmp_path / "out" / "index.html"
        target.parent.mkdir(parents=True)
        target.write_text("x" * 1000)
        generate(site, tmp_path)
        assert target.read_text() == "<main>home /</main>"

    def test_failures_are_counted_and_logged(
        self, site: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (site / "broken.htex").write_text("<!layout missing.htex>x")
        with caplog.at_level(logging.ERROR, logger="htex.gen"):
            failures, output = generate(site, tmp_path)
        assert failures == 1
        assert "missing.htex" in caplog.text
        assert (output / "index.html").exists()

    def test_missing_root(self, tmp_path: Path) -> None:
        from htex.errors import ConfigurationError

        with pytest.raises(ConfigurationError, match="cannot open directory"):
            Htex(HtexConfig(root=tmp_path / "nope")).generate(tmp_path / "out")


class TestFileSink:
    def test_no_write_no_file(self, tmp_path: Path) -> None:
        with FileSink(tmp_path / "empty.html"):
            pass
        assert not (tmp_path / "empty.html").exists()

    def test_writes_append(self, tmp_path: Path) -> None:
        with FileSink(tmp_path / "out.html") as sink:
            sink.write(b"a")
            sink.write(b"b")
        assert (tmp_path / "out.html").read_bytes() == b"ab"
