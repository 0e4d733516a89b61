"""Tests for htex.scan — content root classification."""

from pathlib import Path

from htex.scan import page_url, scan_files


def collect(root: Path) -> tuple[list[tuple[str, str]], list[tuple[str, str]]]:
    dynamic: list[tuple[str, str]] = []
    static: list[tuple[str, str]] = []
    scan_files(
        root,
        lambda path, url: dynamic.append((path.relative_to(root).as_posix(), url)),
        lambda path, url: static.append((path.relative_to(root).as_posix(), url)),
    )
    return dynamic, static


class TestPageUrl:
    def test_plain(self) -> None:
        assert page_url("/about.htex") == "/about"

    def test_index_collapses(self) -> None:
        assert page_url("/index.htex") == "/"
        assert page_url("/blog/index.htex") == "/blog/"

    def test_index_suffix_only_as_segment(self) -> None:
        assert page_url("/reindex.htex") == "/reindex"


class TestScanFiles:
    def test_classifies_files(self, tmp_path: Path) -> None:
        (tmp_path / "index.htex").write_text("")
        (tmp_path / "style.css").write_text("")
        (tmp_path / "blog").mkdir()
        (tmp_path / "blog" / "index.htex").write_text("")
        (tmp_path / "blog" / "post.htex").write_text("")
        (tmp_path / "blog" / "cover.png").write_bytes(b"")

        dynamic, static = collect(tmp_path)
        assert dynamic == [
            ("index.htex", "/"),
            ("blog/index.htex", "/blog/"),
            ("blog/post.htex", "/blog/post"),
        ]
        assert static == [("style.css", "/style.css"), ("blog/cover.png", "/blog/cover.png")]

    def test_skips_hidden(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        (tmp_path / ".git" / "HEAD").write_text("")
        (tmp_path / "sub" / ".cache").mkdir(parents=True)
        (tmp_path / "sub" / ".cache" / "x.htex").write_text("")
        (tmp_path / ".env").write_text("")
        (tmp_path / ".well-known").mkdir()
        (tmp_path / ".well-known" / "token").write_text("")

        dynamic, static = collect(tmp_path)
        assert dynamic == []
        assert static == [(".well-known/token", "/.well-known/token")]
