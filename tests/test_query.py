"""Tests for htex.http.query and the shared MultiDict behaviour."""

import pytest

from htex.http.multidict import MultiDict
from htex.http.query import QueryParams


class TestQueryParams:
    def test_first_value(self) -> None:
        q = QueryParams(b"a=1&a=2&b=x")
        assert q["a"] == "1"
        assert dict(q.lists())["a"] == ["1", "2"]
        assert q["b"] == "x"

    def test_percent_decoding(self) -> None:
        q = QueryParams(b"name=a%20b&plus=c+d")
        assert q["name"] == "a b"
        assert q["plus"] == "c d"

    def test_blank_values_are_kept(self) -> None:
        q = QueryParams(b"flag&empty=")
        assert "flag" in q
        assert q["empty"] == ""

    def test_raw_is_preserved(self) -> None:
        raw = b"a=1&b=x%20y"
        assert QueryParams(raw).raw == raw

    def test_accepts_str(self) -> None:
        q = QueryParams("a=1")
        assert q["a"] == "1"
        assert q.raw == b"a=1"

    def test_empty(self) -> None:
        q = QueryParams()
        assert len(q) == 0
        assert q.raw == b""
        assert q.get("a") is None

    def test_missing_key_raises(self) -> None:
        with pytest.raises(KeyError):
            QueryParams(b"a=1")["b"]


class TestMultiDict:
    def test_copy_on_construction(self) -> None:
        source = {"a": ["1"]}
        md = MultiDict(source)
        source["a"].append("2")
        assert dict(md.lists()) == {"a": ["1"]}

    def test_lists_returns_copies(self) -> None:
        md = MultiDict({"a": ["1", "2"], "b": ["3"]})
        pairs = list(md.lists())
        assert pairs == [("a", ["1", "2"]), ("b", ["3"])]
        pairs[0][1].append("x")
        assert dict(md.lists())["a"] == ["1", "2"]

    def test_repr_names_the_type(self) -> None:
        assert repr(QueryParams(b"a=1")) == "QueryParams({'a': ['1']})"
