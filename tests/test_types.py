"""Tests for value types."""
from __future__ import annotations

import pytest

from alixir_oss.errors import InvalidArgument, UnsupportedMethod
from alixir_oss.types import FileObject, HttpMethod, object_url


class TestHttpMethod:
    """Test HttpMethod parsing."""

    @pytest.mark.parametrize("raw", ["put", "PUT", "Put", HttpMethod.PUT])
    def test_parse_any_case(self, raw):
        assert HttpMethod.parse(raw) is HttpMethod.PUT

    @pytest.mark.parametrize("raw", ["PATCH", "", None, 3])
    def test_parse_unknown_raises(self, raw):
        with pytest.raises(UnsupportedMethod):
            HttpMethod.parse(raw)


class TestFileObject:
    """Test FileObject validation."""

    def test_minimal(self):
        fo = FileObject(bucket="b", object_key="a/b.jpg")
        assert fo.object is None

    def test_empty_bucket_raises(self):
        with pytest.raises(InvalidArgument, match="bucket"):
            FileObject(bucket="", object_key="k")

    def test_empty_key_raises(self):
        with pytest.raises(InvalidArgument, match="object_key"):
            FileObject(bucket="b", object_key="")


def test_object_url_quotes_key_but_not_slashes():
    assert object_url("b", "a b/c+d.txt", "example.com") == "https://b.example.com/a%20b/c%2Bd.txt"
