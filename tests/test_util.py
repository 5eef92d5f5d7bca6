from urllib.parse import parse_qs, urlsplit

import pytest

from schemamigrate.util import MultiError, filter_custom_query, suint


def test_suint_rejects_negative_input():
    with pytest.raises(ValueError, match="expects input >= 0"):
        suint(-1)


def test_suint_zero():
    assert suint(0) == 0


def test_suint_positive():
    assert suint(42) == 42


def test_filter_custom_query_removes_x_keys():
    filtered = filter_custom_query("foo://host?a=b&x-custom=foo&c=d&ok=y")
    query = parse_qs(urlsplit(filtered).query)
    assert "x-custom" not in query
    assert query["ok"] == ["y"]


def test_filter_custom_query_full_result():
    filtered = filter_custom_query("foo://host?a=b&x-custom=foo&c=d&ok=y")
    assert filtered == "foo://host?a=b&c=d&ok=y"


def test_filter_custom_query_keeps_short_keys():
    filtered = filter_custom_query("foo://host/path?x=1&x-a=2")
    assert filtered == "foo://host/path?x=1"


def test_multi_error_joins_messages():
    err = MultiError(ValueError("first"), None, KeyError("k"), RuntimeError("second"))
    assert len(err.errors) == 3
    assert str(err) == "first and 'k' and second"


def test_multi_error_skips_empty_messages():
    err = MultiError(ValueError(""), ValueError("only"))
    assert str(err) == "only"


def test_multi_error_empty():
    err = MultiError(None, None)
    assert err.errors == []
    assert str(err) == ""