import pytest

from lambdaurl.core.headers import Header, canonical_header_key


@pytest.mark.parametrize(
    "key, expected",
    [
        ("content-type", "Content-Type"),
        ("X-FOO", "X-Foo"),
        ("set-cookie", "Set-Cookie"),
        ("x-amz-date", "X-Amz-Date"),
        ("", ""),
        # Not a token: stored as given.
        ("bad key", "bad key"),
        ("x:y", "x:y"),
    ],
)
def test_canonical_header_key(key, expected):
    assert canonical_header_key(key) == expected


def test_add_collects_values_in_order():
    headers = Header()

    headers.add("X-Foo", "1")
    headers.add("x-foo", "2")

    assert headers["X-Foo"] == ["1", "2"]
    assert list(headers) == ["X-Foo"]


def test_set_replaces_values():
    headers = Header()
    headers.add("Vary", "Accept")
    headers.add("Vary", "Origin")

    headers.set("vary", "*")

    assert headers.getlist("Vary") == ["*"]


def test_get_one_returns_first_value_or_default():
    headers = Header({"Accept": ["text/html", "application/json"]})

    assert headers.get_one("accept") == "text/html"
    assert headers.get_one("missing") is None
    assert headers.get_one("missing", "") == ""


def test_mapping_protocol_is_case_insensitive():
    headers = Header({"content-type": "text/plain"})

    assert "CONTENT-TYPE" in headers
    assert 42 not in headers
    assert len(headers) == 1

    headers["x-single"] = "one"
    assert headers["X-Single"] == ["one"]

    del headers["Content-Type"]
    assert "content-type" not in headers


def test_getlist_returns_copy():
    headers = Header({"X-Foo": ["1"]})

    values = headers.getlist("X-Foo")
    values.append("2")

    assert headers["X-Foo"] == ["1"]


def test_copy_is_independent():
    headers = Header({"X-Foo": ["1"]})

    clone = headers.copy()
    clone.add("X-Foo", "2")

    assert headers["X-Foo"] == ["1"]
    assert clone == {"X-Foo": ["1", "2"]}
