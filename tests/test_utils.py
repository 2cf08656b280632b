import pytest

from ginroute.utils import (
    H,
    choose_data,
    filter_flags,
    join_paths,
    last_char,
    name_of_function,
    parse_accept,
    resolve_address,
)


def somefunction():
    """Used by test_function_name."""


def test_last_char():
    assert last_char("hola") == "a"
    assert last_char("adios") == "s"
    with pytest.raises(ValueError):
        last_char("")


def test_parse_accept():
    parts = parse_accept("text/html , application/xhtml+xml,application/xml;q=0.9,  */* ;q=0.8")
    assert parts == ["text/html", "application/xhtml+xml", "application/xml", "*/*"]


def test_parse_accept_drops_empty_parts():
    assert parse_accept(" , ;q=1,text/plain") == ["text/plain"]


def test_choose_data():
    assert choose_data("a", "b") == "a"
    assert choose_data(None, "b") == "b"
    with pytest.raises(ValueError):
        choose_data(None, None)


def test_filter_flags():
    assert filter_flags("text/html ") == "text/html"
    assert filter_flags("text/html;") == "text/html"
    assert filter_flags("text/html") == "text/html"


def test_function_name():
    name = name_of_function(somefunction)
    assert name.split(".")[-2:] == ["test_utils", "somefunction"]


@pytest.mark.parametrize(
    "absolute, relative, expected",
    [
        ("", "", ""),
        ("", "/", "/"),
        ("/a", "", "/a"),
        ("/a/", "", "/a/"),
        ("/a/", "/", "/a/"),
        ("/a", "/", "/a/"),
        ("/a", "/hola", "/a/hola"),
        ("/a/", "/hola", "/a/hola"),
        ("/a/", "/hola/", "/a/hola/"),
        ("/a/", "/hola//", "/a/hola/"),
    ],
)
def test_join_paths(absolute, relative, expected):
    assert join_paths(absolute, relative) == expected


def test_join_paths_cleans_dots():
    assert join_paths("/a/b", "../c") == "/a/c"
    assert join_paths("/a", "./x/") == "/a/x/"


def test_to_xml_for_h_with_empty_key_fails():
    with pytest.raises(ValueError):
        H({"": "test"}).to_xml()


def test_to_xml_for_h():
    assert H({"foo": "bar"}).to_xml() == "<map><foo>bar</foo></map>"


def test_to_xml_escapes_and_formats_values():
    xml = H({"a": "<&>", "b": True, "c": 3}).to_xml()
    assert xml == "<map><a>&lt;&amp;&gt;</a><b>true</b><c>3</c></map>"


def test_resolve_address_default(monkeypatch):
    monkeypatch.setenv("PORT", "")
    assert resolve_address() == ":8080"


def test_resolve_address_unset_env(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert resolve_address() == ":8080"


def test_resolve_address_from_env(monkeypatch):
    monkeypatch.setenv("PORT", "3123")
    assert resolve_address() == ":3123"


def test_resolve_address_explicit():
    assert resolve_address(":5150") == ":5150"


def test_resolve_address_too_many():
    with pytest.raises(ValueError, match="too much parameters"):
        resolve_address("2", "2")