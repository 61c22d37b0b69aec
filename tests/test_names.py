"""
Brief: Tests for wasd.names presentation-name encoding and decoding.

Inputs:
  - None

Outputs:
  - None
"""

import pytest

from wasd.errors import MalformedNameError
from wasd.names import decode_name, encode_name


@pytest.mark.parametrize(
    "name,max_labels,expected",
    [
        ("_test._tcp.example.com.", 3, ["_test", "_tcp", "example.com"]),
        ("Woop._test._tcp.example.com.", 4, ["Woop", "_test", "_tcp", "example.com"]),
        (
            "Woop hello there._test._tcp.example.com.",
            4,
            ["Woop hello there", "_test", "_tcp", "example.com"],
        ),
        (
            "Woop\\ hello\\ there._test._tcp.example.com.",
            4,
            ["Woop hello there", "_test", "_tcp", "example.com"],
        ),
    ],
)
def test_decode_name_examples(name, max_labels, expected):
    assert decode_name(name, max_labels) == expected


def test_decode_name_unbounded_splits_every_label():
    assert decode_name("a.b.example.com.") == ["a", "b", "example", "com"]


def test_decode_name_two_labels_splits_off_description():
    """
    Brief: max_labels=2 keeps the remainder verbatim, escapes included.

    Inputs:
      - name with escaped dot in the description and in the remainder

    Outputs:
      - None: Asserts description unescaped, remainder untouched
    """
    assert decode_name("1\\.\\ fun._x\\.y._tcp.example.com.", 2) == [
        "1. fun",
        "_x\\.y._tcp.example.com",
    ]


def test_decode_name_escaped_dot_stays_in_label():
    assert decode_name("a\\.b.c.") == ["a.b", "c"]


def test_decode_name_escaped_backslash_is_literal():
    assert decode_name("a\\\\b.c.") == ["a\\b", "c"]


def test_decode_name_decimal_escapes():
    assert decode_name("Hello\\032There._http._tcp.local.", 2) == [
        "Hello There",
        "_http._tcp.local",
    ]


def test_decode_name_utf8_decimal_escapes():
    assert decode_name("Caf\\195\\169\\032Printer._http._tcp.local.", 2) == [
        "Caf\u00e9 Printer",
        "_http._tcp.local",
    ]


def test_decode_name_invalid_utf8_is_replaced():
    assert decode_name("bad\\255byte.local.") == ["bad\ufffdbyte", "local"]


def test_decode_name_keeps_unicode_text():
    assert decode_name("Caf\u00e9\\ Printer._http._tcp.local.", 2) == [
        "Caf\u00e9 Printer",
        "_http._tcp.local",
    ]


def test_decode_name_drops_unterminated_tail():
    assert decode_name("a.b") == ["a"]


def test_decode_name_no_remainder_after_limit():
    assert decode_name("only.", 2) == ["only"]


def test_decode_name_trailing_backslash_is_malformed():
    with pytest.raises(MalformedNameError):
        decode_name("\\")
    with pytest.raises(MalformedNameError):
        decode_name("abc.def\\")


@pytest.mark.parametrize("bad", ["a\\25.", "a\\2x5.", "a\\256b."])
def test_decode_name_bad_decimal_escape(bad):
    with pytest.raises(MalformedNameError):
        decode_name(bad)


def test_malformed_name_is_value_error():
    with pytest.raises(ValueError):
        decode_name("x\\")


@pytest.mark.parametrize(
    "labels,expected",
    [
        (["a.b", "c"], "a\\.b.c."),
        (["a b", "c"], "a\\ b.c."),
        (["_test", "_tcp", "example.com"], "_test._tcp.example.com."),
        (["Woo", "_test", "_tcp", "example.com"], "Woo._test._tcp.example.com."),
        (["Woo yay", "_test", "_tcp", "example.com"], "Woo\\ yay._test._tcp.example.com."),
        (
            ["1. this is awesome", "_test", "_tcp", "example.com"],
            "1\\.\\ this\\ is\\ awesome._test._tcp.example.com.",
        ),
        (["back\\slash", "com"], "back\\\\slash.com."),
    ],
)
def test_encode_name_examples(labels, expected):
    assert encode_name(labels) == expected


def test_encode_name_leaves_last_label_unescaped():
    assert encode_name(["x", "my domain.com"]) == "x.my domain.com."


def test_encode_name_empty_is_root():
    assert encode_name([]) == "."
    assert decode_name(encode_name([])) == []


@pytest.mark.parametrize(
    "labels",
    [
        ["_http", "_tcp", "local"],
        ["printer", "_ipp", "_tcp", "office", "example", "com"],
        ["a"],
    ],
)
def test_decode_inverts_encode_for_plain_labels(labels):
    assert decode_name(encode_name(labels), 0) == labels


def test_decode_inverts_encode_with_escaped_description():
    labels = ["My Printer 2.0", "_ipp", "_tcp"]
    assert decode_name(encode_name(labels + ["com"]), 0) == labels + ["com"]
