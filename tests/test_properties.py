"""
Brief: Tests for versioned TXT property parsing.

Inputs:
  - None

Outputs:
  - None
"""

import pytest

from wasd.properties import (
    DEFAULT_PROPERTY_VERSION,
    parse_int_literal,
    parse_txt_properties,
)


def test_default_version_is_one():
    assert DEFAULT_PROPERTY_VERSION == 1


def test_txtvers_selects_version_and_is_not_stored():
    props = parse_txt_properties(["txtvers=2", "second=version", "gosh=wow"])
    assert props == {2: {"second": "version", "gosh": "wow"}}
    assert 1 not in props


def test_default_version_and_extra_equals_in_value():
    props = parse_txt_properties(["hello=there", "this=is=fun"])
    assert props == {1: {"hello": "there", "this": "is=fun"}}


def test_malformed_entries_are_skipped():
    props = parse_txt_properties(["novalue", "=empty", "ok=1", ""])
    assert props == {1: {"ok": "1"}}


def test_empty_value_is_kept():
    assert parse_txt_properties(["flag="]) == {1: {"flag": ""}}


def test_later_duplicate_overwrites():
    assert parse_txt_properties(["a=1", "a=2"]) == {1: {"a": "2"}}


def test_txtvers_only_counts_as_first_entry():
    props = parse_txt_properties(["a=1", "txtvers=3", "b=2"])
    assert props == {1: {"a": "1", "txtvers": "3", "b": "2"}}


def test_txtvers_after_skipped_entry_is_not_first():
    props = parse_txt_properties(["junk", "txtvers=3", "b=2"])
    assert props == {1: {"txtvers": "3", "b": "2"}}


def test_non_integer_txtvers_is_stored_as_property():
    props = parse_txt_properties(["txtvers=two", "a=b"])
    assert props == {1: {"txtvers": "two", "a": "b"}}


def test_hex_txtvers():
    assert parse_txt_properties(["txtvers=0x10", "a=b"]) == {16: {"a": "b"}}


def test_bytes_entries_are_decoded():
    props = parse_txt_properties([b"txtvers=2", b"name=caf\xc3\xa9", b"bad=\xff"])
    assert props == {2: {"name": "café", "bad": "�"}}


def test_updates_existing_mapping_in_place():
    """
    Brief: Several TXT records merge into one mapping, later records win.

    Inputs:
      - Two records sharing version 1 and one record on version 2

    Outputs:
      - None: Asserts merged mapping identity and content
    """
    props = {}
    parse_txt_properties(["a=1", "b=1"], props)
    parse_txt_properties(["txtvers=2", "a=x"], props)
    out = parse_txt_properties(["b=2"], props)
    assert out is props
    assert props == {1: {"a": "1", "b": "2"}, 2: {"a": "x"}}


@pytest.mark.parametrize(
    "text,expected",
    [
        ("2", 2),
        ("-3", -3),
        ("+4", 4),
        ("0", 0),
        ("0x1F", 31),
        ("0o17", 15),
        ("017", 15),
        ("0b101", 5),
        ("1_000", 1000),
        ("", None),
        (" 2", None),
        ("2 ", None),
        ("08", None),
        ("--1", None),
        ("abc", None),
        ("1.5", None),
        (str(2**63), None),
        (str(-(2**63)), -(2**63)),
    ],
)
def test_parse_int_literal(text, expected):
    assert parse_int_literal(text) == expected
