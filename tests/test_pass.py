"""
JSON specification compliance tests for valid JSON inputs.

Validates that properly formatted JSON strings parse successfully and produce
the expected value trees.
"""

import pytest

import jsontree

from .conftest import PASS1
from .conftest import JsonTestCase


def test_json_spec_compliance(json_pass_cases: list[JsonTestCase]) -> None:
    """
    Validates JSON strings that must parse successfully per RFC 8259.

    Tests standards compliance for valid JSON structures including complex
    nested documents, deep arrays, and simple objects.
    """
    for case in json_pass_cases:
        result = jsontree.parse(case.input_data)
        assert jsontree.is_json_value(result), case.description


def test_basic_json_values(basic_json_values: list[JsonTestCase]) -> None:
    """
    Validates parsing of fundamental JSON value types.

    Covers all JSON primitive types and basic container structures
    to ensure core parsing functionality works correctly.
    """
    for case in basic_json_values:
        if case.should_fail:
            with pytest.raises(jsontree.ParseError) as exc_info:
                jsontree.parse(case.input_data)
            assert exc_info.value.kind is case.expected_kind, case.description
        else:
            result = jsontree.parse(case.input_data)
            assert result == case.expected_output, case.description


def test_pass1_contents() -> None:
    """
    Validates values decoded from the JSON_checker pass1 document.
    """
    doc = jsontree.parse(PASS1).as_array()

    assert doc[0] == jsontree.JsonString("JSON Test Pattern pass1")
    assert doc[4].as_number().as_int() == -42
    assert doc[5] is jsontree.TRUE
    assert doc[7].is_null()

    members = doc[8].as_object()
    assert members["integer"].as_number().as_int() == 1234567890
    assert members["real"].as_number().text == "-9876.543210"
    assert members["E"].as_number().as_float() == 1.23456789e34
    assert members[""].as_number().text == "23456789012E66"
    assert members["quote"].as_str() == '"'
    assert members["backslash"].as_str() == "\\"
    assert members["controls"].as_str() == "\b\f\n\r\t"
    assert members["slash"].as_str() == "/ & /"
    assert members["hex"].as_str() == "\u0123\u4567\u89ab\ucdef\uabcd\uef4a"
    assert members["array"] == jsontree.JsonArray()
    assert members["object"] == jsontree.JsonObject()
    assert members[" s p a c e d "].to_python() == [1, 2, 3, 4, 5, 6, 7]
    assert members["compact"] == members[" s p a c e d "]
    assert jsontree.loads(members["jsontext"].as_str()) == {
        "object with 1 member": ["array with 1 element"]
    }

    assert doc[-1].as_str() == "rosebud"


def test_pass1_member_order() -> None:
    """
    Validates object members keep their source order.
    """
    members = jsontree.parse(PASS1)[8]
    keys = [key.name for key in members]
    assert keys[:4] == ["integer", "real", "e", "E"]
    assert keys[-1].startswith("/\\")


def test_empty_containers() -> None:
    """
    Validates parsing of empty JSON containers.
    """
    assert jsontree.parse("[]") == jsontree.JsonArray()
    assert jsontree.parse("{}") == jsontree.JsonObject()
    assert jsontree.parse(" [ ] ") == jsontree.JsonArray()
    assert jsontree.parse(" {\n} ") == jsontree.JsonObject()


def test_whitespace_handling() -> None:
    """
    Validates proper handling of JSON whitespace.
    """
    assert jsontree.parse(" null ") is jsontree.NULL
    assert jsontree.parse("\n\ttrue\n") is jsontree.TRUE
    assert jsontree.parse("\r\n42\r\n") == jsontree.JsonNumber("42")

    assert jsontree.loads("[ 1 , 2 , 3 ]") == [1, 2, 3]
    assert jsontree.loads('{ "key" : "value" }') == {"key": "value"}


def test_usage_example_with_crlf() -> None:
    """
    Validates the CRLF-padded usage object parses to one member.
    """
    result = jsontree.parse('{ \r\n "usage" : "usage string" \r\n}')

    obj = result.as_object()
    assert len(obj) == 1
    assert obj["usage"] == jsontree.JsonString("usage string")
