"""
Pytest configuration and shared fixtures for lzon tests.

Provides immutable test case records and sample documents used across the
reader, container and failure test modules.
"""

from dataclasses import dataclass
from typing import Any

import pytest

from lzon import Array
from lzon import Boolean
from lzon import Null
from lzon import Number
from lzon import Object
from lzon import String


@dataclass(frozen=True)
class ReaderTestCase:
    """
    Immutable container for reader test case data.

    Holds the input text, the expected value (or failure) and the cursor
    position expected once the value has been read.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    expected_pos: int | None = None


@pytest.fixture
def literal_cases() -> list[ReaderTestCase]:
    """
    Provides scalar literals in the letter casings the reader accepts.
    """
    return [
        ReaderTestCase("lower true", "true", False, Boolean(True), 4),
        ReaderTestCase("upper true", "TRUE", False, Boolean(True), 4),
        ReaderTestCase("mixed true", "TrUe", False, Boolean(True), 4),
        ReaderTestCase("lower false", "false", False, Boolean(False), 5),
        ReaderTestCase("upper false", "FALSE", False, Boolean(False), 5),
        ReaderTestCase("mixed false", "fAlSe", False, Boolean(False), 5),
        ReaderTestCase("null", "null", False, Null(), 4),
        ReaderTestCase("capital null", "Null", False, Null(), 4),
        ReaderTestCase("true in array", "true,", False, Boolean(True), 4),
    ]


@pytest.fixture
def number_cases() -> list[ReaderTestCase]:
    """
    Provides numeric literals and the floats they must produce.
    """
    return [
        ReaderTestCase("integer", "1234", False, Number(1234.0), 4),
        ReaderTestCase("single digit", "2", False, Number(2.0), 1),
        ReaderTestCase("negative", "-122", False, Number(-122.0), 4),
        ReaderTestCase("fraction", "12.34", False, Number(12.34), 5),
        ReaderTestCase("leading zero", "02", False, Number(2.0), 2),
        ReaderTestCase("zero", "0", False, Number(0.0), 1),
        ReaderTestCase("trailing dot", "7.", False, Number(7.0), 2),
        ReaderTestCase("followed by comma", "42,1", False, Number(42.0), 2),
        ReaderTestCase("followed by brace", "-3}", False, Number(-3.0), 2),
    ]


@pytest.fixture
def malformed_cases() -> list[ReaderTestCase]:
    """
    Provides inputs that must fail with InvalidFormat.
    """
    return [
        ReaderTestCase("truncated true", "tru", True),
        ReaderTestCase("misspelled true", "trve", True),
        ReaderTestCase("misspelled false", "fals3", True),
        ReaderTestCase("null with typo", "nkll", True),
        ReaderTestCase("shouting null", "NULL", True),
        ReaderTestCase("truncated null", "nu", True),
        ReaderTestCase("two dots", "1.2.3", True),
        ReaderTestCase("double minus", "--1", True),
        ReaderTestCase("bare minus", "-", True),
        ReaderTestCase("inner minus", "1-2", True),
        ReaderTestCase("single quotes", "'text'", True),
        ReaderTestCase("unquoted word", "hello", True),
        ReaderTestCase("closing bracket", "]", True),
    ]


@pytest.fixture
def nested_document() -> str:
    """
    Provides an indented three-level document spread over several lines.
    """
    return """
    {
        "age": 3,
        "sub": {
            "car": true,
            "isFast": false,
            "superSub": {
                "megafis": -123,
                "korv": "bullens"
            }
        }
    }"""


@pytest.fixture
def nested_document_value() -> Object:
    """
    Provides the value tree expected from ``nested_document``.
    """
    return Object(
        (
            ("age", Number(3.0)),
            (
                "sub",
                Object(
                    (
                        ("car", Boolean(True)),
                        ("isFast", Boolean(False)),
                        (
                            "superSub",
                            Object(
                                (
                                    ("megafis", Number(-123.0)),
                                    ("korv", String("bullens")),
                                )
                            ),
                        ),
                    )
                ),
            ),
        )
    )


@pytest.fixture
def sample_documents() -> list[ReaderTestCase]:
    """
    Provides complete documents that must parse without error.
    """
    return [
        ReaderTestCase(
            "mixed array with every kind of value",
            '[ "Pattern", {"object with 1 member":["array with 1 element"]},'
            " {}, [], -42, true, false, null ]",
            False,
            Array(
                (
                    String("Pattern"),
                    Object(
                        (
                            (
                                "object with 1 member",
                                Array((String("array with 1 element"),)),
                            ),
                        )
                    ),
                    Object(),
                    Array(),
                    Number(-42.0),
                    Boolean(True),
                    Boolean(False),
                    Null(),
                )
            ),
        ),
        ReaderTestCase(
            "deep nesting",
            '[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
            False,
        ),
        ReaderTestCase(
            "simple object",
            '{"Pattern": {"The outermost value": "must be an object or'
            ' array.", "In this test": "It is an object."}}',
            False,
            Object(
                (
                    (
                        "Pattern",
                        Object(
                            (
                                (
                                    "The outermost value",
                                    String("must be an object or array."),
                                ),
                                ("In this test", String("It is an object.")),
                            )
                        ),
                    ),
                )
            ),
        ),
        ReaderTestCase(
            "tab separated members",
            '{"a":\t1,\t"b":\t[1,\t2]}',
            False,
            Object(
                (
                    ("a", Number(1.0)),
                    ("b", Array((Number(1.0), Number(2.0)))),
                )
            ),
        ),
    ]
