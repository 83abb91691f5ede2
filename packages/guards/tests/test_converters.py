"""Tests for converters and membership guards."""

import math
from enum import Enum

import pytest

from dataknobs_guards import (
    KindMismatchError,
    NotAMemberError,
    NotANumberError,
    as_,
    enum_member,
    number,
    one_of,
    string_boolean,
    to_boolean,
    to_number,
    to_string,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"


class TestToNumber:
    """Test numeric conversion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (4, 4),
            ("4", 4),
            (" 4.5 ", 4.5),
            (True, 1),
            (None, 0),
            ("", 0),
            (2.5, 2.5),
            ([], 0),
            (["7"], 7),
        ],
    )
    def test_converts(self, value, expected):
        """Test values with a numeric interpretation."""
        assert to_number(value) == expected

    def test_nan_reported(self):
        """Test that unparseable input is reported."""
        with pytest.raises(NotANumberError):
            to_number("four")

    @pytest.mark.parametrize("value", ["1_000", "1_0.5", [1, 2]])
    def test_digit_separators_and_long_lists_rejected(self, value):
        """Test that separators and multi-element lists are not numbers."""
        with pytest.raises(NotANumberError):
            to_number(value)

    def test_lenient_nan(self, lenient, messages):
        """Test that NaN is returned under a handler."""
        assert math.isnan(lenient.to_number([1, 2]))
        assert len(messages) == 1


class TestSimpleConverters:
    """Test converters that never fail."""

    def test_to_string(self):
        assert to_string(4) == "4"
        assert to_string("x") == "x"

    def test_to_boolean(self):
        assert to_boolean(0) is False
        assert to_boolean("x") is True


class TestStringBoolean:
    """Test "true"/"false" string parsing."""

    def test_accepts(self):
        """Test accepted inputs."""
        assert string_boolean("true") is True
        assert string_boolean("false") is False
        assert string_boolean(True) is True

    @pytest.mark.parametrize("value", ["yes", "True", 1, None])
    def test_rejects(self, value):
        """Test rejected inputs."""
        with pytest.raises(KindMismatchError):
            string_boolean(value)

    def test_message(self, lenient, messages):
        """Test the message and fallback under a handler."""
        assert lenient.string_boolean("yes") is True
        assert lenient.string_boolean("") is False
        assert messages[0] == '"yes" is not "true" or "false" string'


class TestMembership:
    """Test one_of and enum_member."""

    def test_one_of(self):
        """Test membership in literal values."""
        guard = one_of("a", "b", 3)
        assert guard("a") == "a"
        assert guard(3) == 3
        with pytest.raises(NotAMemberError) as exc_info:
            guard("c")
        assert str(exc_info.value) == '`"c"` is not one of a,b,3.'

    def test_one_of_booleans_distinct(self):
        """Test that True does not match 1."""
        with pytest.raises(NotAMemberError):
            one_of(1, 2)(True)
        assert one_of(True)(True) is True

    def test_enum_member(self):
        """Test enum members and values."""
        guard = enum_member(Color)
        assert guard("red") is Color.RED
        assert guard(Color.GREEN) is Color.GREEN
        with pytest.raises(NotAMemberError):
            guard("pink")

    def test_mapping_member(self):
        """Test a mapping used as an enumeration."""
        guard = enum_member({"LOW": 1, "HIGH": 2})
        assert guard(2) == 2
        with pytest.raises(NotAMemberError):
            guard("LOW")

    def test_lenient_returns_value(self, lenient, messages):
        """Test that non-members are returned under a handler."""
        assert lenient.one_of("a")("b") == "b"
        assert messages == ['`"b"` is not one of a.']

    def test_as(self):
        """Test the identity cast."""
        positive = as_(number)
        assert positive(4) == 4
        with pytest.raises(KindMismatchError):
            positive("4")
