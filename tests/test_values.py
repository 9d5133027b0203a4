"""Tests for the value union and conversion helpers."""

import pytest

from mdtool.conditional._values import (
    StrictModeError,
    as_text,
    format_number,
    truthy,
    values_equal,
)
from mdtool.model.values import (
    ArrayValue,
    BooleanValue,
    NumberValue,
    ObjectValue,
    StringValue,
    to_python,
    to_value,
)


# ---------------------------------------------------------------------------
# to_value
# ---------------------------------------------------------------------------

class TestToValue:
    def test_string(self):
        assert to_value("abc") == StringValue(value="abc")

    def test_bool_is_not_number(self):
        assert to_value(True) == BooleanValue(value=True)
        assert to_value(False).kind == "boolean"

    def test_int_becomes_float_number(self):
        v = to_value(5)
        assert isinstance(v, NumberValue)
        assert isinstance(v.value, float)
        assert v.value == 5.0

    def test_float(self):
        assert to_value(2.5) == NumberValue(value=2.5)

    def test_none_is_empty_string(self):
        assert to_value(None) == StringValue(value="")

    def test_nested(self):
        v = to_value({"user": {"name": "Alice", "tags": ["a", 1]}})
        assert isinstance(v, ObjectValue)
        user = v.fields["user"]
        assert isinstance(user, ObjectValue)
        assert user.fields["name"] == StringValue(value="Alice")
        tags = user.fields["tags"]
        assert isinstance(tags, ArrayValue)
        assert tags.items == [StringValue(value="a"), NumberValue(value=1.0)]

    def test_tuple_is_array(self):
        assert isinstance(to_value(("a", "b")), ArrayValue)

    def test_value_passes_through(self):
        v = StringValue(value="x")
        assert to_value(v) is v

    def test_huge_integer_rejected(self):
        with pytest.raises(ValueError, match="out of range"):
            to_value(10 ** 400)

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Cannot convert set"):
            to_value({1, 2})

    def test_to_python_inverse(self):
        data = {"a": [1.0, "x", True], "b": {"c": False}}
        assert to_python(to_value(data)) == data

    def test_discriminated_validation(self):
        v = ObjectValue.model_validate(
            {"fields": {"n": {"kind": "number", "value": 3}}}
        )
        assert v.fields["n"] == NumberValue(value=3.0)


# ---------------------------------------------------------------------------
# truthy
# ---------------------------------------------------------------------------

class TestTruthy:
    def test_booleans(self):
        assert truthy(BooleanValue(value=True)) is True
        assert truthy(BooleanValue(value=False)) is False

    def test_empty_string_false(self):
        assert truthy(StringValue(value="")) is False

    def test_false_string_any_case(self):
        assert truthy(StringValue(value="false")) is False
        assert truthy(StringValue(value="FALSE")) is False
        assert truthy(StringValue(value="False")) is False

    def test_other_strings_true(self):
        assert truthy(StringValue(value="no")) is True
        assert truthy(StringValue(value="0")) is True

    def test_zero_false(self):
        assert truthy(NumberValue(value=0.0)) is False
        assert truthy(NumberValue(value=1e-8)) is False
        assert truthy(NumberValue(value=-1e-8)) is False

    def test_nonzero_true(self):
        assert truthy(NumberValue(value=1e-6)) is True
        assert truthy(NumberValue(value=-3)) is True

    def test_containers_true(self):
        assert truthy(ObjectValue()) is True
        assert truthy(ArrayValue()) is True


# ---------------------------------------------------------------------------
# as_text / format_number
# ---------------------------------------------------------------------------

class TestAsText:
    def test_integral_number(self):
        assert format_number(5.0) == "5"
        assert format_number(-12.0) == "-12"

    def test_fractional_number(self):
        assert format_number(2.5) == "2.5"

    def test_boolean(self):
        assert as_text(BooleanValue(value=True)) == "true"
        assert as_text(BooleanValue(value=False)) == "false"

    def test_array_is_compact_json(self):
        assert as_text(to_value(["a", 1])) == '["a",1]'

    def test_object_is_compact_json(self):
        assert as_text(to_value({"k": "v"})) == '{"k":"v"}'


# ---------------------------------------------------------------------------
# values_equal
# ---------------------------------------------------------------------------

def _eq(a, b, strict=False, case_sensitive=False):
    return values_equal(to_value(a), to_value(b), strict=strict, case_sensitive=case_sensitive)


class TestValuesEqual:
    def test_strings_case_insensitive_default(self):
        assert _eq("TEST", "test") is True

    def test_strings_case_sensitive(self):
        assert _eq("TEST", "test", case_sensitive=True) is False
        assert _eq("TEST", "TEST", case_sensitive=True) is True

    def test_numbers_epsilon(self):
        assert _eq(1.0, 1.00000001) is True
        assert _eq(1.0, 1.001) is False

    def test_int_and_float_same_kind(self):
        assert _eq(5, 5.0) is True

    def test_booleans(self):
        assert _eq(True, True) is True
        assert _eq(True, False) is False

    def test_kind_mismatch_unequal(self):
        assert _eq(5, "5") is False
        assert _eq(True, "true") is False

    def test_kind_mismatch_strict_raises(self):
        with pytest.raises(StrictModeError, match="number vs string"):
            _eq(5, "five", strict=True)

    def test_containers_never_equal(self):
        assert _eq([1], [1]) is False
        assert _eq({"a": 1}, {"a": 1}) is False
