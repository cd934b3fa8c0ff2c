import pytest

from zumbra.builtins.conversions import (
    convert_to_object,
    json_parse,
    to_bool,
    to_float,
    to_int,
    to_string,
)
from zumbra.objects import Array, Boolean, Dict, Error, Float, Integer, Null, String


def lookup(dictionary, name):
    return dictionary.pairs[String(name).dict_key()].value


def test_to_string_integer():
    assert to_string(Integer(42)) == String("42")


def test_to_string_float_plain():
    assert to_string(Float(3.5)) == String("3.5")


def test_to_string_float_large_uses_exponent():
    assert to_string(Float(1000000.0)) == String("1e+06")


def test_to_string_boolean():
    assert to_string(Boolean(True)) == String("true")


def test_to_string_unsupported():
    assert to_string(Array([])) == Error("argument to `toString` not supported, got=ARRAY")


@pytest.mark.parametrize("number", [0, 7, -15, 123456789, -(1 << 63)])
def test_int_string_round_trip(number):
    assert to_int(to_string(Integer(number))) == Integer(number)


@pytest.mark.parametrize("number", [3.5, -0.25, 1e-7, 123456.0, 1e21, 0.1])
def test_float_string_round_trip(number):
    assert to_float(to_string(Float(number))) == Float(number)


def test_to_int_bad_string():
    result = to_int(String("abc"))
    assert result.message.startswith("Error to parse string.")
    assert "invalid syntax" in result.message


def test_to_int_out_of_range():
    result = to_int(String(str(1 << 63)))
    assert "value out of range" in result.message


def test_to_int_floors_floats():
    assert to_int(Float(2.7)) == Integer(2)


def test_to_int_boolean():
    assert to_int(Boolean(True)) == Integer(1)
    assert to_int(Boolean(False)) == Integer(0)


def test_to_int_integer_is_same_object():
    value = Integer(5)
    assert to_int(value) is value


def test_to_float_integer():
    assert to_float(Integer(3)) == Float(3.0)


def test_to_float_bad_string():
    assert to_float(String("x1")).message.startswith("Error to parse string.")


def test_to_float_unsupported():
    assert to_float(Null()) == Error("argument to `toFloat` not supported, got=NULL")


def test_to_bool_empty_and_nonempty_strings_differ():
    assert to_bool(String("")) == Boolean(False)
    assert to_bool(String("x")) == Boolean(True)


def test_to_bool_boolean_is_same_object():
    value = Boolean(False)
    assert to_bool(value) is value


def test_wrong_argument_count():
    assert to_bool() == Error("wrong number of arguments. got=0, want=1")


def test_json_parse_object():
    result = json_parse(
        String('{"name": "zum", "n": 7, "ok": true, "nested": {"x": 1}, "none": null}')
    )
    assert lookup(result, "name") == String("zum")
    assert lookup(result, "n") == Integer(7)
    assert lookup(result, "ok") == Boolean(True)
    assert lookup(lookup(result, "nested"), "x") == Integer(1)
    assert lookup(result, "none") == Null()


def test_json_parse_invalid():
    assert json_parse(String("{oops")).message.startswith("invalid JSON:")


def test_json_parse_not_object():
    assert json_parse(String("[1, 2]")).message.startswith("invalid JSON:")


def test_json_parse_needs_string():
    assert json_parse(Integer(1)) == Error(
        "argument to `json_parse` must be STRING, got INTEGER"
    )


def test_convert_to_object_lists_become_null():
    assert convert_to_object([1, 2]) == Null()
    assert convert_to_object({}) == Dict()