"""Built-in functions converting between value types and parsing JSON."""

from __future__ import annotations

import json
import math
import re
from decimal import Decimal
from typing import Any, Optional

from zumbra.objects import (
    Boolean,
    Dict,
    DictPair,
    Float,
    Integer,
    Null,
    Object,
    String,
    new_error,
)

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_DECIMAL_INT = re.compile(r"[+-]?\d+", re.ASCII)
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?\d+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:infinity|inf)|nan", re.IGNORECASE)


def _wrong_count(got: int) -> Object:
    return new_error(f"wrong number of arguments. got={got}, want=1")


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def _format_float(value: float) -> str:
    """Shortest text for a float, switching to exponent form like %g does."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    number = Decimal(repr(value)).normalize()
    sign, digits, exponent = number.as_tuple()
    count = len(digits)
    point = count + exponent
    exp = point - 1
    limit = 6
    if limit > count and count >= point:
        limit = count

    if exp < -4 or exp >= limit:
        mantissa = str(digits[0])
        if count > 1:
            mantissa += "." + "".join(str(d) for d in digits[1:])
        text = f"{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    else:
        text = format(abs(number), "f")
    return ("-" if sign else "") + text


def _parse_int(text: str) -> int:
    if not _DECIMAL_INT.fullmatch(text):
        raise ValueError(f"strconv.Atoi: parsing {_quote(text)}: invalid syntax")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"strconv.Atoi: parsing {_quote(text)}: value out of range")
    return value


def _parse_float(text: str) -> float:
    if _SPECIAL_FLOAT.fullmatch(text):
        return float(text)
    if _DECIMAL_FLOAT.fullmatch(text):
        value = float(text)
    elif _HEX_FLOAT.fullmatch(text):
        value = float.fromhex(text)
    else:
        raise ValueError(f"strconv.ParseFloat: parsing {_quote(text)}: invalid syntax")
    if math.isinf(value):
        raise ValueError(f"strconv.ParseFloat: parsing {_quote(text)}: value out of range")
    return value


def to_string(*args: Object) -> Optional[Object]:
    """Render an integer, float or boolean as a string."""
    if len(args) != 1:
        return _wrong_count(len(args))
    obj = args[0]
    if isinstance(obj, Integer):
        return String(str(obj.value))
    if isinstance(obj, Float):
        return String(_format_float(obj.value))
    if isinstance(obj, Boolean):
        return String("true" if obj.value else "false")
    return new_error(f"argument to `toString` not supported, got={obj.type}")


def to_int(*args: Object) -> Optional[Object]:
    """Convert a string, float or boolean to an integer; floats are floored."""
    if len(args) != 1:
        return _wrong_count(len(args))
    obj = args[0]
    if isinstance(obj, String):
        try:
            return Integer(_parse_int(obj.value))
        except ValueError as exc:
            return new_error(f"Error to parse string. {exc}")
    if isinstance(obj, Float):
        if not math.isfinite(obj.value):
            return new_error(f"cannot convert {obj.inspect()} to INTEGER")
        return Integer(math.floor(obj.value))
    if isinstance(obj, Boolean):
        return Integer(1 if obj.value else 0)
    if isinstance(obj, Integer):
        return obj
    return new_error(f"argument to `toInt` not supported, got={obj.type}")


def to_float(*args: Object) -> Optional[Object]:
    """Convert a string, integer or boolean to a float."""
    if len(args) != 1:
        return _wrong_count(len(args))
    obj = args[0]
    if isinstance(obj, String):
        try:
            return Float(_parse_float(obj.value))
        except ValueError as exc:
            return new_error(f"Error to parse string. {exc}")
    if isinstance(obj, Float):
        return obj
    if isinstance(obj, Boolean):
        return Float(1.0 if obj.value else 0.0)
    if isinstance(obj, Integer):
        return Float(float(obj.value))
    return new_error(f"argument to `toFloat` not supported, got={obj.type}")


def to_bool(*args: Object) -> Optional[Object]:
    """Convert a value to a boolean: empty strings and zeros are false."""
    if len(args) != 1:
        return _wrong_count(len(args))
    obj = args[0]
    if isinstance(obj, String):
        return Boolean(obj.value != "")
    if isinstance(obj, (Float, Integer)):
        return Boolean(obj.value != 0)
    if isinstance(obj, Boolean):
        return obj
    return new_error(f"argument to `toBool` not supported, got={obj.type}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid character {name[0]!r} looking for beginning of value")


def _json_kind(value: Any) -> str:
    if isinstance(value, str):
        return "string"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    return "array"


def json_parse(*args: Object) -> Optional[Object]:
    """Parse a JSON object held in a string into a dictionary."""
    if len(args) != 1:
        return _wrong_count(len(args))
    text = args[0]
    if not isinstance(text, String):
        return new_error(f"argument to `json_parse` must be STRING, got {text.type}")
    try:
        parsed = json.loads(text.value, parse_constant=_reject_constant)
    except ValueError as exc:
        return new_error(f"invalid JSON: {exc}")
    if parsed is None:
        parsed = {}
    if not isinstance(parsed, dict):
        return new_error(f"invalid JSON: cannot unmarshal {_json_kind(parsed)} into dict")
    return convert_to_object(parsed)


def convert_to_object(data: Any) -> Object:
    """Turn decoded JSON data into runtime values; numbers become integers."""
    if isinstance(data, dict):
        pairs = {}
        for name, item in data.items():
            key = String(name)
            pairs[key.dict_key()] = DictPair(key, convert_to_object(item))
        return Dict(pairs)
    if isinstance(data, str):
        return String(data)
    if isinstance(data, bool):
        return Boolean(data)
    if isinstance(data, int):
        return Integer(data)
    if isinstance(data, float) and math.isfinite(data):
        return Integer(int(data))
    return Null()