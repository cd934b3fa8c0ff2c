"""Built-in functions that work on arrays."""

from __future__ import annotations

import operator
from typing import Callable, Optional

from zumbra.objects import Array, Float, Integer, Object, String, new_error


def _wrong_count(got: int, want: int) -> Object:
    return new_error(f"wrong number of arguments. got={got}, want={want}")


def _first_non_integer(elements: list[Object]) -> Optional[Object]:
    return next((el for el in elements if not isinstance(el, Integer)), None)


def remove_from_array(*args: Object) -> Optional[Object]:
    """Remove the element at an index, in place, and return the array."""
    if len(args) != 2:
        return _wrong_count(len(args), 2)
    arr, index = args
    if not isinstance(arr, Array):
        return new_error(f"argument to `removeFromArray` must be ARRAY, got {arr.type}")
    if not isinstance(index, Integer):
        return new_error(
            f"index argument to `removeFromArray` must be INTEGER, got {index.type}"
        )
    if not 0 <= index.value < len(arr.elements):
        return new_error(f"index out of bounds: {index.value}")
    del arr.elements[index.value]
    return arr


def add_to_array_start(*args: Object) -> Optional[Object]:
    """Put a value at the front of an array, in place, and return the array."""
    if len(args) != 2:
        return _wrong_count(len(args), 2)
    arr, value = args
    if not isinstance(arr, Array):
        return new_error(f"argument to `addToArrayStart` must be ARRAY, got {arr.type}")
    arr.elements.insert(0, value)
    return arr


def add_to_array_end(*args: Object) -> Optional[Object]:
    """Put a value at the end of an array, in place, and return the array."""
    if len(args) != 2:
        return _wrong_count(len(args), 2)
    arr, value = args
    if not isinstance(arr, Array):
        return new_error(f"argument to `addToArrayEnd` must be ARRAY, got {arr.type}")
    arr.elements.append(value)
    return arr


def _extreme(
    args: tuple[Object, ...], name: str, replaces: Callable[[int, int], bool]
) -> Optional[Object]:
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return new_error(f"argument to `{name}` must be ARRAY, got {arr.type}")
    if not arr.elements:
        return None
    bad = _first_non_integer(arr.elements)
    if bad is not None:
        return new_error(f"elements of `{name}` must be INTEGER, got {bad.type}")
    best = arr.elements[0]
    for el in arr.elements[1:]:
        if replaces(el.value, best.value):
            best = el
    return best


def max_of(*args: Object) -> Optional[Object]:
    """Return the largest integer of an array, or None when it is empty."""
    return _extreme(args, "max", operator.ge)


def min_of(*args: Object) -> Optional[Object]:
    """Return the smallest integer of an array, or None when it is empty."""
    return _extreme(args, "min", operator.le)


def first(*args: Object) -> Optional[Object]:
    """Return the first element of an array, or None when it is empty."""
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return new_error(f"argument to `first` must be ARRAY, got {arr.type}")
    return arr.elements[0] if arr.elements else None


def last(*args: Object) -> Optional[Object]:
    """Return the last element of an array, or None when it is empty."""
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return new_error(f"argument to `last` must be ARRAY, got {arr.type}")
    return arr.elements[-1] if arr.elements else None


def all_but_first(*args: Object) -> Optional[Object]:
    """Return a new array without the first element, or None when it is empty."""
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return new_error(f"argument to `allButFirst` must be ARRAY, got {arr.type}")
    if not arr.elements:
        return None
    return Array(list(arr.elements[1:]))


def index_of(*args: Object) -> Optional[Object]:
    """Return the position of an integer or string in an array, or -1."""
    if len(args) != 2:
        return _wrong_count(len(args), 2)
    arr, needle = args
    if not isinstance(arr, Array):
        return new_error(f"argument to `indexOf` must be ARRAY, got {arr.type}")
    if not isinstance(needle, (Integer, String)):
        return new_error(
            f"index argument to `indexOf` must be INTEGER, got {needle.type}"
        )
    for position, el in enumerate(arr.elements):
        if type(el) is type(needle) and el.value == needle.value:
            return Integer(position)
    return Integer(-1)


def organize(*args: Object) -> Optional[Object]:
    """Sort an array of integers in place, "asc" by default or "desc"."""
    if not args:
        return _wrong_count(0, 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return new_error(f"first argument to `organize` must be ARRAY, got {arr.type}")
    order = "asc"
    if len(args) > 1 and isinstance(args[1], String):
        order = args[1].value
    if order in ("asc", "desc"):
        bad = _first_non_integer(arr.elements)
        if bad is not None:
            return new_error(f"elements of `organize` must be INTEGER, got {bad.type}")
        arr.elements.sort(key=lambda el: el.value, reverse=order == "desc")
    return arr


def sum_of(*args: Object) -> Optional[Object]:
    """Add up an array of numbers; the result is a float if any element is."""
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    arr = args[0]
    if not isinstance(arr, Array):
        return new_error(f"argument to `sum` must be ARRAY, got {arr.type}")

    float_total = 0.0
    int_total = 0
    has_float = False
    for el in arr.elements:
        if isinstance(el, Float):
            float_total += el.value
            has_float = True
        elif isinstance(el, Integer):
            float_total += float(el.value)
            int_total += el.value
        else:
            return new_error(f"argument to `sum` must be INTEGER or FLOAT, got {el.type}")

    return Float(float_total) if has_float else Integer(int_total)