"""Built-in functions that work on dictionaries."""

from __future__ import annotations

from typing import Optional

from zumbra.objects import Array, Dict, DictPair, Object, is_hashable, new_error


def _wrong_count(got: int, want: int) -> Object:
    return new_error(f"wrong number of arguments. got={got}, want={want}")


def _check(args: tuple[Object, ...], name: str, want: int) -> Optional[Object]:
    if len(args) != want:
        return _wrong_count(len(args), want)
    if not isinstance(args[0], Dict):
        return new_error(f"argument to `{name}` must be DICT, got {args[0].type}")
    if want > 1 and not is_hashable(args[1]):
        return new_error(
            f"key must be hashable (STRING, INTEGER, BOOLEAN), got {args[1].type}"
        )
    return None


def add_to_dict(*args: Object) -> Optional[Object]:
    """Store a value under a key in a dictionary, in place."""
    problem = _check(args, "addToDict", 3)
    if problem is not None:
        return problem
    target, key, value = args
    target.pairs[key.dict_key()] = DictPair(key, value)
    return None


def delete_from_dict(*args: Object) -> Optional[Object]:
    """Remove a key from a dictionary, in place, if it is there."""
    problem = _check(args, "deleteFromDict", 2)
    if problem is not None:
        return problem
    target, key = args
    target.pairs.pop(key.dict_key(), None)
    return None


def get_from_dict(*args: Object) -> Optional[Object]:
    """Return the value stored under a key, or None when it is missing."""
    problem = _check(args, "getFromDict", 2)
    if problem is not None:
        return problem
    target, key = args
    pair = target.pairs.get(key.dict_key())
    return pair.value if pair is not None else None


def dict_keys(*args: Object) -> Optional[Object]:
    """Return an array of the dictionary's keys."""
    problem = _check(args, "dictKeys", 1)
    if problem is not None:
        return problem
    return Array([pair.key for pair in args[0].pairs.values()])


def dict_values(*args: Object) -> Optional[Object]:
    """Return an array of the dictionary's values."""
    problem = _check(args, "dictValues", 1)
    if problem is not None:
        return problem
    return Array([pair.value for pair in args[0].pairs.values()])