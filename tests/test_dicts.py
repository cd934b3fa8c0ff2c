from zumbra.builtins.dicts import (
    add_to_dict,
    delete_from_dict,
    dict_keys,
    dict_values,
    get_from_dict,
)
from zumbra.objects import Array, Boolean, Dict, DictPair, Error, Integer, String


def make_dict(*pairs):
    result = Dict()
    for key, value in pairs:
        result.pairs[key.dict_key()] = DictPair(key, value)
    return result


def test_add_then_get_round_trip():
    target = make_dict()
    assert add_to_dict(target, String("name"), String("zum")) is None
    assert get_from_dict(target, String("name")) == String("zum")


def test_add_overwrites_existing_key():
    target = make_dict((Integer(1), String("a")))
    add_to_dict(target, Integer(1), String("b"))
    assert len(target.pairs) == 1
    assert get_from_dict(target, Integer(1)) == String("b")


def test_boolean_keys():
    target = make_dict()
    add_to_dict(target, Boolean(True), Integer(10))
    assert get_from_dict(target, Boolean(True)) == Integer(10)
    assert get_from_dict(target, Boolean(False)) is None


def test_get_missing_key_is_null():
    assert get_from_dict(make_dict(), String("nope")) is None


def test_delete_removes_key():
    target = make_dict((String("a"), Integer(1)), (String("b"), Integer(2)))
    assert delete_from_dict(target, String("a")) is None
    assert get_from_dict(target, String("a")) is None
    assert get_from_dict(target, String("b")) == Integer(2)


def test_delete_missing_key_leaves_dict():
    target = make_dict((String("a"), Integer(1)))
    delete_from_dict(target, String("zzz"))
    assert len(target.pairs) == 1


def test_keys_and_values():
    target = make_dict((String("a"), Integer(1)), (String("b"), Integer(2)))
    assert {k.value for k in dict_keys(target).elements} == {"a", "b"}
    assert {v.value for v in dict_values(target).elements} == {1, 2}


def test_keys_and_values_of_empty_dict():
    assert dict_keys(make_dict()) == Array([])
    assert dict_values(make_dict()) == Array([])


def test_not_a_dict():
    assert get_from_dict(Integer(1), String("a")) == Error(
        "argument to `getFromDict` must be DICT, got INTEGER"
    )
    assert dict_keys(String("x")) == Error(
        "argument to `dictKeys` must be DICT, got STRING"
    )


def test_unhashable_key():
    assert add_to_dict(make_dict(), Array([]), Integer(1)) == Error(
        "key must be hashable (STRING, INTEGER, BOOLEAN), got ARRAY"
    )


def test_wrong_argument_count():
    assert add_to_dict(make_dict(), String("a")) == Error(
        "wrong number of arguments. got=2, want=3"
    )
    assert dict_values() == Error("wrong number of arguments. got=0, want=1")