import pytest

from zumbra.builtins.registry import BUILTINS, builtin_names, get_builtin_by_name
from zumbra.objects import Array, Builtin, Error, Integer, String


def test_names_are_unique_and_match_table():
    names = builtin_names()
    assert len(names) == len(set(names))
    assert names == [definition.name for definition in BUILTINS]


def test_table_order_ends():
    names = builtin_names()
    assert names[0] == "addToArrayStart"
    assert names[-1] == "toUppercase"


def test_every_entry_is_reachable_by_name():
    for definition in BUILTINS:
        assert isinstance(definition.builtin, Builtin)
        assert get_builtin_by_name(definition.name) is definition.builtin


def test_unknown_name():
    assert get_builtin_by_name("noSuchBuiltin") is None


@pytest.mark.parametrize(
    "name, args, expected",
    [
        ("sizeOf", [String("four")], Integer(4)),
        ("sizeOf", [String("hello world")], Integer(11)),
        ("first", [Array([Integer(1), Integer(2), Integer(3)])], Integer(1)),
        ("last", [Array([Integer(1), Integer(2), Integer(3)])], Integer(3)),
        ("toUppercase", [String("abc")], String("ABC")),
    ],
)
def test_builtins_called_through_registry(name, args, expected):
    assert get_builtin_by_name(name).fn(*args) == expected


def test_error_from_registry_builtin():
    result = get_builtin_by_name("sizeOf").fn(Integer(1))
    assert isinstance(result, Error)
    assert result.message == "argument to `sizeOf` not supported, got INTEGER"


def test_add_to_array_start_through_registry():
    result = get_builtin_by_name("addToArrayStart").fn(Array([]), Integer(1))
    assert result == Array([Integer(1)])