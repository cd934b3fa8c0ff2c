from datetime import datetime, timezone

import pytest

from zumbra.objects import (
    Array,
    Boolean,
    Builtin,
    Closure,
    CompiledFunction,
    Date,
    Dict,
    DictKey,
    DictPair,
    Environment,
    Error,
    Float,
    Function,
    Integer,
    Null,
    ObjectType,
    Record,
    ReturnValue,
    String,
    is_hashable,
    new_enclosed_environment,
    new_error,
)


def test_string_dict_key():
    hello1 = String("Hello World")
    hello2 = String("Hello World")
    diff1 = String("My name is johnny")
    diff2 = String("My name is johnny")

    assert hello1.dict_key() == hello2.dict_key()
    assert diff1.dict_key() == diff2.dict_key()
    assert hello1.dict_key() != diff1.dict_key()


def test_string_dict_key_uses_fnv1a():
    assert String("").dict_key() == DictKey(ObjectType.STRING, 0xCBF29CE484222325)
    assert String("a").dict_key().value == 0xAF63DC4C8601EC8C


def test_integer_dict_key_wraps_negative_values():
    assert Integer(1).dict_key() == DictKey(ObjectType.INTEGER, 1)
    assert Integer(-1).dict_key().value == 2**64 - 1


def test_boolean_dict_key():
    assert Boolean(True).dict_key() == DictKey(ObjectType.BOOLEAN, 1)
    assert Boolean(False).dict_key() == DictKey(ObjectType.BOOLEAN, 0)


def test_keys_of_different_types_differ():
    assert Integer(1).dict_key() != Boolean(True).dict_key()


def test_type_tags():
    assert Integer(1).type is ObjectType.INTEGER
    assert CompiledFunction().type.value == "COMPILED_FUNCTION_OBJ"
    assert str(String("x").type) == "STRING"


def test_scalar_inspect():
    assert Integer(-5).inspect() == "-5"
    assert Boolean(True).inspect() == "true"
    assert Boolean(False).inspect() == "false"
    assert Null().inspect() == "null"
    assert String("hello world").inspect() == "hello world"
    assert Error("boom").inspect() == "ERROR: boom"
    assert ReturnValue(Integer(99)).inspect() == "99"


@pytest.mark.parametrize(
    "value, text",
    [(146.56, "146.56"), (2.0, "2"), (1e21, "1000000000000000000000"), (0.5, "0.5")],
)
def test_float_inspect(value, text):
    assert Float(value).inspect() == text


def test_float_inspect_special_values():
    assert Float(float("inf")).inspect() == "+Inf"
    assert Float(float("-inf")).inspect() == "-Inf"
    assert Float(float("nan")).inspect() == "NaN"


def test_array_inspect():
    arr = Array([Integer(1), String("a"), Boolean(True)])
    assert arr.inspect() == "[1, a, true]"
    assert Array().inspect() == "[]"


def test_dict_inspect_and_lookup():
    key = String("a")
    d = Dict({key.dict_key(): DictPair(key, Integer(1))})
    assert d.inspect() == "{a:1}"
    assert d.pairs[String("a").dict_key()].value == Integer(1)
    assert Dict().inspect() == "{}"


def test_function_inspect():
    fn = Function(parameters=["x", "y"], body="x + y", env=Environment())
    assert fn.inspect() == "fct(x, y) {\nx + y\n}"


def test_builtin_calls_its_function():
    b = Builtin(lambda *args: Integer(len(args)))
    assert b.inspect() == "builtin function"
    assert b.fn(Integer(1), Integer(2)) == Integer(2)


def test_closure_and_compiled_function_inspect():
    fn = CompiledFunction(b"\x00", num_locals=1, num_parameters=1)
    cl = Closure(fn, [Integer(1)])
    assert fn.inspect().startswith("CompiledFunction[")
    assert cl.inspect().startswith("Closure[")
    assert cl.inspect() != Closure(fn).inspect()


def test_date_parts_and_inspect():
    d = Date(datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc))
    assert (d.year, d.month, d.day) == (2024, 5, 6)
    assert (d.hour, d.minute, d.second) == (7, 8, 9)
    assert d.inspect() == "2024-05-06 07:08:09 +0000 UTC"


def test_date_inspect_keeps_fraction():
    d = Date(datetime(2024, 5, 6, 7, 8, 9, 500000, tzinfo=timezone.utc))
    assert d.inspect() == "2024-05-06 07:08:09.5 +0000 UTC"


def test_record_inspect_is_sorted():
    r = Record({"b": 2, "a": "x", "c": True})
    assert r.inspect() == "map[a:x b:2 c:true]"


def test_environment_set_and_get():
    env = Environment()
    value = Integer(5)
    assert env.set("x", value) is value
    assert env.get("x") == Integer(5)
    assert env.get("missing") is None


def test_enclosed_environment_falls_back_and_shadows():
    outer = Environment()
    outer.set("x", Integer(1))
    outer.set("y", Integer(2))
    inner = new_enclosed_environment(outer)
    inner.set("x", Integer(10))
    assert inner.get("x") == Integer(10)
    assert inner.get("y") == Integer(2)
    assert outer.get("x") == Integer(1)
    assert inner.outer is outer


def test_imported_files():
    env = Environment()
    assert not env.is_imported("utils.zum")
    env.mark_imported("utils.zum")
    assert env.is_imported("utils.zum")
    assert not new_enclosed_environment(env).is_imported("utils.zum")


def test_is_hashable():
    assert is_hashable(Integer(1))
    assert is_hashable(String("a"))
    assert is_hashable(Boolean(False))
    assert not is_hashable(Float(1.0))
    assert not is_hashable(Array())
    assert not is_hashable(Null())


def test_new_error():
    err = new_error("wrong number of arguments. got=2, want=1")
    assert isinstance(err, Error)
    assert err.message == "wrong number of arguments. got=2, want=1"