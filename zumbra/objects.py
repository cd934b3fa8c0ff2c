"""Runtime values of the Zumbra language and the variable environment."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional

_MASK64 = (1 << 64) - 1
_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3


class ObjectType(str, Enum):
    """Type tags of runtime values."""

    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"
    FUNCTION = "FUNCTION"
    STRING = "STRING"
    BUILTIN = "BUILTIN"
    ARRAY = "ARRAY"
    DICT = "DICT"
    COMPILED_FUNCTION = "COMPILED_FUNCTION_OBJ"
    CLOSURE = "CLOSURE_OBJ"
    FLOAT = "FLOAT"
    DATE = "DATE"
    RECORD = "RECORD"
    ENV = "ENV"

    def __str__(self) -> str:
        return self.value


class Object(ABC):
    """Base of every runtime value."""

    type: ObjectType

    @abstractmethod
    def inspect(self) -> str:
        """Return the text shown for this value."""

    def __str__(self) -> str:
        return self.inspect()


@dataclass(frozen=True)
class DictKey:
    """Key under which a hashable value is stored in a Dict."""

    type: ObjectType
    value: int


def _fnv1a64(data: bytes) -> int:
    digest = _FNV64_OFFSET
    for byte in data:
        digest ^= byte
        digest = (digest * _FNV64_PRIME) & _MASK64
    return digest


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _format_time(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = moment.strftime("%Y-%m-%d %H:%M:%S")
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.strftime("%z")
    zone = moment.tzname() or offset
    return f"{text} {offset} {zone}"


def _format_native(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "<nil>"
    return str(value)


@dataclass(frozen=True)
class Integer(Object):
    value: int
    type = ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)

    def dict_key(self) -> DictKey:
        return DictKey(self.type, self.value & _MASK64)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool
    type = ObjectType.BOOLEAN

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def dict_key(self) -> DictKey:
        return DictKey(self.type, 1 if self.value else 0)


@dataclass(frozen=True)
class Null(Object):
    type = ObjectType.NULL

    def inspect(self) -> str:
        return "null"


@dataclass
class ReturnValue(Object):
    value: Object
    type = ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class Error(Object):
    message: str
    type = ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


@dataclass
class Function(Object):
    """A function value closing over the environment it was defined in."""

    parameters: list[Any]
    body: Any
    env: Environment
    type = ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fct({params}) {{\n{self.body}\n}}"


@dataclass(frozen=True)
class String(Object):
    value: str
    type = ObjectType.STRING

    def inspect(self) -> str:
        return self.value

    def dict_key(self) -> DictKey:
        return DictKey(self.type, _fnv1a64(self.value.encode("utf-8")))


@dataclass
class Builtin(Object):
    """A function provided by the interpreter itself."""

    fn: Callable[..., Optional[Object]]
    type = ObjectType.BUILTIN

    def inspect(self) -> str:
        return "builtin function"


@dataclass
class Array(Object):
    elements: list[Object] = field(default_factory=list)
    type = ObjectType.ARRAY

    def inspect(self) -> str:
        return "[" + ", ".join(el.inspect() for el in self.elements) + "]"


@dataclass
class DictPair:
    key: Object
    value: Object


@dataclass
class Dict(Object):
    pairs: dict[DictKey, DictPair] = field(default_factory=dict)
    type = ObjectType.DICT

    def inspect(self) -> str:
        items = (f"{p.key.inspect()}:{p.value.inspect()}" for p in self.pairs.values())
        return "{" + ", ".join(items) + "}"


@dataclass(eq=False)
class CompiledFunction(Object):
    instructions: bytes = b""
    num_locals: int = 0
    num_parameters: int = 0
    type = ObjectType.COMPILED_FUNCTION

    def inspect(self) -> str:
        return f"CompiledFunction[{id(self):#x}]"


@dataclass(eq=False)
class Closure(Object):
    fn: CompiledFunction
    free: list[Object] = field(default_factory=list)
    type = ObjectType.CLOSURE

    def inspect(self) -> str:
        return f"Closure[{id(self):#x}]"


@dataclass(frozen=True)
class Float(Object):
    value: float
    type = ObjectType.FLOAT

    def inspect(self) -> str:
        return _format_float(self.value)


@dataclass(frozen=True)
class Date(Object):
    """A point in time with its calendar and clock parts exposed."""

    full_date: datetime
    type = ObjectType.DATE

    @property
    def hour(self) -> int:
        return self.full_date.hour

    @property
    def minute(self) -> int:
        return self.full_date.minute

    @property
    def second(self) -> int:
        return self.full_date.second

    @property
    def day(self) -> int:
        return self.full_date.day

    @property
    def month(self) -> int:
        return self.full_date.month

    @property
    def year(self) -> int:
        return self.full_date.year

    def inspect(self) -> str:
        return _format_time(self.full_date)


@dataclass
class Record(Object):
    fields: dict[str, Any] = field(default_factory=dict)
    type = ObjectType.RECORD

    def inspect(self) -> str:
        items = (f"{k}:{_format_native(self.fields[k])}" for k in sorted(self.fields))
        return "map[" + " ".join(items) + "]"


@dataclass
class Environment:
    """Name bindings, with lookup falling back to an enclosing environment."""

    store: dict[str, Object] = field(default_factory=dict)
    outer: Optional[Environment] = None
    imported_files: set[str] = field(default_factory=set)

    def get(self, name: str) -> Optional[Object]:
        """Return the value bound to ``name`` here or in an outer scope, or None."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value

    def is_imported(self, path: str) -> bool:
        return path in self.imported_files

    def mark_imported(self, path: str) -> None:
        self.imported_files.add(path)


def new_enclosed_environment(outer: Environment) -> Environment:
    """Create an empty environment whose lookups fall back to ``outer``."""
    return Environment(outer=outer)


def is_hashable(obj: Object) -> bool:
    """Whether ``obj`` can be used as a Dict key."""
    return isinstance(obj, (Integer, Boolean, String))


def new_error(message: str) -> Error:
    return Error(message)