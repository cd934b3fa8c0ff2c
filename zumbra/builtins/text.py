"""Built-in functions for strings, printing and sizes."""

from __future__ import annotations

import json
import re
from typing import Optional

from zumbra.objects import Array, Object, String, new_error

_VERB = re.compile(r"%(.?)", re.DOTALL)


def _wrong_count(got: int, want: int) -> Object:
    return new_error(f"wrong number of arguments. got={got}, want={want}")


def _string_arg(args: tuple[Object, ...], name: str) -> Object:
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    if not isinstance(args[0], String):
        return new_error(f"argument to `{name}` must be STRING, got {args[0].type}")
    return args[0]


def _is_separator(ch: str) -> bool:
    if ch <= "\x7f":
        return not (ch.isalnum() or ch == "_")
    if ch.isalpha() or ch.isdigit():
        return False
    return ch.isspace()


def _title(text: str) -> str:
    out = []
    previous = " "
    for ch in text:
        if _is_separator(previous):
            upper = ch.upper()
            out.append(upper if len(upper) == 1 else ch)
        else:
            out.append(ch)
        previous = ch
    return "".join(out)


def _printf(pattern: str, values: list[str]) -> str:
    pending = iter(values)
    used = 0

    def substitute(match: re.Match) -> str:
        nonlocal used
        verb = match.group(1)
        if verb == "%":
            return "%"
        if verb == "":
            return "%!(NOVERB)"
        value = next(pending, None)
        if value is None:
            return f"%!{verb}(MISSING)"
        used += 1
        if verb in ("v", "s"):
            return value
        if verb == "q":
            return json.dumps(value, ensure_ascii=False)
        return f"%!{verb}(string={value})"

    text = _VERB.sub(substitute, pattern)
    extra = values[used:]
    if extra:
        text += "%!(EXTRA " + ", ".join(f"string={v}" for v in extra) + ")"
    return text


def to_uppercase(*args: Object) -> Optional[Object]:
    checked = _string_arg(args, "toUppercase")
    if not isinstance(checked, String):
        return checked
    return String(checked.value.upper())


def to_lowercase(*args: Object) -> Optional[Object]:
    checked = _string_arg(args, "toLowercase")
    if not isinstance(checked, String):
        return checked
    return String(checked.value.lower())


def capitalize(*args: Object) -> Optional[Object]:
    """Upper-case the first letter of every word, leaving the rest alone."""
    checked = _string_arg(args, "capitalize")
    if not isinstance(checked, String):
        return checked
    return String(_title(checked.value))


def remove_white_spaces(*args: Object) -> Optional[Object]:
    """Drop every space character, printing the text before and after."""
    checked = _string_arg(args, "removeWhiteSpaces")
    if not isinstance(checked, String):
        return checked
    print(checked.value)
    result = checked.value.replace(" ", "")
    print(result)
    return String(result)


def replace(*args: Object) -> Optional[Object]:
    """Replace every occurrence of one string with another."""
    if len(args) != 3:
        return _wrong_count(len(args), 3)
    for arg in args:
        if not isinstance(arg, String):
            return new_error(f"argument to `replace` must be STRING, got {arg.type}")
    text, old, new = (arg.value for arg in args)
    return String(text.replace(old, new))


def show(*args: Object) -> Optional[Object]:
    """Print values; with several, the first is a pattern whose {} are filled in."""
    if not args:
        print()
        return None
    if len(args) == 1:
        print(args[0].inspect())
        return None
    pattern = args[0]
    if not isinstance(pattern, String):
        return new_error(f"First argument to `show` must be STRING, got {pattern.type}")
    values = [arg.inspect() for arg in args[1:]]
    print(_printf(pattern.value.replace("{}", "%v") + "\n", values), end="")
    return None


def size_of(*args: Object) -> Optional[Object]:
    """Return the length of an array, or of a string in bytes."""
    from zumbra.objects import Integer

    if len(args) != 1:
        return _wrong_count(len(args), 1)
    arg = args[0]
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    if isinstance(arg, String):
        return Integer(len(arg.value.encode("utf-8")))
    return new_error(f"argument to `sizeOf` not supported, got {arg.type}")