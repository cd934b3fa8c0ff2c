"""Line-oriented translation of Zumbra scripts into a standalone compiled program."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

_SLICE = "[]interface{}"
_ANY = "interface{}"
_MAP = "map[string]interface{}"

_LIST_HELPERS = """
func addToArrayStart(arr ARR, elem ANY) ARR { return append(ARR{elem}, arr...) }

func addToArrayEnd(arr ARR, elem ANY) ARR { return append(arr, elem) }

func removeFromArray(arr ARR, index int) ARR {
    if index < 0 || index >= len(arr) { return arr }
    return append(arr[:index], arr[index+1:]...)
}
"""

_EXTREMUM = """
func NAME(arr ARR) ANY {
    if len(arr) == 0 { return nil }
    best := arr[0].(int)
    for _, v := range arr[1:] {
        if n := v.(int); n OP best { best = n }
    }
    return best
}
"""

_END = """
func NAME(arr ARR) ANY {
    if len(arr) == 0 { return nil }
    return arr[POS]
}
"""

_SEQUENCE_HELPERS = """
func allButFirst(arr ARR) ARR {
    if len(arr) == 0 { return arr }
    return arr[1:]
}

func indexOf(arr ARR, elem ANY) int {
    for i, v := range arr {
        if v == elem { return i }
    }
    return -1
}

func organize(arr ARR, order string) ARR {
    nums := make([]int, len(arr))
    for i, v := range arr { nums[i] = v.(int) }
    if order == "desc" {
        sort.Sort(sort.Reverse(sort.IntSlice(nums)))
    } else {
        sort.Ints(nums)
    }
    out := make(ARR, len(nums))
    for i, n := range nums { out[i] = n }
    return out
}

func sum(arr ARR) ANY {
    total := 0.0
    for _, v := range arr {
        switch n := v.(type) {
        case int:
            total += float64(n)
        case float64:
            total += n
        }
    }
    if float64(int(total)) == total { return int(total) }
    return total
}
"""

_DATE_HELPERS = """
type ZumbraDate struct {
    fullDate time.Time
    hour, minute, second, day, month, year int
}

func date() ZumbraDate {
    t := time.Now()
    return ZumbraDate{fullDate: t, hour: t.Hour(), minute: t.Minute(), second: t.Second(),
        day: t.Day(), month: int(t.Month()), year: t.Year()}
}
"""

_DICT_HELPERS = """
func addToDict(dict DICT, key string, value ANY) DICT { dict[key] = value; return dict }

func deleteFromDict(dict DICT, key string) DICT { delete(dict, key); return dict }

func getFromDict(dict DICT, key string) ANY { return dict[key] }

func dictKeys(dict DICT) []string {
    keys := make([]string, 0, len(dict))
    for k := range dict { keys = append(keys, k) }
    return keys
}

func dictValues(dict DICT) ARR {
    values := make(ARR, 0, len(dict))
    for _, v := range dict { values = append(values, v) }
    return values
}
"""


def _build_runtime() -> str:
    parts = [
        _LIST_HELPERS,
        _EXTREMUM.replace("NAME", "max").replace("OP", ">"),
        _EXTREMUM.replace("NAME", "min").replace("OP", "<"),
        _END.replace("NAME", "first").replace("POS", "0"),
        _END.replace("NAME", "last").replace("POS", "len(arr)-1"),
        _SEQUENCE_HELPERS,
        _DATE_HELPERS,
        _DICT_HELPERS,
    ]
    text = "".join(parts)
    text = text.replace("DICT", _MAP).replace("ARR", _SLICE).replace("ANY", _ANY)
    return text + "\n"


_RUNTIME = _build_runtime()


def runtime_source() -> str:
    """Return the helper definitions every translated program is given."""
    return _RUNTIME


@dataclass
class _FunctionDraft:
    name: str
    params: str
    lines: list[str] = field(default_factory=list)

    def render(self) -> str:
        if not self.lines:
            raise ValueError(f"function {self.name!r} has an empty body")
        params = self.params.split(",")
        if len(params) < 2:
            raise ValueError(f"function {self.name!r} must take two parameters")
        *head, last = self.lines
        last = last.strip().removesuffix(";")
        if not last.startswith("return"):
            last = "return " + last
        body = " ".join([*head, last])
        return f"var {self.name} = func({params[0]} int, {params[1]} int) int {{ {body} }}"


def _clean(line: str) -> str:
    cut = line.find("//")
    if cut != -1:
        line = line[:cut]
    return line.strip().removesuffix(";").strip()


def _start_function(line: str) -> _FunctionDraft:
    parts = line.removeprefix("var ").split("<<")
    if len(parts) < 2:
        raise ValueError(f"malformed function declaration: {line!r}")
    name = parts[0].strip()
    definition = parts[1].strip()
    start = definition.find("(")
    end = definition.find("){")
    if end < start + 1:
        raise ValueError(f"malformed function parameters: {line!r}")
    return _FunctionDraft(name, definition[start + 1 : end])


def _split_assignment(line: str) -> tuple[str, str]:
    parts = line.split("=", 1)
    if len(parts) < 2:
        raise ValueError(f"malformed declaration: {line!r}")
    return parts[0].strip(), parts[1].strip()


def _translate_show(line: str) -> str:
    args = split_args(line.removeprefix("show(").removesuffix(")"))
    if not args:
        return "    fmt.Println()"
    if len(args) == 1:
        return f"    fmt.Println({args[0].strip()})"

    pattern = args[0]
    if pattern.startswith('"') and pattern.endswith('"'):
        if len(pattern) < 2:
            raise ValueError(f"malformed format string: {line!r}")
        pattern = pattern[1:-1]

    placeholders = pattern.count("{}")
    if placeholders and len(args) - 1 < placeholders:
        return f'    fmt.Println("{pattern}")'

    verb_pattern = pattern.replace("{}", "%v")
    values = ", ".join(args[1:])
    return f'    fmt.Printf("{verb_pattern}\\n", {values})'


def _translate_var(line: str) -> str:
    line = line.replace("<<", "=")
    if "[" in line and "]" in line:
        name, value = _split_assignment(line)
        elements = value.removeprefix("[").removesuffix("]").strip()
        return f"    {name} = {_SLICE}{{{elements}}}"
    if "{" in line and "}" in line:
        name, value = _split_assignment(line)
        return "    " + name + " = " + value.replace("{", _MAP + "{")
    return "    " + line


def _translate_call(line: str) -> str:
    if line.startswith(("addToArrayStart", "addToArrayEnd")):
        func_name, rest = line.split("(", 1)
        if not rest:
            raise ValueError(f"malformed call: {line!r}")
        args = rest[:-1]
        target = args.split(",")[0].strip()
        return f"    {target} = {func_name}({args})"
    return "    " + line


def _translate_line(line: str, blocks: list[str]) -> Optional[str]:
    if line.startswith("if ("):
        condition = line.removeprefix("if (").removesuffix("){").strip()
        blocks.append("if")
        return f"    if {condition} {{"
    if "else" in line:
        if blocks and blocks[-1] == "if":
            blocks[-1] = "if-else"
            return "    } else {"
        return None
    if line.startswith("while ("):
        condition = line.removeprefix("while (").removesuffix(") {").strip()
        blocks.append("while")
        return f"for {condition} {{"
    if line == "}":
        if blocks:
            blocks.pop()
        return "    }"
    if line.startswith("show("):
        return _translate_show(line)
    if line.startswith("var "):
        return _translate_var(line)
    if "<<" in line:
        return line.replace("<<", "=")
    if "(" in line and ")" in line:
        return _translate_call(line)
    return None


def transpile(source: str) -> str:
    """Translate a Zumbra script into the text of a complete program.

    Raises ValueError for declarations and calls too malformed to translate.
    """
    body: list[str] = []
    blocks: list[str] = []
    draft: Optional[_FunctionDraft] = None

    for raw in source.split("\n"):
        line = _clean(raw)

        if line.startswith("var ") and "fct" in line:
            draft = _start_function(line)
            continue

        if draft is not None:
            if line == "}":
                body.append(draft.render())
                draft = None
            else:
                draft.lines.append(line.strip())
            continue

        translated = _translate_line(line, blocks)
        if translated is not None:
            body.append(translated)

    imports = "\n".join(f'\t"{name}"' for name in ("sort", "fmt", "time"))
    statements = "\n".join(body)
    return (
        "package main\n\n"
        f"import (\n{imports}\n)\n"
        f"{runtime_source()}\n"
        "func main() {\n"
        f"{statements}\n"
        "}\n"
    )


def split_args(text: str) -> list[str]:
    """Split a call's argument text on top-level commas outside string literals."""
    args: list[str] = []
    current: list[str] = []
    in_string = False
    depth = 0

    for ch in text:
        if ch == '"':
            in_string = not in_string
        if not in_string:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
        if ch == "," and not in_string and depth == 0:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    if current:
        args.append("".join(current).strip())
    return args