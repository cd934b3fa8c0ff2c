import pytest

from zumbra.transpiler import runtime_source, split_args, transpile


def body_lines(program):
    return program.split("func main() {\n", 1)[1].splitlines()


@pytest.mark.parametrize(
    "name",
    [
        "addToArrayStart",
        "addToArrayEnd",
        "removeFromArray",
        "max",
        "min",
        "first",
        "last",
        "allButFirst",
        "indexOf",
        "organize",
        "sum",
        "date",
        "addToDict",
        "deleteFromDict",
        "getFromDict",
        "dictKeys",
        "dictValues",
    ],
)
def test_runtime_defines_helpers(name):
    assert f"func {name}(" in runtime_source()


def test_program_wraps_runtime_and_imports():
    out = transpile("")
    assert out.startswith("package main")
    assert runtime_source() in out
    for pkg in ('"sort"', '"fmt"', '"time"'):
        assert pkg in out
    assert "func main() {" in out


def test_show_without_arguments():
    assert "    fmt.Println()" in body_lines(transpile("show()"))


def test_show_single_argument():
    out = transpile('show("hello");')
    assert '    fmt.Println("hello")' in body_lines(out)


def test_show_with_format():
    out = transpile('show("{} and {}", a, b)')
    assert '    fmt.Printf("%v and %v\\n", a, b)' in body_lines(out)


def test_show_with_too_few_values_prints_pattern():
    lines = body_lines(transpile('show("{} and {}", a)'))
    assert '    fmt.Println("{} and {}")' in lines
    assert not any("Printf" in line for line in lines)


def test_array_declaration():
    lines = body_lines(transpile("var xs << [1, 2, 3];"))
    assert "    var xs = []interface{}{1, 2, 3}" in lines


def test_dict_declaration():
    lines = body_lines(transpile('var d << {"a": 1};'))
    assert any(line.startswith("    var d = map[string]interface{}{") for line in lines)
    assert any('"a": 1' in line for line in lines)


def test_plain_declaration_and_assignment():
    lines = body_lines(transpile("var x << 1;\nx << x + 1;"))
    assert "    var x = 1" in lines
    assert "x = x + 1" in lines
    assert not any("<<" in line for line in lines)


def test_comments_are_removed():
    lines = body_lines(transpile("var x << 1 // note"))
    assert "    var x = 1" in lines
    assert not any("note" in line for line in lines)


def test_if_else_and_while_blocks():
    source = "\n".join(
        [
            "if (x < 3){",
            "show(x)",
            "} else {",
            "show(y)",
            "}",
            "while (x < 3) {",
            "x << x + 1",
            "}",
        ]
    )
    lines = body_lines(transpile(source))
    if_at = lines.index("    if x < 3 {")
    else_at = lines.index("    } else {")
    for_at = lines.index("for x < 3 {")
    assert if_at < else_at < for_at
    assert lines.count("    }") >= 2


def test_else_without_if_is_dropped():
    lines = body_lines(transpile("} else {"))
    assert not any("else" in line for line in lines)


def test_function_gets_implicit_return():
    source = "var add << fct(a, b){\na + b\n}"
    lines = body_lines(transpile(source))
    assert "var add = func(a int,  b int) int { return a + b }" in lines


def test_function_keeps_explicit_return():
    source = "var mul << fct(a, b){\nvar c << a * b;\nreturn c;\n}"
    lines = body_lines(transpile(source))
    rendered = [line for line in lines if line.startswith("var mul = func(")]
    assert len(rendered) == 1
    assert rendered[0].endswith("return c }")
    assert "return return" not in rendered[0]


def test_function_with_empty_body_is_rejected():
    with pytest.raises(ValueError):
        transpile("var f << fct(a, b){\n}")


def test_function_with_one_parameter_is_rejected():
    with pytest.raises(ValueError):
        transpile("var f << fct(a){\na\n}")


def test_function_without_parameter_list_is_rejected():
    with pytest.raises(ValueError):
        transpile("var f << fct")


def test_add_to_array_reassigns_target():
    lines = body_lines(transpile("addToArrayEnd(xs, 4);"))
    assert "    xs = addToArrayEnd(xs, 4)" in lines


def test_other_calls_pass_through():
    lines = body_lines(transpile("sum(xs)"))
    assert "    sum(xs)" in lines


def test_unrecognised_lines_are_dropped():
    lines = body_lines(transpile("foobar"))
    assert not any("foobar" in line for line in lines)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", []),
        ("a, b", ["a", "b"]),
        ('"a, b", c', ['"a, b"', "c"]),
        ("f(a, b), c", ["f(a, b)", "c"]),
        ("a, ", ["a", ""]),
    ],
)
def test_split_args(text, expected):
    assert split_args(text) == expected


def test_split_args_rejoins_to_input_without_spaces():
    text = 'x,"y,z",g(1,2)'
    assert ",".join(split_args(text)) == text