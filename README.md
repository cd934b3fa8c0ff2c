# zumbra

Runtime pieces of the Zumbra scripting language as a Python library:

- **`zumbra.token`**: the token kinds of the language (`TokenType`, `Token`) and
  `lookup_ident`, which tells keywords such as `fct`, `var`, `while`, `import`,
  `and` and `or` apart from plain identifiers.
- **`zumbra.objects`**: the run-time value model. It covers `Integer`, `Float`,
  `String`, `Boolean`, `Null`, `Array`, `Dict`, `Date`, `Function`,
  `CompiledFunction`, `Closure`, `Builtin`, `Error`, `ReturnValue` and `Record`.
  Each has an `inspect()` method that gives its printed form. The module also
  has the scoped `Environment`.
- **`zumbra.builtins`**: the standard library that Zumbra programs call. It
  covers arrays, dictionaries, type conversions, text, numbers, dates, `.env`
  files, HTTP routes and requests, JSON Web Tokens, e-mail and MySQL.
- **`zumbra.transpiler`**: a line-oriented translator. It turns a Zumbra script
  into the source text of a standalone compiled program, with a set of helper
  functions placed before it.

## What this package does not do

It does not read or run Zumbra programs by itself. There is no lexer, parser,
bytecode compiler, virtual machine or interactive prompt, and there is no
command to start. The package holds:

- the tokens and values such a runtime works with;
- the builtin functions it would call;
- the script translator.

## Values

Every value a Zumbra program handles is an object from `zumbra.objects`.

Integers, booleans and strings can be used as dictionary keys. Equal values
always give equal keys. String keys are FNV-1a 64-bit hashes of the UTF-8 text.

```python
from zumbra.objects import Array, Integer, String, is_hashable

String("Hello World").dict_key() == String("Hello World").dict_key()   # True
is_hashable(Integer(7))                                                # True

Array([Integer(1), Integer(2), Integer(3)]).inspect()                  # "[1, 2, 3]"
```

Environments nest. A name that is not found in an inner scope is looked up in
the enclosing one. `get` returns `None` for an unknown name.

```python
from zumbra.objects import Environment, Integer, new_enclosed_environment

outer = Environment()
outer.set("answer", Integer(42))
inner = new_enclosed_environment(outer)
inner.get("answer").inspect()     # "42"
inner.get("missing")              # None
```

An environment also keeps track of imported files through `mark_imported` and
`is_imported`.

## Keywords

```python
from zumbra.token import TokenType, lookup_ident

lookup_ident("fct") is TokenType.FUNCTION
lookup_ident("total") is TokenType.IDENT
```

## Builtins

### Calling builtins

Builtins take Zumbra objects as positional arguments. They give back a Zumbra
object, or `None` where the language's result is null.

They do not raise on bad input. Instead they return an `Error` object whose
`message` says what was wrong, for example
`wrong number of arguments. got=2, want=1`.

You can call them directly, or look them up by the name a Zumbra program uses:

```python
from zumbra.objects import Array, Integer
from zumbra.builtins.arrays import sum_of
from zumbra.builtins.registry import builtin_names, get_builtin_by_name

numbers = Array([Integer(1), Integer(2), Integer(3)])
sum_of(numbers).inspect()                          # "6"

"sizeOf" in builtin_names()                        # True
get_builtin_by_name("sizeOf").fn(numbers).value    # 3
```

`builtin_names()` lists the names in table order. `BUILTINS` in
`zumbra.builtins.registry` holds the `BuiltinDefinition` entries themselves.

### Builtins by module

| Module | Builtin names |
| --- | --- |
| `zumbra.builtins.arrays` | `addToArrayStart`, `addToArrayEnd`, `removeFromArray`, `first`, `last`, `allButFirst`, `indexOf`, `max`, `min`, `organize`, `sum` |
| `zumbra.builtins.dicts` | `addToDict`, `deleteFromDict`, `getFromDict`, `dictKeys`, `dictValues` |
| `zumbra.builtins.conversions` | `toString`, `toInt`, `toFloat`, `toBool`, `jsonParse` |
| `zumbra.builtins.text` | `toUppercase`, `toLowercase`, `capitalize`, `removeWhiteSpaces`, `replace`, `show`, `sizeOf` |
| `zumbra.builtins.numbers` | `bhaskara`, `randomInteger`, `randomFloat` |
| `zumbra.builtins.system` | `date`, `dotenvLoad`, `dotenvGet`, `input`, `hashCode`, `serveFile` |
| `zumbra.builtins.web` | `server`, `get`, `registerRoute`, `html`, `serveStatic`, `jwtCreateToken`, `jwtVerifyToken` |
| `zumbra.builtins.mailer` | `sendEmail` |
| `zumbra.builtins.mysql` | `mysqlConnection`, `mysqlCreateTable`, `mysqlShowTables`, `mysqlShowTableColumns`, `mysqlDropTable`, `mysqlGetFromTable`, `mysqlInsertIntoTable`, `mysqlUpdateIntoTable`, `mysqlDeleteFromTable` |

### Notes on behaviour

Arrays, dictionaries and conversions:

- `addToArrayStart`, `addToArrayEnd`, `removeFromArray` and `organize` change
  the array they are given.
- `addToDict` and `deleteFromDict` change the dictionary they are given.
- `jsonParse` accepts a JSON object only. Numbers in it become integers.

Text:

- `show` prints its arguments. With more than one argument, the first is a
  pattern whose `{}` marks are filled in.
- `sizeOf` counts a string's UTF-8 bytes.

Numbers:

- `bhaskara(a, b, c)` solves `a*x^2 + b*x + c = 0`. It returns null when there
  is no real root, one float for a double root, and an array of two floats
  otherwise.

System:

- `dotenvLoad` reads `KEY=VALUE` lines into the table `zumbra.builtins.system.env_vars`,
  which is shared for the whole process. `dotenvGet` reads from that table.
- `serveFile` returns a file's text and fills `{{key}}` placeholders from an
  optional dictionary.

Web:

- `registerRoute(method, path, handler)` adds a route to
  `zumbra.builtins.web.registered_routes`. The handler is a string, or a
  builtin returning one, such as the result of `html(...)`.
- A path segment starting with `:` matches any segment.
- `use_middlewares(path, "logger")` adds request logging to the routes with
  that path. It is a Python function only; it is not in the builtin table.
- `serveStatic(prefix, directory)` serves files below a URL prefix.
- `server(port)` serves all of the above on that port and blocks until it
  stops.
- `get(url)` returns a dictionary with the response text under `"body"`.

Tokens:

- `jwtCreateToken(username, signing_text, hours)` signs an HS256 token.
- `jwtVerifyToken(token)` checks a token against the signing text used last
  and returns the username.

```python
from zumbra.objects import Integer, String
from zumbra.builtins.web import create_token, verify_token

signed = create_token(String("alice"), String("secret"), Integer(1))
verify_token(signed).value      # "alice"
```

E-mail:

- `sendEmail` takes a dictionary with `subject`, `body`, `sender`, `to` and
  `app_password`.
- It sends through `smtp.gmail.com` on port 587 with STARTTLS.
- It returns a string describing the outcome.

MySQL:

- `mysqlConnection(host, port, user, password, database)` opens one
  connection for the process. The other `mysql*` builtins work on that
  connection.
- Values in dictionaries are passed as query parameters.
- Selected rows come back as an array of dictionaries.

## Transpiling scripts

`transpile` reads a Zumbra script line by line. It returns the text of a
complete program: a `package main` with the helpers from `runtime_source()`
placed before its `main` function.

```python
from zumbra.transpiler import transpile

script = """
var total << 0;
while (total < 3) {
    total << total + 1;
}
show("total is {}", total);
"""
program_text = transpile(script)
```

Some lines are too malformed to translate, such as a function declaration
without a body or with fewer than two parameters. For those, `transpile`
raises `ValueError`.

`split_args` is the argument splitter used for `show(...)` calls. It splits on
commas that are outside string literals and parentheses:

```python
from zumbra.transpiler import split_args

split_args('"a, b", f(1, 2), x')    # ['"a, b"', 'f(1, 2)', 'x']
```

## Requirements

Python 3.10 or later. The token builtins use `pyjwt`; the MySQL builtins use
`pymysql`. Install with the `test` extra to run the tests with `pytest`.