"""Built-in functions touching the host: clock, .env files, stdin, hashing, files."""

from __future__ import annotations

import hashlib
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from zumbra.objects import Date, Dict, Object, String, new_error

env_vars: dict[str, str] = {}
"""Variables loaded by ``load_env``, shared by every script run in the process."""


def _os_error_text(operation: str, path: str, exc: OSError) -> str:
    reason = exc.strerror or str(exc)
    return f"{operation} {path}: {reason[:1].lower()}{reason[1:]}"


def date(*args: Object) -> Optional[Object]:
    """Return the current local date and time."""
    if args:
        return new_error(f"date() does not take arguments, got={len(args)}")
    return Date(datetime.now().astimezone())


def load_env(*args: Object) -> Optional[Object]:
    """Read KEY=VALUE lines from a file into the shared variable table.

    Blank lines and lines starting with '#' are skipped. A file that cannot
    be opened is reported on stdout and otherwise ignored.
    """
    if len(args) != 1:
        return new_error(f"wrong number of arguments. got={len(args)}, want=1")
    path = args[0]
    if not isinstance(path, String):
        return new_error(f"argument to `env` must be STRING, got {path.type}")

    try:
        with open(path.value, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except IsADirectoryError as exc:
        return new_error(f"failed to read file: {_os_error_text('read', path.value, exc)}")
    except OSError as exc:
        print(f"failed to open file: {_os_error_text('open', path.value, exc)}")
        return None

    for line in text.split("\n"):
        line = line.removesuffix("\r")
        if not line.strip() or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if sep:
            env_vars[key.strip()] = value.strip()
    return None


def get_env(*args: Object) -> Optional[Object]:
    """Return a loaded variable as a string, or None when it is unknown."""
    if len(args) != 1:
        return new_error(f"wrong number of arguments. got={len(args)}, want=1")
    key = args[0]
    if not isinstance(key, String):
        return new_error(f"argument to `getEnv` must be STRING, got {key.type}")
    value = env_vars.get(key.value)
    return String(value) if value is not None else None


def read_input(*args: Object) -> Optional[Object]:
    """Read one word from standard input; with an argument, return its text instead."""
    if args:
        return String(args[0].inspect())
    words = sys.stdin.readline().split()
    return String(words[0] if words else "")


def hash_code(*args: Object) -> Optional[Object]:
    """Return the SHA-256 digest of a string, one character per digest byte."""
    if len(args) != 1:
        return new_error(f"wrong number of arguments. got={len(args)}, want=1")
    text = args[0]
    if not isinstance(text, String):
        return new_error(f"argument to `hashCode` must be STRING, got {text.type}")
    digest = hashlib.sha256(text.value.encode("utf-8", errors="surrogatepass")).digest()
    return String(digest.decode("latin-1"))


def serve_file(*args: Object) -> Optional[Object]:
    """Return a file's content, filling {{key}} placeholders from an optional dict."""
    if len(args) not in (1, 2):
        return new_error("serveFile expects 1 or 2 arguments")
    path_obj = args[0]
    if not isinstance(path_obj, String):
        return new_error(f"first argument to serveFile must be STRING, got={path_obj.type}")

    path = os.path.normpath(path_obj.value) if path_obj.value else "."
    try:
        content = Path(path).read_bytes()
    except IsADirectoryError as exc:
        return new_error(f"failed to read file: {_os_error_text('read', path, exc)}")
    except OSError as exc:
        return new_error(f"failed to read file: {_os_error_text('open', path, exc)}")

    page = content.decode("utf-8", errors="replace")
    if len(args) == 1:
        return String(page)

    values = args[1]
    if not isinstance(values, Dict):
        return new_error(f"second argument to serveFile must be DICT, got={values.type}")

    for pair in values.pairs.values():
        if isinstance(pair.key, String) and isinstance(pair.value, String):
            page = page.replace("{{" + pair.key.value + "}}", pair.value.value)
    return String(page)