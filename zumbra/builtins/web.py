"""Built-in HTTP server, HTTP client, routing and JSON Web Token functions."""

from __future__ import annotations

import html
import http.client
import logging
import mimetypes
import posixpath
import time
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import quote, unquote, urlsplit

import jwt

from zumbra.objects import Builtin, Dict, DictPair, Integer, Object, String, new_error

Middleware = Callable[[str, str], bool]
"""Called with the request method and path; returning False stops the request."""

_log = logging.getLogger(__name__)


@dataclass
class Route:
    """A registered handler for a method and a path pattern (':name' segments match anything)."""

    method: str
    path: str
    handler: Object
    middlewares: list[Middleware] = field(default_factory=list)


@dataclass(frozen=True)
class StaticRoute:
    """A URL prefix served from a directory on disk."""

    route_prefix: str
    static_dir: str


registered_routes: list[Route] = []
static_routes: list[StaticRoute] = []

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]
_HTML_SIGNATURES = (
    b"<!doctype html", b"<html", b"<head", b"<script", b"<iframe", b"<h1", b"<div",
    b"<font", b"<table", b"<a", b"<style", b"<title", b"<b", b"<body", b"<br",
    b"<p", b"<!--",
)


@dataclass
class _HmacState:
    current: str = ""


_hmac_state = _HmacState()


@dataclass
class _Response:
    status: int
    body: bytes = b""
    headers: list[tuple[str, str]] = field(default_factory=list)


def _wrong_count(got: int, want: int) -> Object:
    return new_error(f"wrong number of arguments. got={got}, want={want}")


def _content_type(body: bytes) -> str:
    head = body.lstrip(b"\t\n\x0c\r ").lower()
    for signature in _HTML_SIGNATURES:
        if head.startswith(signature) and head[len(signature):len(signature) + 1] in (b" ", b">"):
            return "text/html; charset=utf-8"
    if any(byte < 0x09 or 0x0E <= byte < 0x20 for byte in body[:512] if byte != 0x1B):
        return "application/octet-stream"
    return "text/plain; charset=utf-8"


def _text(status: int, text: str) -> _Response:
    body = text.encode("utf-8")
    headers = [("Content-Type", _content_type(body))] if body else []
    return _Response(status, body, headers)


def _not_found() -> _Response:
    return _Response(404, b"404 page not found\n", [("Content-Type", "text/plain; charset=utf-8")])


def _plain_error(status: int, text: str) -> _Response:
    return _Response(status, text.encode("utf-8"), [("Content-Type", "text/plain; charset=utf-8")])


def _redirect(location: str) -> _Response:
    return _Response(301, b"", [("Location", location)])


def _listing(directory: Path) -> _Response:
    lines = ["<!doctype html>", '<meta name="viewport" content="width=device-width">', "<pre>"]
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        name = entry.name + ("/" if entry.is_dir() else "")
        lines.append(f'<a href="{quote(name)}">{html.escape(name)}</a>')
    lines.append("</pre>")
    body = ("\n".join(lines) + "\n").encode("utf-8")
    return _Response(200, body, [("Content-Type", "text/html; charset=utf-8")])


def _serve_static_file(root: str, request_path: str, relative: str) -> _Response:
    clean = posixpath.normpath("/" + relative)
    target = Path(root).joinpath(*(part for part in clean.split("/") if part))
    try:
        if target.is_dir():
            if not request_path.endswith("/"):
                return _redirect(posixpath.basename(request_path) + "/")
            index = target / "index.html"
            if not index.is_file():
                return _listing(target)
            target = index
        body = target.read_bytes()
    except FileNotFoundError:
        return _not_found()
    except PermissionError:
        return _plain_error(403, "403 Forbidden\n")
    except OSError:
        return _plain_error(500, "500 Internal Server Error\n")
    content_type = mimetypes.guess_type(target.name)[0] or _content_type(body)
    return _Response(200, body, [("Content-Type", content_type)])


def _match_static(path: str) -> Optional[_Response]:
    for route in sorted(static_routes, key=lambda r: len(r.route_prefix), reverse=True):
        prefix = route.route_prefix
        if path.startswith(prefix + "/"):
            return _serve_static_file(route.static_dir, path, path[len(prefix):])
        if prefix and path == prefix:
            return _redirect(prefix + "/")
    return None


def _render_handler(handler: Object) -> str:
    if isinstance(handler, String):
        return handler.value
    if isinstance(handler, Builtin):
        result = handler.fn()
        if isinstance(result, String):
            return result.value
        return "function did not return string"
    return "unsupported handler type"


def _respond(method: str, path: str) -> _Response:
    static = _match_static(path)
    if static is not None:
        return static
    route = match_route(method, path)
    if route is None:
        return _not_found()
    for middleware in route.middlewares:
        if not middleware(method, path):
            return _Response(200)
    return _text(200, _render_handler(route.handler))


class _RequestHandler(BaseHTTPRequestHandler):
    def _handle(self) -> None:
        path = unquote(urlsplit(self.path).path)
        response = _respond(self.command, path)
        self.send_response(response.status)
        for name, value in response.headers:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(response.body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(response.body)

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_HEAD = do_OPTIONS = _handle

    def log_message(self, format: str, *args: object) -> None:
        _log.debug("%s - " + format, self.address_string(), *args)


def _bind_failure_text(port: str, exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        reason = exc.strerror
        return f"listen tcp :{port}: bind: {reason[:1].lower()}{reason[1:]}"
    return f"listen tcp :{port}: {exc}"


def create_server(*args: Object) -> Optional[Object]:
    """Serve the registered routes and static directories on a port until stopped."""
    if len(args) != 1:
        return _wrong_count(len(args), 4)
    port = args[0]
    if not isinstance(port, Integer):
        return new_error(f"argument to `server` must be INTEGER, got {port.type}")

    port_text = str(port.value)
    try:
        server = ThreadingHTTPServer(("", port.value), _RequestHandler)
    except (OSError, OverflowError) as exc:
        reason = _bind_failure_text(port_text, exc)
        print(f"Failed to bind to port {port_text}. got {reason}")
        return new_error(f"Failed to bind to port {port_text}. got {reason}")

    server.daemon_threads = True
    print(f"Zumbra server started on port {port_text}", flush=True)
    try:
        server.serve_forever()
    except Exception as exc:
        print(f"Server stopped unexpectedly. got {exc}")
        return new_error(f"Server stopped unexpectedly. got {exc}")
    finally:
        server.server_close()
    return None


def http_get(*args: Object) -> Optional[Object]:
    """Fetch a URL and return a dict holding the response body under "body"."""
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    target = args[0]
    if not isinstance(target, String):
        return new_error(f"argument to `get` must be STRING, got {target.type}")
    url = target.value

    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as exc:
        response = exc
    except (urllib.error.URLError, http.client.HTTPException, ValueError, OSError) as exc:
        return new_error(f"Failed to get, get('{url}'). got {exc}")

    try:
        with response:
            body = response.read()
    except (OSError, http.client.HTTPException) as exc:
        return new_error(f"Failed to read body, get('{url}'). got {exc}")

    field_name = String("body")
    return Dict(
        {field_name.dict_key(): DictPair(field_name, String(body.decode("utf-8", errors="replace")))}
    )


def register_route(*args: Object) -> Optional[Object]:
    """Register a handler (a string or a builtin returning one) for a method and path."""
    if len(args) != 3:
        return _wrong_count(len(args), 2)
    method, path, handler = args
    if not isinstance(method, String) or not isinstance(path, String):
        return new_error("method and path must be STRING")
    registered_routes.append(Route(method.value.upper(), path.value, handler))
    return None


def _logger(method: str, path: str) -> bool:
    print("Request: ", method, path)
    return True


def use_middlewares(*args: Object) -> Optional[Object]:
    """Attach a named middleware ("logger") to every route with the given path."""
    if len(args) != 2:
        return _wrong_count(len(args), 2)
    path, name = args
    if not isinstance(path, String) or not isinstance(name, String):
        return new_error("method and path must be STRING")
    if name.value == "logger":
        for route in registered_routes:
            if route.path == path.value:
                route.middlewares.append(_logger)
    return None


def html_handler(*args: Object) -> Optional[Object]:
    """Wrap fixed content in a builtin handler that returns it."""
    if len(args) != 1:
        return new_error("html(content) expects 1 argument")
    content = args[0]
    if not isinstance(content, String):
        return new_error("html(content) expects a STRING")
    return Builtin(lambda *_: String(content.value))


def serve_static(*args: Object) -> Optional[Object]:
    """Serve files below a directory under a URL prefix."""
    if len(args) != 2:
        return _wrong_count(len(args), 2)
    prefix, directory = args
    if not isinstance(prefix, String) or not isinstance(directory, String):
        return new_error("method and path must be STRING")
    static_routes.append(StaticRoute(prefix.value, directory.value))
    return None


def match_route(method: str, path: str) -> Optional[Route]:
    """Return the first registered route matching the method and path, or None."""
    request_parts = path.split("/")
    for route in registered_routes:
        if route.method != method:
            continue
        route_parts = route.path.split("/")
        if len(route_parts) != len(request_parts):
            continue
        if all(
            pattern.startswith(":") or pattern == part
            for pattern, part in zip(route_parts, request_parts)
        ):
            return route
    return None


def create_token(*args: Object) -> Optional[Object]:
    """Sign an HS256 token for a user, valid for a number of hours.

    The signing material becomes what ``verify_token`` checks against.
    """
    if len(args) != 3:
        return _wrong_count(len(args), 3)
    username, signer, hours = args
    if not isinstance(username, String):
        return new_error(f"First argument to `createToken` must be STRING, got {username.type}")
    if not isinstance(signer, String):
        return new_error(f"Secret key to `createToken` must be STRING, got {signer.type}")
    if not isinstance(hours, Integer):
        return new_error(
            "Expiration to `createToken` must be INTEGER, it will be the expiration "
            f"in hours, got {hours.type}"
        )

    _hmac_state.current = signer.value
    claims = {"exp": int(time.time() + hours.value * 3600), "username": username.value}
    try:
        encoded = jwt.encode(claims, signer.value, algorithm="HS256")
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        return new_error(
            f"Failed to create token, createToken('{username.value}', '{signer.value}', "
            f"'{hours.value}'). got {exc}"
        )
    return String(encoded)


def verify_token(*args: Object) -> Optional[Object]:
    """Check a token against the last signing material and return its username."""
    if len(args) != 1:
        return _wrong_count(len(args), 1)
    candidate = args[0]
    if not isinstance(candidate, String):
        return new_error(f"Argument to `verifyToken` must be STRING, got {candidate.type}")

    failure = f"Failed to verify token, verifyToken('{candidate.value}'). got"
    try:
        claims = jwt.decode(candidate.value, _hmac_state.current, algorithms=_HMAC_ALGORITHMS)
    except (jwt.PyJWTError, TypeError, ValueError) as exc:
        return new_error(f"{failure} {exc}")

    username = claims.get("username")
    if not isinstance(username, str):
        return new_error(f"{failure} token has no username claim")
    return String(username)