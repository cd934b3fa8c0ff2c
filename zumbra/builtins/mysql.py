"""Built-in functions that talk to a MySQL database."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Sequence

import pymysql

from zumbra.objects import (
    Array,
    Boolean,
    Dict,
    DictPair,
    Float,
    Integer,
    Null,
    Object,
    String,
    new_error,
)

_NOT_CONNECTED = (
    "Database is not connected. Use mysqlConnection(...) before creating tables."
)


@dataclass
class _ConnectionState:
    handle: Optional[Any] = None


_state = _ConnectionState()


def _all_strings(args: Sequence[Object]) -> bool:
    return all(isinstance(arg, String) for arg in args)


def _escape(text: str) -> str:
    return text.replace("%", "%%")


def _run(query: str, params: Optional[tuple] = None) -> tuple[list[str], list[tuple]]:
    """Execute a statement and return its column names and rows."""
    cursor = _state.handle.cursor()
    try:
        cursor.execute(query, params)
        description = cursor.description
        if description:
            columns = [column[0] for column in description]
            rows = [tuple(row) for row in cursor.fetchall()]
        else:
            columns, rows = [], []
    finally:
        cursor.close()
    return columns, rows


def _condition(text: str) -> str:
    return f" WHERE {text};" if text else ";"


def mysql_connection(*args: Object) -> Optional[Object]:
    """Connect to a database: host, port, user, password and database name."""
    if len(args) != 5:
        return new_error(
            "wrong number of arguments, mysqlConnection(host, port, user, password, "
            f"database). got={len(args)}, want=5"
        )
    if not _all_strings(args):
        return new_error(
            f"All arguments to `mysqlConnection` must be STRING, got {args[0].type}"
        )
    host, port, user, password, database = (arg.value for arg in args)
    described = f"mysqlConnection('{host}', '{port}', '{user}', '{password}', '{database}')"

    try:
        port_number = int(port)
    except ValueError as exc:
        return new_error(f"Failed to open database, {described}. got {exc}")

    try:
        handle = pymysql.connect(
            host=host,
            port=port_number,
            user=user,
            password=password,
            database=database,
            autocommit=True,
        )
    except (pymysql.MySQLError, OSError, ValueError) as exc:
        return new_error(f"Failed to ping database, {described}. got {exc}")

    _state.handle = handle
    print(f"Database '{database}' connected successfully")
    return None


def mysql_create_table(*args: Object) -> Optional[Object]:
    """Create a table from a name and a column definition string."""
    if len(args) != 2:
        return new_error(
            "wrong number of arguments, mysqlCreateTable(tableName, fields). "
            f"got={len(args)}, want=2"
        )
    if not _all_strings(args):
        return new_error(
            f"All arguments to `mysqlCreateTable` must be STRING, got {args[0].type}"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)

    table, fields = args[0].value, args[1].value
    try:
        _run(f"CREATE TABLE {table} ({fields});")
    except pymysql.MySQLError as exc:
        return new_error(
            f"Failed to create table, mysqlCreateTable('{table}', '{fields}'). got {exc}"
        )
    print(f"Table '{table}' created successfully")
    return None


def mysql_show_tables(*args: Object) -> Optional[Object]:
    """Return an array with the names of the database's tables."""
    if args:
        return new_error(
            f"wrong number of arguments, mysqlShowTables(). got={len(args)}, want=0"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)
    try:
        _, rows = _run("SHOW TABLES")
    except pymysql.MySQLError as exc:
        return new_error(f"Failed to show tables, mysqlShowTables(). got {exc}")
    return Array([String(_as_text(row[0])) for row in rows])


def mysql_show_table_columns(*args: Object) -> Optional[Object]:
    """Return an array with the column names of a table."""
    if len(args) != 1:
        return new_error(
            "wrong number of arguments, mysqlShowTableColumns(tableName). "
            f"got={len(args)}, want=1"
        )
    if not isinstance(args[0], String):
        return new_error(
            f"All arguments to `mysqlShowTableColumns` must be STRING, got {args[0].type}"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)

    table = args[0].value
    try:
        _, rows = _run(f"SHOW COLUMNS FROM {table}")
    except pymysql.MySQLError as exc:
        return new_error(
            f"Failed to show table columns, mysqlShowTableColumns('{table}'). got {exc}"
        )
    return Array([String(_as_text(row[0])) for row in rows])


def mysql_drop_table(*args: Object) -> Optional[Object]:
    """Drop a table."""
    if len(args) != 1:
        return new_error(
            "wrong number of arguments, mysqlDeleteTable(tableName). "
            f"got={len(args)}, want=1"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)
    if not isinstance(args[0], String):
        return new_error(
            f"All arguments to `mysqlDropTable` must be STRING, got {args[0].type}"
        )

    table = args[0].value
    try:
        _run(f"DROP TABLE {table}")
    except pymysql.MySQLError as exc:
        return new_error(f"Failed to drop table, mysqlDeleteTable('{table}'). got {exc}")
    print(f"Table '{table}' deleted successfully")
    return None


def mysql_get_from_table(*args: Object) -> Optional[Object]:
    """Select fields from a table, with an optional WHERE condition; rows become dicts."""
    if len(args) != 3:
        return new_error(
            "wrong number of arguments, mysqlGetFromTable(tableName, fields, condition). "
            f"got={len(args)}, want=3"
        )
    if not _all_strings(args):
        return new_error(
            f"All arguments to `mysqlGetFromTable` must be STRING, got {args[0].type}"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)

    table, fields = args[0].value, args[1].value
    condition = _condition(args[2].value)
    try:
        columns, rows = _run(f"SELECT {fields} FROM {table}{condition}")
    except pymysql.MySQLError as exc:
        return new_error(
            f"Failed to get from table, mysqlGetFromTable('{table}', '{fields}', "
            f"'{condition}'). got {exc}"
        )

    records = []
    for row in rows:
        pairs = {}
        for column, value in zip(columns, row):
            key = String(column)
            if isinstance(value, (bytes, bytearray)):
                value = bytes(value).decode("utf-8", errors="replace")
            pairs[key.dict_key()] = DictPair(key, object_from_native(value))
        records.append(Dict(pairs))
    return Array(records)


def mysql_insert_into_table(*args: Object) -> Optional[Object]:
    """Insert one row whose columns and values come from a dict."""
    if len(args) != 2:
        return new_error(
            "wrong number of arguments, mysqlInsertIntoTable(tableName, dict). "
            f"got={len(args)}, want=2"
        )
    table, row = args
    if not isinstance(table, String):
        return new_error(
            f"First argument to `mysqlInsertIntoTable` must be STRING, got {table.type}"
        )
    if not isinstance(row, Dict):
        return new_error(
            f"Second argument to `mysqlInsertIntoTable` must be a DICT, got {row.type}"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)

    keys = [_escape(pair.key.inspect()) for pair in row.pairs.values()]
    params = tuple(to_native(pair.value) for pair in row.pairs.values())
    placeholders = ",".join("%s" for _ in keys)
    query = f"INSERT INTO {_escape(table.value)} ({','.join(keys)}) VALUES ({placeholders});"
    try:
        _run(query, params)
    except pymysql.MySQLError as exc:
        return new_error(
            f"Failed to insert into table, mysqlInsertIntoTable('{table.value}', "
            f"'{row.inspect()}'). got {exc}"
        )
    print("Record inserted successfully")
    return None


def mysql_update_into_table(*args: Object) -> Optional[Object]:
    """Update rows matching a condition with the values of a dict."""
    if len(args) != 3:
        return new_error(
            "wrong number of arguments, mysqlUpdateIntoTable(tableName, dict, condition). "
            f"got={len(args)}, want=3"
        )
    table, row, where = args
    if not isinstance(table, String):
        return new_error(
            f"First argument to `mysqlUpdateIntoTable` must be STRING, got {table.type}"
        )
    if not isinstance(row, Dict):
        return new_error(
            f"Second argument to `mysqlUpdateIntoTable` must be DICT, got {row.type}"
        )
    if not isinstance(where, String):
        return new_error(
            f"Last argument to `mysqlUpdateIntoTable` must be STRING, got {where.type}"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)

    condition = _condition(where.value)
    assignments = ", ".join(f"{_escape(pair.key.inspect())} = %s" for pair in row.pairs.values())
    params = tuple(to_native(pair.value) for pair in row.pairs.values())
    query = f"UPDATE {_escape(table.value)} SET {assignments} {_escape(condition)}"
    try:
        _run(query, params)
    except pymysql.MySQLError as exc:
        return new_error(
            f"Failed to update into table, mysqlUpdateIntoTable('{table.value}', "
            f"'{row.inspect()}', '{condition}'). got {exc}"
        )
    print("Record updated successfully")
    return None


def mysql_delete_from_table(*args: Object) -> Optional[Object]:
    """Delete rows matching a condition; an empty condition deletes every row."""
    if len(args) != 2:
        return new_error(
            "wrong number of arguments, mysqlDeleteFromTable(tableName, condition). "
            f"got={len(args)}, want=2"
        )
    table, where = args
    if not isinstance(table, String):
        return new_error(
            f"First argument to `mysqlDeleteFromTable` must be STRING, got {table.type}"
        )
    if not isinstance(where, String):
        return new_error(
            f"Last argument to `mysqlDeleteFromTable` must be STRING, got {where.type}"
        )
    if _state.handle is None:
        return new_error(_NOT_CONNECTED)

    condition = _condition(where.value)
    try:
        _run(f"DELETE FROM {table.value} {condition}")
    except pymysql.MySQLError as exc:
        return new_error(
            f"Failed to delete from table, mysqlDeleteFromTable('{table.value}', "
            f"'{condition}'). got {exc}"
        )
    print("Record deleted successfully")
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def to_native(obj: Object) -> Any:
    """Turn a runtime value into a value the database driver accepts."""
    if isinstance(obj, (String, Integer, Boolean)):
        return obj.value
    return obj.inspect()


def object_from_native(value: Any) -> Object:
    """Turn a value read from the database into a runtime value."""
    if value is None:
        return Null()
    if isinstance(value, str):
        return String(value)
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, float):
        return Float(value)
    if isinstance(value, Decimal):
        return String(str(value))
    return String(_as_text(value))