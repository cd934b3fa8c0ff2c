"""The table of built-in functions available to Zumbra programs, by name."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from zumbra.builtins import arrays, conversions, dicts, mailer, mysql, numbers, system, text, web
from zumbra.objects import Builtin


@dataclass(frozen=True)
class BuiltinDefinition:
    """A built-in function and the name programs call it by."""

    name: str
    builtin: Builtin


def _define(name, fn) -> BuiltinDefinition:
    return BuiltinDefinition(name, Builtin(fn))


BUILTINS: tuple[BuiltinDefinition, ...] = (
    _define("addToArrayStart", arrays.add_to_array_start),
    _define("addToArrayEnd", arrays.add_to_array_end),
    _define("addToDict", dicts.add_to_dict),
    _define("allButFirst", arrays.all_but_first),
    _define("bhaskara", numbers.bhaskara),
    _define("capitalize", text.capitalize),
    _define("date", system.date),
    _define("deleteFromDict", dicts.delete_from_dict),
    _define("dictKeys", dicts.dict_keys),
    _define("dictValues", dicts.dict_values),
    _define("dotenvLoad", system.load_env),
    _define("dotenvGet", system.get_env),
    _define("first", arrays.first),
    _define("get", web.http_get),
    _define("getFromDict", dicts.get_from_dict),
    _define("hashCode", system.hash_code),
    _define("html", web.html_handler),
    _define("indexOf", arrays.index_of),
    _define("input", system.read_input),
    _define("jsonParse", conversions.json_parse),
    _define("jwtCreateToken", web.create_token),
    _define("jwtVerifyToken", web.verify_token),
    _define("last", arrays.last),
    _define("max", arrays.max_of),
    _define("min", arrays.min_of),
    _define("mysqlConnection", mysql.mysql_connection),
    _define("mysqlCreateTable", mysql.mysql_create_table),
    _define("mysqlDeleteFromTable", mysql.mysql_delete_from_table),
    _define("mysqlDropTable", mysql.mysql_drop_table),
    _define("mysqlGetFromTable", mysql.mysql_get_from_table),
    _define("mysqlInsertIntoTable", mysql.mysql_insert_into_table),
    _define("mysqlShowTables", mysql.mysql_show_tables),
    _define("mysqlShowTableColumns", mysql.mysql_show_table_columns),
    _define("mysqlUpdateIntoTable", mysql.mysql_update_into_table),
    _define("organize", arrays.organize),
    _define("randomFloat", numbers.random_float),
    _define("randomInteger", numbers.random_integer),
    _define("registerRoute", web.register_route),
    _define("removeFromArray", arrays.remove_from_array),
    _define("removeWhiteSpaces", text.remove_white_spaces),
    _define("replace", text.replace),
    _define("sendEmail", mailer.send_email_builtin),
    _define("server", web.create_server),
    _define("serveFile", system.serve_file),
    _define("serveStatic", web.serve_static),
    _define("show", text.show),
    _define("sizeOf", text.size_of),
    _define("sum", arrays.sum_of),
    _define("toBool", conversions.to_bool),
    _define("toFloat", conversions.to_float),
    _define("toInt", conversions.to_int),
    _define("toLowercase", text.to_lowercase),
    _define("toString", conversions.to_string),
    _define("toUppercase", text.to_uppercase),
)

_BY_NAME = {definition.name: definition.builtin for definition in BUILTINS}


def get_builtin_by_name(name: str) -> Optional[Builtin]:
    """Return the built-in function with the given name, or None."""
    return _BY_NAME.get(name)


def builtin_names() -> list[str]:
    """Return the names of all built-in functions, in table order."""
    return [definition.name for definition in BUILTINS]