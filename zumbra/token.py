"""Token kinds and keyword lookup for the Zumbra lexer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(str, Enum):
    """Every kind of token the lexer can produce."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"
    FLOAT = "FLOAT"
    STRING = "STRING"

    ASSIGN = "<<"
    EQUAL = "=="
    NOT_EQUAL = "!="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    MODULE = "%"
    LT = "<"
    GT = ">"
    LTE = "<="
    GTE = ">="
    POWER = "**"
    PLUSPLUS = "++"
    MINUSMINUS = "--"
    DOT = "."

    OR = "or"
    AND = "and"

    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    FUNCTION = "FUNCTION"
    VAR = "VAR"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"
    WHILE = "WHILE"
    IMPORT = "IMPORT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A single lexical token: its kind and the text it was read from."""

    type: TokenType
    literal: str


_KEYWORDS: dict[str, TokenType] = {
    "fct": TokenType.FUNCTION,
    "var": TokenType.VAR,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
    "while": TokenType.WHILE,
    "import": TokenType.IMPORT,
    "and": TokenType.AND,
    "or": TokenType.OR,
}


def lookup_ident(ident: str) -> TokenType:
    """Return the keyword token type for ``ident``, or IDENT if it is not a keyword."""
    return _KEYWORDS.get(ident, TokenType.IDENT)