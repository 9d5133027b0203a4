"""Tokenizer for conditional expressions.

Converts one expression (the text between ``{{#if`` and ``}}``) into a
flat token list.  String literals take either quote and have no escape
processing; numbers have no exponent form.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._values import ExpressionError


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    EQUALS = "=="
    NOT_EQUALS = "!="
    AND = "&&"
    OR = "||"
    NOT = "!"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    DOT = "."


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


_TWO_CHAR_OPERATORS: dict[str, TokenKind] = {
    "==": TokenKind.EQUALS,
    "!=": TokenKind.NOT_EQUALS,
    "&&": TokenKind.AND,
    "||": TokenKind.OR,
}

_ONE_CHAR_OPERATORS: dict[str, TokenKind] = {
    "!": TokenKind.NOT,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    ",": TokenKind.COMMA,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    ".": TokenKind.DOT,
}


_DIGITS = frozenset("0123456789")


def _is_ident_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens.

    Raises ``ExpressionError`` on an unterminated string literal or a
    character that cannot start any token.
    """
    tokens: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        # Two-character operators win over '!'
        pair = text[i:i + 2]
        if pair in _TWO_CHAR_OPERATORS:
            tokens.append(Token(_TWO_CHAR_OPERATORS[pair], pair))
            i += 2
            continue

        if ch in _ONE_CHAR_OPERATORS:
            tokens.append(Token(_ONE_CHAR_OPERATORS[ch], ch))
            i += 1
            continue

        if ch in ("'", '"'):
            end = text.find(ch, i + 1)
            if end == -1:
                raise ExpressionError(
                    f"Unterminated string literal starting at column {i + 1}"
                )
            tokens.append(Token(TokenKind.STRING, text[i + 1:end]))
            i = end + 1
            continue

        if ch in _DIGITS or (ch == "-" and i + 1 < n and text[i + 1] in _DIGITS):
            start = i
            i += 1
            while i < n and text[i] in _DIGITS:
                i += 1
            # Single fractional part: '.' must be followed by a digit
            if i + 1 < n and text[i] == "." and text[i + 1] in _DIGITS:
                i += 1
                while i < n and text[i] in _DIGITS:
                    i += 1
            tokens.append(Token(TokenKind.NUMBER, text[start:i]))
            continue

        if _is_ident_start(ch):
            start = i
            while i < n and _is_ident_char(text[i]):
                i += 1
            word = text[start:i]
            if word.lower() in ("true", "false"):
                tokens.append(Token(TokenKind.BOOLEAN, word.lower()))
            else:
                tokens.append(Token(TokenKind.IDENTIFIER, word))
            continue

        raise ExpressionError(
            f"Unexpected character {ch!r} at column {i + 1}"
        )

    return tokens
