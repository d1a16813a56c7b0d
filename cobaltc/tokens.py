"""Tokens, token types, source locations and the lexeme table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from cobaltc.types import Constant, ConstantKind


class TokenType(Enum):
    IDENTIFIER = auto()
    CONSTANT = auto()
    LONG_CONSTANT = auto()
    UNSIGNED_CONSTANT = auto()
    UNSIGNED_LONG_CONSTANT = auto()
    DOUBLE_CONSTANT = auto()
    INT_KW = auto()
    LONG_KW = auto()
    DOUBLE_KW = auto()
    SIGNED_KW = auto()
    UNSIGNED_KW = auto()
    VOID_KW = auto()
    RETURN_KW = auto()
    IF_KW = auto()
    ELSE_KW = auto()
    DO_KW = auto()
    WHILE_KW = auto()
    FOR_KW = auto()
    BREAK_KW = auto()
    CONTINUE_KW = auto()
    STATIC_KW = auto()
    EXTERN_KW = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()
    OPEN_BRACE = auto()
    CLOSE_BRACE = auto()
    OPEN_SQUARE_BRACKET = auto()
    CLOSE_SQUARE_BRACKET = auto()
    SEMICOLON = auto()
    MINUS = auto()
    DECREMENT = auto()
    COMPLEMENT = auto()
    EXCLAMATION_POINT = auto()
    AMPERSAND = auto()
    ASTERISK = auto()
    PLUS = auto()
    FORWARD_SLASH = auto()
    PERCENT = auto()
    LOGICAL_AND = auto()
    LOGICAL_OR = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_THAN = auto()
    GREATER_THAN = auto()
    LESS_THAN_EQUAL = auto()
    GREATER_THAN_EQUAL = auto()
    ASSIGNMENT = auto()
    QUESTION_MARK = auto()
    COLON = auto()
    COMMA = auto()


# Types that have a printable name; the rest print as "UNKNOWN".
_NAMED_TYPES = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.CONSTANT,
        TokenType.LONG_CONSTANT,
        TokenType.INT_KW,
        TokenType.LONG_KW,
        TokenType.VOID_KW,
        TokenType.RETURN_KW,
        TokenType.IF_KW,
        TokenType.ELSE_KW,
        TokenType.DO_KW,
        TokenType.WHILE_KW,
        TokenType.FOR_KW,
        TokenType.BREAK_KW,
        TokenType.CONTINUE_KW,
        TokenType.OPEN_PAREN,
        TokenType.CLOSE_PAREN,
        TokenType.OPEN_BRACE,
        TokenType.CLOSE_BRACE,
        TokenType.SEMICOLON,
        TokenType.MINUS,
        TokenType.DECREMENT,
        TokenType.COMPLEMENT,
        TokenType.EXCLAMATION_POINT,
        TokenType.PLUS,
        TokenType.ASTERISK,
        TokenType.FORWARD_SLASH,
        TokenType.PERCENT,
        TokenType.LOGICAL_AND,
        TokenType.LOGICAL_OR,
        TokenType.EQUAL,
        TokenType.NOT_EQUAL,
        TokenType.LESS_THAN,
        TokenType.GREATER_THAN,
        TokenType.LESS_THAN_EQUAL,
        TokenType.GREATER_THAN_EQUAL,
        TokenType.ASSIGNMENT,
        TokenType.QUESTION_MARK,
        TokenType.COLON,
        TokenType.COMMA,
    }
)


def token_type_name(token_type: TokenType) -> str:
    """Printable name of a token type."""
    return token_type.name if token_type in _NAMED_TYPES else "UNKNOWN"


class TokenError(RuntimeError):
    """A token was used in a way its contents do not allow."""


@dataclass
class SourceLocation:
    file_name: str
    line_number: int = 1
    column_number: int = 1


@dataclass(frozen=True)
class SourceLocationIndex:
    """Position of a token in the token list."""

    index: int


@dataclass
class Token:
    type: TokenType
    lexeme: str
    literal: Optional[Constant]
    source_location: SourceLocation

    def literal_as(self, kind: ConstantKind) -> int | float:
        """The literal's value; raise TokenError if it is not of this kind."""
        if self.literal is None or self.literal.kind is not kind:
            raise TokenError("Bad Token" + str(self))
        return self.literal.value

    def __str__(self) -> str:
        text = (
            f"Token{{type={token_type_name(self.type)}, lexeme='{self.lexeme}'"
            f", line={self.source_location.line_number}"
        )
        if self.literal is not None and self.literal.kind.is_integer:
            text += f", literal={self.literal.value}"
        return text + "}"


_KEYWORDS = {
    "int": TokenType.INT_KW,
    "void": TokenType.VOID_KW,
    "return": TokenType.RETURN_KW,
    "if": TokenType.IF_KW,
    "else": TokenType.ELSE_KW,
    "do": TokenType.DO_KW,
    "while": TokenType.WHILE_KW,
    "for": TokenType.FOR_KW,
    "break": TokenType.BREAK_KW,
    "continue": TokenType.CONTINUE_KW,
    "static": TokenType.STATIC_KW,
    "extern": TokenType.EXTERN_KW,
    "long": TokenType.LONG_KW,
    "signed": TokenType.SIGNED_KW,
    "unsigned": TokenType.UNSIGNED_KW,
    "double": TokenType.DOUBLE_KW,
}

_SINGLE_CHAR_TOKENS = {
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
    "{": TokenType.OPEN_BRACE,
    "}": TokenType.CLOSE_BRACE,
    ";": TokenType.SEMICOLON,
    "-": TokenType.MINUS,
    "~": TokenType.COMPLEMENT,
    "+": TokenType.PLUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.FORWARD_SLASH,
    "%": TokenType.PERCENT,
    "!": TokenType.EXCLAMATION_POINT,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "=": TokenType.ASSIGNMENT,
    "?": TokenType.QUESTION_MARK,
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "&": TokenType.AMPERSAND,
    "[": TokenType.OPEN_SQUARE_BRACKET,
    "]": TokenType.CLOSE_SQUARE_BRACKET,
}

_DOUBLE_CHAR_TOKENS = {
    "--": TokenType.DECREMENT,
    "&&": TokenType.LOGICAL_AND,
    "||": TokenType.LOGICAL_OR,
    "==": TokenType.EQUAL,
    "!=": TokenType.NOT_EQUAL,
    "<=": TokenType.LESS_THAN_EQUAL,
    ">=": TokenType.GREATER_THAN_EQUAL,
}

_CONSTANT_PATTERNS = [
    (r"([0-9]+)", TokenType.CONSTANT),
    (r"([0-9]+[lL])", TokenType.LONG_CONSTANT),
    (r"([0-9]+[uU])", TokenType.UNSIGNED_CONSTANT),
    (r"([0-9]+([uU][lL]|[lL][uU]))", TokenType.UNSIGNED_LONG_CONSTANT),
    (
        r"((([0-9]*\.[0-9]+|[0-9]+\.?)[Ee][+-]?[0-9]+|[0-9]*\.[0-9]+|[0-9]+\.))",
        TokenType.DOUBLE_CONSTANT,
    ),
]


class TokenTable:
    """Recognises the lexemes of the language."""

    def __init__(self) -> None:
        # A constant found while scanning must be followed by a character
        # that cannot continue it.
        self._search_patterns = [
            re.compile(base + r"[^\w.]", re.ASCII) for base, _ in _CONSTANT_PATTERNS
        ]
        self._match_patterns = [
            (re.compile(base, re.ASCII), token_type) for base, token_type in _CONSTANT_PATTERNS
        ]
        self._identifier = re.compile(r"[a-zA-Z_]\w*\b", re.ASCII)

    def search(self, text: str) -> int:
        """Length of the token at the start of text, or 0 if none is there."""
        if not text:
            return 0
        if text[:2] in _DOUBLE_CHAR_TOKENS:
            return 2
        if text[0] in _SINGLE_CHAR_TOKENS:
            return 1
        for pattern in self._search_patterns:
            found = pattern.match(text)
            if found:
                return len(found.group(1))
        found = self._identifier.match(text)
        return len(found.group(0)) if found else 0

    def match(self, lexeme: str) -> Optional[TokenType]:
        """Classify a whole lexeme, or return None if it is not a token."""
        if not lexeme:
            return None
        if len(lexeme) == 1 and lexeme in _SINGLE_CHAR_TOKENS:
            return _SINGLE_CHAR_TOKENS[lexeme]
        if len(lexeme) == 2 and lexeme in _DOUBLE_CHAR_TOKENS:
            return _DOUBLE_CHAR_TOKENS[lexeme]
        for pattern, token_type in self._match_patterns:
            if pattern.fullmatch(lexeme):
                return token_type
        if self._identifier.fullmatch(lexeme):
            return _KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        return None