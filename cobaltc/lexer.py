"""Turns a preprocessed source file into a list of tokens."""

from __future__ import annotations

import dataclasses
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

from cobaltc.errors import InternalCompilerError
from cobaltc.source_manager import SourceManager
from cobaltc.tokens import SourceLocation, Token, TokenTable, TokenType
from cobaltc.types import Constant, ConstantKind
from cobaltc.warning_manager import LexerWarningType, WarningManager

FILE_EXTENSION = ".i"

INT_MIN = -(1 << 31)
INT_MAX = (1 << 31) - 1
UINT_MAX = (1 << 32) - 1
LONG_MAX = (1 << 63) - 1
ULONG_MAX = (1 << 64) - 1

_LINE_DIRECTIVE = re.compile(r'#\s*(\d+)\s+"([^"]*)"\s*(.*?)')

_CONSTANT_TYPES = frozenset(
    {
        TokenType.CONSTANT,
        TokenType.LONG_CONSTANT,
        TokenType.UNSIGNED_CONSTANT,
        TokenType.UNSIGNED_LONG_CONSTANT,
        TokenType.DOUBLE_CONSTANT,
    }
)


class LexerError(RuntimeError):
    """The input cannot be read or split into tokens."""


class LocationTracker:
    """Follows the current file, line and column while scanning."""

    def __init__(self, initial_location: SourceLocation) -> None:
        self._location = dataclasses.replace(initial_location)

    def reset(self, file_name: str, line_number: int) -> None:
        self._location.file_name = file_name
        self._location.line_number = line_number
        self._location.column_number = 1

    def advance(self, count: int = 1) -> None:
        self._location.column_number += count

    def new_line(self) -> None:
        self._location.line_number += 1
        self._location.column_number = 1

    def current(self) -> SourceLocation:
        """A copy of the current location."""
        return dataclasses.replace(self._location)


@dataclass
class LexerContext:
    file_path: str
    token_table: TokenTable = field(default_factory=TokenTable)
    source_manager: SourceManager = field(default_factory=SourceManager)
    warning_manager: WarningManager = field(default_factory=WarningManager)


class Lexer:
    """Reads a preprocessed (.i) file and splits it into tokens."""

    def __init__(self, context: LexerContext) -> None:
        self._file_path = os.fspath(context.file_path)
        self._token_table = context.token_table
        self._source_manager = context.source_manager
        self._warning_manager = context.warning_manager
        self._tracker = LocationTracker(SourceLocation(self._file_path))

        if not os.path.exists(self._file_path):
            raise LexerError(
                f"File not found: '{self._file_path}' - Please check the path and try again"
            )

        extension = Path(self._file_path).suffix
        if extension != FILE_EXTENSION:
            raise LexerError(
                f"Invalid file extension: Expected '{FILE_EXTENSION}' but got '{extension}'"
                f" - Preprocessed files must have '{FILE_EXTENSION}' extension"
            )

        try:
            with open(self._file_path, "rb") as handle:
                data = handle.read()
        except OSError:
            raise LexerError(
                f"Failed to open file '{self._file_path}'"
                " - Check file permissions and if the file is in use"
            ) from None

        if not data:
            raise LexerError(
                f"Empty file: '{self._file_path}' - Input file contains no content to tokenize"
            )
        # One character per byte, so columns count bytes.
        self._content = data.decode("latin-1")

    def tokenize(self) -> list[Token]:
        """Split the whole file into tokens."""
        text = self._content
        self._tracker = LocationTracker(SourceLocation(self._file_path))
        tokens: list[Token] = []
        i = 0

        while i < len(text):
            char = text[i]
            if char in " \t":
                i += 1
                self._tracker.advance()
                continue

            if char == "#":
                i = self._line_directive(text, i)
                continue

            if char == "\n":
                i += 1
                self._tracker.new_line()
                continue

            length = self._token_table.search(text[i:])
            if length == 0:
                err = self._source_manager.get_source_line(self._tracker.current())
                raise LexerError(f"Failed matching a token \n{err}")

            lexeme = text[i : i + length]
            token_type = self._token_table.match(lexeme)
            if token_type is None:
                raise InternalCompilerError(
                    f"Token table search found '{lexeme}' but could not classify it"
                )

            literal = None
            if token_type in _CONSTANT_TYPES:
                token_type, literal = self._convert_constant(lexeme, token_type)

            tokens.append(Token(token_type, lexeme, literal, self._tracker.current()))
            self._tracker.advance(length)
            i += length

        return tokens

    def _line_directive(self, text: str, start: int) -> int:
        """Apply a '# N "file"' line and return the index just past it."""
        end = text.find("\n", start)
        if end == -1:
            raise LexerError("Unexpected EOF")
        line = text[start : end + 1]
        found = _LINE_DIRECTIVE.fullmatch(line)
        if found is None:
            raise LexerError("Line starting with # does not match a line directive pattern")
        line_number = int(found.group(1))
        if line_number > INT_MAX:
            raise LexerError(f"Failed parsing line directive: {found.group(1)} is out of range")
        self._tracker.reset(found.group(2), line_number)
        return end + 1

    def _location_text(self) -> str:
        return self._source_manager.get_source_line(self._tracker.current())

    def _warn(self, message: str) -> None:
        self._warning_manager.raise_warning(LexerWarningType.CAST, message)

    def _convert_constant(self, lexeme: str, token_type: TokenType) -> tuple[TokenType, Constant]:
        if token_type is TokenType.CONSTANT:
            value = _parse_integer(lexeme)
            if value is None or value > LONG_MAX:
                raise LexerError(
                    f"Error parsing integer constant '{lexeme}' out of range at:\n"
                    f"{self._location_text()}"
                )
            if INT_MIN <= value <= INT_MAX:
                return token_type, Constant(ConstantKind.INT, value)
            self._warn(
                f"Integer constant '{lexeme}' exceeds int range [{INT_MIN}, {INT_MAX}],"
                f" automatically promoting to long:\n{self._location_text()}"
            )
            return TokenType.LONG_CONSTANT, Constant(ConstantKind.LONG, value)

        if token_type is TokenType.UNSIGNED_CONSTANT:
            value = _parse_integer(lexeme[:-1])
            if value is None or value > ULONG_MAX:
                raise LexerError(
                    f"Error parsing unsigned constant '{lexeme} out of range' at:\n"
                    f"{self._location_text()}"
                )
            if value <= UINT_MAX:
                return token_type, Constant(ConstantKind.UNSIGNED_INT, value)
            self._warn(
                f"Unsigned constant '{lexeme}' exceeds unsigned int range [0, {UINT_MAX}],"
                f" automatically promoting to unsigned long:\n{self._location_text()}"
            )
            return TokenType.UNSIGNED_LONG_CONSTANT, Constant(ConstantKind.UNSIGNED_LONG, value)

        if token_type is TokenType.LONG_CONSTANT:
            value = _parse_integer(lexeme[:-1])
            if value is None or value > LONG_MAX:
                raise LexerError(
                    f"Error parsing long constant '{lexeme}' out of range at:\n"
                    f"{self._location_text()}"
                )
            return token_type, Constant(ConstantKind.LONG, value)

        if token_type is TokenType.UNSIGNED_LONG_CONSTANT:
            value = _parse_integer(lexeme.rstrip("uUlL"))
            if value is None or value > ULONG_MAX:
                raise LexerError(
                    f"Error parsing unsigned long constant '{lexeme}' out of range at:\n"
                    f"{self._location_text()}"
                )
            return token_type, Constant(ConstantKind.UNSIGNED_LONG, value)

        if token_type is TokenType.DOUBLE_CONSTANT:
            try:
                number = float(lexeme)
            except ValueError:
                raise LexerError(
                    f"Error parsing double constant '{lexeme}' Invalid number format at:\n"
                    f"{self._location_text()}"
                ) from None
            return token_type, Constant(ConstantKind.DOUBLE, number)

        raise InternalCompilerError(f"Token type {token_type.name} is not a constant")


def _parse_integer(digits: str) -> int | None:
    if not digits.isdigit() or not digits.isascii():
        return None
    return int(digits)