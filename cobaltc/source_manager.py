"""Shows the source text behind a location, for diagnostics."""

from __future__ import annotations

from typing import Optional, Sequence, Union

from cobaltc.tokens import SourceLocation, SourceLocationIndex, Token


class SourceManager:
    """Turns source locations into quoted source lines with a caret marker."""

    def __init__(self, token_list: Optional[Sequence[Token]] = None) -> None:
        self.token_list = token_list

    def get_source_line(self, location: Union[SourceLocation, SourceLocationIndex]) -> str:
        """Header line, the source line, and a caret under the column."""
        if isinstance(location, SourceLocationIndex):
            if self.token_list is None:
                raise IndexError("No token list set")
            location = self.token_list[location.index].source_location

        try:
            with open(location.file_name, encoding="utf-8", errors="replace", newline="") as handle:
                lines = handle.read().split("\n")
        except OSError:
            return "ERROR!"

        number = location.line_number
        line = lines[number - 1] if 1 <= number <= len(lines) else ""

        header = f"{location.file_name:<50} {location.line_number:>5}:{location.column_number:<3}\n"
        marker = "".join(
            "\t" if i < len(line) and line[i] == "\t" else " "
            for i in range(location.column_number - 1)
        )
        return f"{header}{line}\n{marker}^"

    def get_index(self, token: Token) -> SourceLocationIndex:
        """Index of this very token object in the token list."""
        for index, candidate in enumerate(self.token_list or ()):
            if candidate is token:
                return SourceLocationIndex(index)
        raise IndexError("Token not found in token list")