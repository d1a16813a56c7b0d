"""Compiler warnings, reported through the logger."""

from __future__ import annotations

from enum import Enum, auto
from typing import Optional, Union

from cobaltc.log import ContextLogger, get_logger

LEXER_LOG_CONTEXT = "lexer"
PARSER_LOG_CONTEXT = "parser"


class LexerWarningType(Enum):
    GENERIC = auto()
    CAST = auto()


class ParserWarningType(Enum):
    GENERIC = auto()
    CAST = auto()


class WarningManager:
    """Reports warnings from the compiler stages; subclass to capture them."""

    def __init__(self, logger: Optional[ContextLogger] = None) -> None:
        self._logger = logger

    @property
    def logger(self) -> ContextLogger:
        return self._logger if self._logger is not None else get_logger()

    def raise_warning(
        self, warning_type: Union[LexerWarningType, ParserWarningType], message: str
    ) -> None:
        if isinstance(warning_type, LexerWarningType):
            self.logger.warn(LEXER_LOG_CONTEXT, message)
        elif isinstance(warning_type, ParserWarningType):
            self.logger.warn(PARSER_LOG_CONTEXT, message)
        else:
            raise TypeError(f"Unknown warning type: {warning_type!r}")