"""Front-end components of a small C compiler: lexing, tokens, types, symbols and logging."""

__version__ = "1.0.0"
__all__ = [
    "errors",
    "lexer",
    "log",
    "name_generator",
    "source_manager",
    "symbol_table",
    "tokens",
    "types",
    "warning_manager",
]