# cobaltc

Building blocks for a small C compiler front end: a lexer for preprocessed
C (`.i`) files, token classification, the C type model, a symbol table with
constant conversion, unique name generation and a context-based logger.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Lexing a preprocessed file

```python
from cobaltc.lexer import Lexer, LexerContext
from cobaltc.tokens import TokenTable
from cobaltc.source_manager import SourceManager
from cobaltc.warning_manager import WarningManager

context = LexerContext(
    file_path="program.i",
    token_table=TokenTable(),
    source_manager=SourceManager(),
    warning_manager=WarningManager(),
)
for token in Lexer(context).tokenize():
    print(token)
```

`token_table`, `source_manager` and `warning_manager` default to fresh
instances, so `LexerContext(file_path="program.i")` is enough.

The lexer only accepts files ending in `.i` and refuses missing or empty
files with a `LexerError`; a character sequence that is not a token also
raises `LexerError`, with the offending source line and a caret under the
column. Integer constants that overflow `int` (or `unsigned int` with a `U`
suffix) are promoted to `long` (or `unsigned long`), and a
`LexerWarningType.CAST` warning goes to the warning manager. Line directives
such as `# 12 "file.c"` reset the reported file name and line number.

Each `Token` has a `type` (`TokenType`), a `lexeme`, a `literal`
(a `Constant` for numeric constants, otherwise `None`) and a
`source_location`. `Token.literal_as(ConstantKind.INT)` returns the literal's
value, raising `TokenError` if it is of another kind.

`TokenTable.search(text)` gives the length of the token at the start of
`text` (0 if there is none), and `TokenTable.match(lexeme)` classifies a
whole lexeme, returning `None` if it is not a token.

## Types and constants

`cobaltc.types` models `int`, `long`, `unsigned int`, `unsigned long`,
`double`, pointers, arrays and function types, each with its size,
alignment and signedness. Compare types with `Type.equals`. A `Constant`
pairs a value with its `ConstantKind` and refuses values that do not fit.

`cobaltc.symbol_table.convert_constant_type` converts a `Constant` to a
target type the way a C compiler folds static initialisers, calling an
optional warning callback when the types differ and raising
`ConstantConversionError` when a conversion is impossible (for example, a
non-zero constant to a pointer, or a `double` out of range).
`SymbolTable` is a read-only mapping from names to `SymbolEntry` objects,
filled with `insert_symbol` (which refuses duplicates) or
`insert_or_assign_symbol`. `InitialValue.from_constant` turns zero
constants into zero runs of the type's size.

## Names

`NameGenerator().make_temporary()` returns `tmp.0`, `tmp.1`, ... and
`make_label("loop")` returns `loop.0`, `loop.1`, ... with separate counters.

## Logging

`cobaltc.log.get_logger()` returns the shared `ContextLogger`. Log levels
run from `trace` to `off`; each context (`main`, `lexer`, `parser`, ...)
may be turned on or off, given its own level, and sent to the console
and/or a rotating log file. Configuration is read from a JSON file named by
the `LOG_CONFIG_PATH` environment variable:

```json
{
  "default_level": "info",
  "contexts": {
    "main": {"level": "info"},
    "lexer": {"level": "warn", "console": true},
    "parser": {"file": "parser.log", "max_size_mb": 5, "max_files": 3}
  }
}
```

A malformed configuration raises `LogConfigParseError`. A `ContextLogger`
can also be configured directly with `configure(LoggerConfig(...))` or from
a file with `configure_file(path)`.

## What this package does not do

This package stops at tokens, types and symbols. It has no parser, no
semantic analysis, no intermediate or assembly code generation and no
command-line compiler driver; it does not preprocess `.c` files, so the
lexer must be given an already preprocessed `.i` file.