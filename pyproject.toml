[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cobaltc"
version = "1.0.0"
description = "Front-end pieces of a small C compiler: lexer, tokens, types, symbol table and logging"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "c", "lexer", "tokenizer", "symbol-table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cobaltc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
