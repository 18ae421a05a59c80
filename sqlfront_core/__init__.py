"""SQLFront - SQL front-end that turns statement text into an AST.

SQLFront recognizes a literature-standard SQL subset and builds an
immutable syntax tree for downstream tools (linters, translators, query
analyzers). It does not execute or validate statements.

Architecture:
    ┌─────────────────────────────────────────────────────────────────┐
    │                          SQLFront                               │
    ├─────────────────────────────────────────────────────────────────┤
    │  ┌─────────────┐  ┌─────────────┐  ┌─────────────┐             │
    │  │  Character  │  │  Tokenizer  │  │   Parser    │             │
    │  │   Stream    │──│  (Tokens)   │──│  (Grammar)  │             │
    │  └─────────────┘  └─────────────┘  └─────────────┘             │
    │                                           │                     │
    │                   ┌─────────────┐  ┌─────────────┐             │
    │                   │   Printer   │──│     AST     │             │
    │                   │ (dump/dict) │  │   (Root)    │             │
    │                   └─────────────┘  └─────────────┘             │
    └─────────────────────────────────────────────────────────────────┘

Usage:
    from sqlfront_core import parse, dump

    root = parse("SELECT * FROM users WHERE active = TRUE;")
    print(dump(root))

CLI:
    $ sqlfront queries.sql
    $ sqlfront queries.sql --json
    $ sqlfront queries.sql --tokens
"""

from __future__ import annotations

__version__ = "1.0.0"

from sqlfront_core.config import ConfigError, ParserConfig
from sqlfront_core.query import (
    CharacterStream,
    ParseError,
    ParseResult,
    Parser,
    Root,
    SqlFrontError,
    Token,
    TokenizeError,
    Tokenizer,
    TokenKind,
    dump,
    parse,
    parse_expression,
    parse_file,
    to_dict,
    tokenize,
    try_parse,
)

__all__ = [
    # Version
    "__version__",

    # Config
    "ParserConfig",
    "ConfigError",

    # Lexing
    "CharacterStream",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",

    # Parsing
    "Parser",
    "ParseResult",
    "Root",
    "parse",
    "parse_expression",
    "parse_file",
    "try_parse",

    # Errors
    "SqlFrontError",
    "TokenizeError",
    "ParseError",

    # Printing
    "dump",
    "to_dict",
]
