"""SQL tokenizer, parser, AST model and tree printer."""

from sqlfront_core.query.ast import (
    ASTNode,
    BinaryExpression,
    BooleanLiteral,
    DeleteStatement,
    Expression,
    FloatLiteral,
    FunctionCall,
    Identifier,
    InsertStatement,
    IntegerLiteral,
    Literal,
    NodeType,
    NullLiteral,
    Root,
    SelectStatement,
    Statement,
    StringLiteral,
    UpdateStatement,
    UseStatement,
)
from sqlfront_core.query.errors import ParseError, SqlFrontError, TokenizeError
from sqlfront_core.query.parser import (
    ParseResult,
    Parser,
    QueryParser,
    parse,
    parse_expression,
    parse_file,
    try_parse,
)
from sqlfront_core.query.printer import dump, to_dict, walk
from sqlfront_core.query.stream import EOF, CharacterStream
from sqlfront_core.query.tokenizer import Tokenizer, tokenize
from sqlfront_core.query.tokens import Token, TokenKind

__all__ = [
    # Stream and lexer
    "EOF",
    "CharacterStream",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    # Parser
    "Parser",
    "QueryParser",
    "ParseResult",
    "parse",
    "parse_expression",
    "parse_file",
    "try_parse",
    # Errors
    "SqlFrontError",
    "TokenizeError",
    "ParseError",
    # AST nodes
    "NodeType",
    "ASTNode",
    "Expression",
    "Statement",
    "Identifier",
    "Literal",
    "IntegerLiteral",
    "FloatLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "BinaryExpression",
    "FunctionCall",
    "UseStatement",
    "SelectStatement",
    "InsertStatement",
    "DeleteStatement",
    "UpdateStatement",
    "Root",
    # Printing
    "dump",
    "to_dict",
    "walk",
]
