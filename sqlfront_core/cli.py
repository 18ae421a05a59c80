"""SQLFront CLI - parse a SQL file and print its syntax tree.

Usage:
    sqlfront queries.sql
    sqlfront queries.sql --json
    sqlfront queries.sql --tokens
    sqlfront queries.sql --config sqlfront.yaml --verbose

Parse and lexical errors are reported on stderr; they do not change the
exit status. A missing path is a usage error (status 2).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from sqlfront_core import __version__
from sqlfront_core.config import ConfigError, ParserConfig
from sqlfront_core.query.errors import SqlFrontError
from sqlfront_core.query.parser import parse_file
from sqlfront_core.query.printer import dump, to_dict
from sqlfront_core.query.stream import CharacterStream
from sqlfront_core.query.tokenizer import Tokenizer
from sqlfront_core.query.tokens import Token

logger = logging.getLogger(__name__)


# =============================================================================
# Output Formatting
# =============================================================================


class OutputFormatter:
    """Renders parse results for the terminal, or as JSON."""

    COLORS = {
        "reset": "\033[0m",
        "bold": "\033[1m",
        "red": "\033[31m",
        "green": "\033[32m",
    }

    def __init__(self, color: bool = True, json_output: bool = False):
        self.color = color and sys.stdout.isatty()
        self.json_output = json_output

    def _c(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{self.COLORS[color]}{text}{self.COLORS['reset']}"

    def success(self, message: str) -> None:
        """Report a finished parse on stdout; silent in JSON mode."""
        if not self.json_output:
            print(self._c("✓", "green"), message)

    def error(self, message: str) -> None:
        """Report a failure on stderr."""
        if self.json_output:
            print(json.dumps({"error": message}), file=sys.stderr)
        else:
            print(self._c("✗", "red"), message, file=sys.stderr)

    def header(self, text: str) -> None:
        if not self.json_output:
            print(self._c(f"═══ {text} ═══", "bold"))

    def tokens(self, tokens: List[Token], title: str) -> None:
        """Print one row per token: offset, kind and text."""
        headers = ["Offset", "Kind", "Text"]
        rows = [[token.position, token.kind.value, token.text] for token in tokens]
        if self.json_output:
            print(json.dumps({"title": title, "headers": headers, "rows": rows}))
            return

        self.header(title)
        widths = [max([len(h)] + [len(str(row[i])) for row in rows]) for i, h in enumerate(headers)]
        print(self._c(" │ ".join(h.ljust(w) for h, w in zip(headers, widths)), "bold"))
        print("─┼─".join("─" * w for w in widths))
        for row in rows:
            print(" │ ".join(str(cell).ljust(w) for cell, w in zip(row, widths)))


# =============================================================================
# Commands
# =============================================================================


def cmd_parse(args: argparse.Namespace, config: ParserConfig, formatter: OutputFormatter) -> int:
    """Parse the file and print its tree."""
    try:
        root = parse_file(args.path, config)
    except (SqlFrontError, OSError, UnicodeDecodeError) as e:
        logger.debug(f"Parsing {args.path} failed", exc_info=True)
        formatter.error(f"Exception: {e}")
        return 0

    if formatter.json_output:
        print(json.dumps(to_dict(root), indent=2))
        return 0

    formatter.header("Parse tree")
    print(dump(root, indent=config.indent))
    formatter.success(f"Parsed {len(root)} statement(s) from {args.path}")
    return 0


def cmd_tokens(args: argparse.Namespace, config: ParserConfig, formatter: OutputFormatter) -> int:
    """Print the token stream of the file."""
    try:
        stream = CharacterStream.from_file(args.path, encoding=config.encoding)
        tokens = list(Tokenizer(stream, config))
    except (SqlFrontError, OSError, UnicodeDecodeError) as e:
        logger.debug(f"Tokenizing {args.path} failed", exc_info=True)
        formatter.error(f"Exception: {e}")
        return 0

    formatter.tokens(tokens, title=f"Tokens in {args.path}")
    return 0


# =============================================================================
# Main CLI
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser."""
    parser = argparse.ArgumentParser(
        prog="sqlfront",
        description="SQLFront - parse SQL statements into a syntax tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sqlfront queries.sql
  sqlfront queries.sql --json
  sqlfront queries.sql --tokens
        """,
    )

    parser.add_argument("path", help="SQL file to parse")
    parser.add_argument("--version", action="version", version=f"SQLFront {__version__}")
    parser.add_argument("--tokens", action="store_true", help="Print tokens instead of the tree")
    parser.add_argument("--json", action="store_true", help="Output as JSON")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--config", "-c", help="YAML configuration file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def load_config(path: Optional[str]) -> ParserConfig:
    """Load configuration from a YAML file, or from the environment."""
    if path:
        return ParserConfig.from_yaml(path)
    return ParserConfig.from_env()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (ConfigError, OSError) as e:
        parser.error(f"invalid configuration: {e}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    formatter = OutputFormatter(color=not args.no_color, json_output=args.json)

    if args.tokens:
        return cmd_tokens(args, config, formatter)
    return cmd_parse(args, config, formatter)


if __name__ == "__main__":
    sys.exit(main())
