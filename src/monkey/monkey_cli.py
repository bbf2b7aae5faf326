"""
Monkey CLI Entrypoint.

This module provides the command-line interface for checking Monkey source code.
It runs the front end only: lexing and parsing, never evaluation.

Features:
    - Read source from `.monkey` files or inline strings.
    - Print the token stream, the canonical rendering of the parsed program,
      or the program as JSON.
    - Report syntax errors on stderr and signal them through the exit status.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey -s "add(1, 2)" --json
    monkey hello.monkey --tokens -p

Functions:
    run_monkey(source: str, is_string: bool = False, tokens: bool = False,
               as_json: bool = False, pretty: bool = False) -> int:
        Executes the front end pipeline (lex → parse → output) and returns an exit status.

    main(argv: list[str] | None = None) -> None:
        Parses CLI arguments and exits with the status of `run_monkey`.
"""

import argparse
import json
import sys

from monkey.monkey_lexer import CharacterStream, Lexer, tokenize
from monkey.monkey_parser import Parser

BANNER = "=" * 20


def run_monkey(
    source: str,
    is_string: bool = False,
    tokens: bool = False,
    as_json: bool = False,
    pretty: bool = False,
) -> int:
    """
    Run the Monkey front end: lex, parse, and print the result.

    Args:
        source (str): The Monkey source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        tokens (bool): If True, prints the token stream instead of the parsed program. Defaults to False.
        as_json (bool): If True, prints the parsed program as JSON. Defaults to False.
        pretty (bool): If True, frames the output with banners. Defaults to False.

    Returns:
        int: 0 when the source parsed cleanly, 1 when syntax errors were recorded.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Token dump
    if tokens:
        if pretty:
            print(f"{BANNER}\nTokens\n{BANNER}")
        for tok in tokenize(source):
            print(f"[tokens] >>> {tok.line}:{tok.col} {tok.kind.value} {tok.literal!r}")
        return 0

    # 3. Parsing
    parser = Parser(Lexer(CharacterStream(source)))
    program = parser.parse_program()

    if parser.diagnostics:
        for diag in parser.diagnostics:
            print(f"[error] >>> {diag.format()}", file=sys.stderr)
        return 1

    # 4. Output result
    if as_json:
        output = json.dumps(program.to_dict(), indent=2)
    else:
        output = "\n".join(str(stmt) for stmt in program.statements)

    if pretty:
        print(f"{BANNER}\nParsed Program\n{BANNER}\n{output}\n{BANNER}")
    else:
        print(output)
    return 0


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the Monkey CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Print the token stream instead of the parsed program.
        - `--json`: Print the parsed program as JSON.
        - `-p`, `--pretty`: Show banner-framed output.
    """
    parser = argparse.ArgumentParser(
        prog="monkey", description="Parse Monkey source and report syntax errors."
    )
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--tokens", action="store_true", help="Print the token stream and stop"
    )
    output.add_argument(
        "--json", dest="as_json", action="store_true", help="Print the AST as JSON"
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )

    args = parser.parse_args(argv)

    sys.exit(
        run_monkey(
            source=args.source,
            is_string=args.string,
            tokens=args.tokens,
            as_json=args.as_json,
            pretty=args.pretty,
        )
    )


if __name__ == "__main__":
    main()
