import os
from collections.abc import Callable

import pytest

from monkey.monkey_ast import Program
from monkey.monkey_lexer import CharacterStream, Lexer
from monkey.monkey_parser import Parser

# Measure subprocess runs of the CLI when started under `coverage run`
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()


def make_parser(source: str) -> Parser:
    return Parser(Lexer(CharacterStream(source)))


@pytest.fixture  # type: ignore[misc]
def parse_ok() -> Callable[[str], Program]:
    """Parses source and fails the test if the parser recorded any error."""

    def _parse(source: str) -> Program:
        parser = make_parser(source)
        program = parser.parse_program()
        assert parser.errors == [], f"parser had errors: {parser.errors}"
        return program

    return _parse
