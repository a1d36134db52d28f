from __future__ import annotations

from .errors import (
    Diagnostic,
    DiagnosticsError,
    EmptyTokenStreamError,
    ExpectationError,
    LookaheadError,
    StalledRuleError,
    UsageError,
)
from .parser import Parser, ParseState, parse
from .predicates import OPERATORS, is_digit, is_identifier_candidate, is_operator
from .results import ParseResult, ResultState, TokenStreamResult
from .scanner import Scanner, tokenize
from .spans import Mark, Position
from .tokens import END, Token

__all__ = [
    "END",
    "OPERATORS",
    "Diagnostic",
    "DiagnosticsError",
    "EmptyTokenStreamError",
    "ExpectationError",
    "LookaheadError",
    "Mark",
    "ParseResult",
    "ParseState",
    "Parser",
    "Position",
    "ResultState",
    "Scanner",
    "StalledRuleError",
    "Token",
    "TokenStreamResult",
    "UsageError",
    "is_digit",
    "is_identifier_candidate",
    "is_operator",
    "parse",
    "tokenize",
]
