"""Optional character and lexeme predicates for token rules."""

from __future__ import annotations

import re


OPERATORS: frozenset[str] = frozenset(
    {
        "+", "-", "/", "*", "%", "<", ">", ">=", "<=", "!=", "=", "==", "===",
        "++", "--", "&", "^", "|", ">>", "<<", "&&", "||", "??",
        "+=", "-=", "*=", "/=", "%=", "|=", "&=", "^=", "<<=", ">>=", "??=",
        "=>", "..", "~", "?.", "->",
    }
)

_IDENT_RE = re.compile(r"[_a-zA-Z0-9]+")


def is_operator(value: str, operators: frozenset[str] = OPERATORS) -> bool:
    return value in operators


def is_identifier_candidate(ch: str, pattern: re.Pattern[str] | None = None) -> bool:
    return (pattern or _IDENT_RE).fullmatch(ch) is not None


def is_digit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"
