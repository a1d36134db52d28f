from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Generic, TypeVar, overload

from .errors import Diagnostic, EmptyTokenStreamError, ExpectationError, LookaheadError, UsageError
from .results import ParseResult, TokenStreamResult
from .tokens import Token, same_text


logger = logging.getLogger(__name__)

K = TypeVar("K")
R = TypeVar("R")


class ParseState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    SUCCEEDED_WITH_ERRORS = "succeeded_with_errors"


def _text_of(token: Token[K] | str) -> str:
    return token if isinstance(token, str) else token.text


class Parser(Generic[K, R]):
    """Bounds-checked cursor over a token stream for recursive-descent rules.

    ``process`` is the entry rule. It receives the parser, walks the tokens
    with ``is_match`` / ``read`` / ``expect`` and returns the root value.
    Input problems are reported with ``add_error`` and never stop the walk;
    contract violations (bad lookahead, failed ``expect``) raise
    ``UsageError`` subclasses out of ``parse()``.
    """

    def __init__(self, stream: TokenStreamResult[K], process: Callable[[Parser[K, R]], R]) -> None:
        if stream is None or not stream.tokens:
            raise EmptyTokenStreamError()
        if process is None:
            raise UsageError("'process' argument is None")
        self.tokens: tuple[Token[K], ...] = tuple(stream.tokens)
        self.source = stream.source
        self.position = 0
        self.state = ParseState.NOT_STARTED
        self._process = process
        self._errors: list[Diagnostic] = []

    @property
    def remaining(self) -> int:
        return max(len(self.tokens) - self.position, 0)

    def is_end_of_input(self) -> bool:
        return self.position >= len(self.tokens)

    @overload
    def peek(self) -> Token[K] | None: ...

    @overload
    def peek(self, n: int) -> tuple[Token[K], ...]: ...

    def peek(self, n: int | None = None) -> Token[K] | None | tuple[Token[K], ...]:
        if n is None:
            return None if self.is_end_of_input() else self.tokens[self.position]
        if n < 1:
            raise LookaheadError(f"lookahead must be at least 1, got {n}")
        if n > self.remaining:
            raise LookaheadError(f"lookahead {n} exceeds the {self.remaining} remaining token(s)")
        return self.tokens[self.position : self.position + n]

    @overload
    def read(self) -> Token[K] | None: ...

    @overload
    def read(self, n: int) -> tuple[Token[K], ...]: ...

    def read(self, n: int | None = None) -> Token[K] | None | tuple[Token[K], ...]:
        if n is None:
            if self.is_end_of_input():
                return None
            tok = self.tokens[self.position]
            self.position += 1
            return tok
        if n < 1:
            raise LookaheadError(f"read count must be at least 1, got {n}")
        out = self.tokens[self.position : self.position + n]
        self.position += len(out)
        return out

    def skip(self) -> None:
        self.read()

    def is_match(self, *kinds: K) -> bool:
        tok = self.peek()
        return tok is not None and tok.kind in kinds

    def is_match_text(self, *texts: str, ignore_case: bool = False) -> bool:
        tok = self.peek()
        if tok is None:
            return False
        return any(same_text(t, tok.text, ignore_case) for t in texts)

    def accept(self, token: Token[K] | str, ignore_case: bool = False) -> Token[K] | None:
        if not self.is_match_text(_text_of(token), ignore_case=ignore_case):
            return None
        return self.read()

    def expect(self, token: Token[K] | str, ignore_case: bool = False) -> Token[K]:
        got = self.peek()
        want = _text_of(token)
        if got is None or not same_text(want, got.text, ignore_case):
            raise ExpectationError(
                expected=want,
                found="<end of input>" if got is None else got.text,
                position=None if got is None else got.position,
            )
        self.position += 1
        return got

    def read_while(self, predicate: Callable[[Token[K]], bool]) -> tuple[Token[K], ...]:
        start = self.position
        while not self.is_end_of_input() and predicate(self.tokens[self.position]):
            self.position += 1
        return self.tokens[start : self.position]

    def skip_while(self, predicate: Callable[[Token[K]], bool]) -> None:
        self.read_while(predicate)

    def traverse(self, action: Callable[[Token[K]], object]) -> None:
        for tok in self.tokens:
            action(tok)

    def add_error(self, token: Token[K] | None, expected: str, message: str = "") -> None:
        diag = Diagnostic.at(token, expected, message)
        logger.debug("%s: parse error %s", self.source, diag)
        self._errors.append(diag)

    def parse(self) -> ParseResult[R]:
        if self.state is not ParseState.NOT_STARTED:
            raise UsageError(f"parse() cannot run while the parser is {self.state.value}")
        self.state = ParseState.RUNNING
        result = self._process(self)

        errors = tuple(self._errors) or None
        self.state = ParseState.SUCCEEDED_WITH_ERRORS if errors else ParseState.SUCCEEDED
        logger.debug("%s: parsed with %d errors", self.source, len(self._errors))
        return ParseResult(result=result, errors=errors, source=self.source)


def parse(stream: TokenStreamResult[K], process: Callable[[Parser[K, R]], R]) -> ParseResult[R]:
    return Parser(stream, process).parse()
