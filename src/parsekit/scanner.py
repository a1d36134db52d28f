from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from .errors import Diagnostic, ExpectationError, StalledRuleError, UsageError
from .predicates import is_digit
from .results import TokenStreamResult
from .spans import Mark, Position
from .tokens import END, Token, same_text


logger = logging.getLogger(__name__)

K = TypeVar("K")


class Scanner(Generic[K]):
    """Character cursor driven by a caller-supplied token rule.

    ``read_token`` is called with the scanner until the end of input has been
    consumed. Each call classifies the characters at the cursor and reports
    them through ``add_token`` / ``add_error``; once ``at_end`` holds the rule
    emits the end-of-input token, usually with ``add_end_token``.

    Lines are 1-based and columns 0-based. Nothing that was read can be
    un-read, so rules look ahead with ``peek(n)`` before committing.
    """

    def __init__(self, text: str, read_token: Callable[[Scanner[K]], None], *, source: str = "<memory>") -> None:
        if read_token is None:
            raise UsageError("'read_token' argument is None")
        self.text = text
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 0
        self.current = END
        self._read_token = read_token
        self._tokens: list[Token[K]] = []
        self._errors: list[Diagnostic] = []
        self._exhausted = False
        self._started = False

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def is_end_of_file(self) -> bool:
        """True once the end of input has been consumed by ``read()``."""
        return self._exhausted

    def mark(self) -> Mark:
        return Mark(offset=self.position, line=self.line, column=self.column)

    def peek(self, n: int = 1) -> str:
        if n == 1:
            return END if self.at_end else self.text[self.position]
        if n < 1:
            return ""
        chunk = self.text[self.position : self.position + n]
        # Short reads get a single end marker.
        return chunk if len(chunk) == n else chunk + END

    def is_match(self, ch: str) -> bool:
        return not self.at_end and self.peek() == ch

    def read(self, n: int = 1) -> str:
        if n != 1:
            out: list[str] = []
            while len(out) < n and not self.at_end:
                out.append(self.read())
            return "".join(out)

        if self.at_end:
            self._exhausted = True
            self.current = END
            return END
        ch = self.text[self.position]
        self.position += 1
        self.current = ch
        if ch == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        return ch

    def skip(self) -> None:
        self.read()

    def accept(self, ch: str, ignore_case: bool = False) -> bool:
        if self.at_end or not same_text(self.peek(), ch, ignore_case):
            return False
        self.read()
        return True

    def expect(self, ch: str, ignore_case: bool = False) -> str:
        got = self.peek()
        if self.at_end or not same_text(got, ch, ignore_case):
            raise ExpectationError(
                expected=ch,
                found=got,
                position=Position(line=self.line, column=self.column, start=self.position, length=0),
            )
        return self.read()

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.position
        while not self.at_end and predicate(self.peek()):
            self.read()
        return self.text[start : self.position]

    def skip_while(self, predicate: Callable[[str], bool]) -> None:
        self.read_while(predicate)

    def read_line(self, consume_newline: bool = False) -> str:
        line = self.read_while(lambda c: c != "\n")
        if consume_newline:
            self.accept("\n")
        return line

    def skip_line(self, consume_newline: bool = False) -> None:
        self.read_line(consume_newline)

    def read_escaped(self, terminator: str, escape: str) -> tuple[str, bool]:
        """Read a delimited literal; returns ``(text, terminated)``.

        The opening indicator under the cursor is discarded. Characters are
        collected until an unescaped ``terminator``, which is consumed but not
        returned. The character after ``escape`` is taken literally.
        ``terminated`` is False when the input ran out first.
        """
        self.read()
        out: list[str] = []
        escaped = False
        while not self.at_end:
            c = self.read()
            if escaped:
                out.append(c)
                escaped = False
            elif c == escape:
                escaped = True
            elif c == terminator:
                return "".join(out), True
            else:
                out.append(c)
        return "".join(out), False

    def read_number(self) -> tuple[str, bool]:
        """Read digits with at most one ``.``; returns ``(text, is_float)``."""
        seen_dot = False

        def digit_or_first_dot(c: str) -> bool:
            nonlocal seen_dot
            if c != ".":
                return is_digit(c)
            if seen_dot:
                return False
            seen_dot = True
            return True

        text = self.read_while(digit_or_first_dot)
        return text, seen_dot

    def make_token(self, kind: K, start: Mark, text: str | None = None) -> Token[K]:
        raw = self.text[start.offset : self.position]
        pos = Position.of(raw, start=start.offset, line=start.line, column=start.column)
        return Token(kind, raw if text is None else text, pos)

    def add_token(self, token: Token[K]) -> None:
        if token is None:
            raise UsageError("'token' argument is None")
        self._tokens.append(token)

    def add_end_token(self, kind: K) -> Token[K]:
        if not self.at_end:
            raise UsageError(f"end token added before end of input (offset {self.position})")
        start = self.mark()
        self.read()
        tok = self.make_token(kind, start)
        self.add_token(tok)
        return tok

    def add_error(self, token: Token[K], expected: str, message: str = "") -> None:
        diag = Diagnostic.at(token, expected, message)
        logger.debug("%s: scan error %s", self.source, diag)
        self._errors.append(diag)

    def tokenize(self) -> TokenStreamResult[K]:
        if self._started:
            raise UsageError("tokenize() can only run once per scanner")
        self._started = True

        while not self.is_end_of_file():
            before = (self.position, len(self._tokens), len(self._errors))
            self._read_token(self)
            if not self._exhausted and before == (self.position, len(self._tokens), len(self._errors)):
                raise StalledRuleError(self.position)

        logger.debug(
            "%s: tokenized %d tokens (%d errors)", self.source, len(self._tokens), len(self._errors)
        )
        return TokenStreamResult(
            text=self.text,
            tokens=tuple(self._tokens) or None,
            errors=tuple(self._errors) or None,
            source=self.source,
        )


def tokenize(text: str, read_token: Callable[[Scanner[K]], None], *, source: str = "<memory>") -> TokenStreamResult[K]:
    return Scanner(text, read_token, source=source).tokenize()
