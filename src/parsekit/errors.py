from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .spans import Position
    from .tokens import Token


class UsageError(Exception):
    """A rule broke the engine's call contract.

    Usage errors are raised immediately and never collected: they mean the
    grammar code is wrong, not the input text.
    """


class LookaheadError(UsageError):
    pass


class EmptyTokenStreamError(UsageError):
    def __init__(self) -> None:
        super().__init__("token stream has no tokens")


class StalledRuleError(UsageError):
    def __init__(self, offset: int) -> None:
        super().__init__(f"token rule made no progress at offset {offset}")
        self.offset = offset


@dataclass(slots=True)
class ExpectationError(UsageError):
    expected: str
    found: str
    position: Position | None = None

    def __str__(self) -> str:
        base = f"expected {self.expected!r} but got {self.found!r}"
        if self.position is not None:
            return f"{base} at {self.position.format()}"
        return base


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A collected error describing malformed input."""

    line: int
    column: int
    message: str
    expected: str
    found: str

    @classmethod
    def at(cls, token: Token | None, expected: str, message: str = "") -> "Diagnostic":
        if token is None:
            raise UsageError("'token' argument is None")
        if not expected or expected.isspace():
            raise UsageError("'expected' argument is empty")
        pos = token.position
        return cls(line=pos.line, column=pos.column, message=message, expected=expected, found=token.text)

    def format(self, source: str = "<memory>") -> str:
        text = self.message or f"expected {self.expected!r}"
        return f"{source}:{self.line}:{self.column}: {text} (found {self.found!r})"

    def __str__(self) -> str:
        return (
            f"Error at {self.line}:{self.column} - {self.message}, "
            f"(Expected: {self.expected}, Found: {self.found})"
        )


@dataclass(slots=True)
class DiagnosticsError(Exception):
    diagnostics: tuple[Diagnostic, ...]
    source: str = "<memory>"

    def __str__(self) -> str:
        return "\n".join(d.format(self.source) for d in self.diagnostics)
