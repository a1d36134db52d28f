from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from .errors import Diagnostic, DiagnosticsError
from .tokens import Token


K = TypeVar("K")
R = TypeVar("R")


class ResultState(str, Enum):
    SUCCEEDED = "succeeded"
    SUCCEEDED_WITH_ERRORS = "succeeded_with_errors"
    FAILED = "failed"


def _state(payload: object, errors: tuple[Diagnostic, ...] | None) -> ResultState:
    if not errors:
        return ResultState.SUCCEEDED
    if payload is None:
        return ResultState.FAILED
    return ResultState.SUCCEEDED_WITH_ERRORS


@dataclass(frozen=True, slots=True)
class TokenStreamResult(Generic[K]):
    """Output of a scanner run.

    Tokens are kept even when errors were collected; ``tokens`` is None only
    when the scanner produced nothing.
    """

    text: str
    tokens: tuple[Token[K], ...] | None
    errors: tuple[Diagnostic, ...] | None = None
    source: str = "<memory>"

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def state(self) -> ResultState:
        return _state(self.tokens, self.errors)

    def unwrap(self) -> tuple[Token[K], ...]:
        if self.errors:
            raise DiagnosticsError(self.errors, self.source)
        return self.tokens or ()


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[R]):
    result: R | None
    errors: tuple[Diagnostic, ...] | None = None
    source: str = "<memory>"

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def state(self) -> ResultState:
        return _state(self.result, self.errors)

    def unwrap(self) -> R | None:
        if self.errors:
            raise DiagnosticsError(self.errors, self.source)
        return self.result
