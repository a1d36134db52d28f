from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .spans import Position


K = TypeVar("K")

# Returned by the scanner when there is nothing left to read.
END = "\0"


@dataclass(frozen=True, slots=True)
class Token(Generic[K]):
    kind: K
    text: str
    position: Position

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text!r}, {self.position.format()})"


def same_text(a: str, b: str, ignore_case: bool = False) -> bool:
    if ignore_case:
        return a.casefold() == b.casefold()
    return a == b
