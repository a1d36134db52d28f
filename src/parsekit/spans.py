from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Mark:
    """Cursor snapshot taken at the start of a match."""

    offset: int
    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Position:
    """Source location of a matched substring.

    Offsets and columns are 0-based; lines are 1-based.
    """

    line: int
    column: int
    start: int
    length: int
    _multiline: bool = field(default=False, repr=False)

    @classmethod
    def of(cls, raw: str, *, start: int, line: int, column: int) -> "Position":
        return cls(
            line=line,
            column=column,
            start=start,
            length=len(raw),
            _multiline="\n" in raw,
        )

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_multiline(self) -> bool:
        return self._multiline

    def format(self) -> str:
        return f"{self.line}:{self.column}"
