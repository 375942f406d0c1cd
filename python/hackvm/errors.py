from __future__ import annotations
from typing import Optional

from .ast import ErrorKind, ParseError


class TranslationError(Exception):
    """Fatal translation failure. Nothing is emitted once this is raised."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    @classmethod
    def from_parse_error(cls, err: ParseError) -> "TranslationError":
        # line 0 marks errors that belong to the unit, not to a line
        if err.line <= 0:
            return cls(err.kind, err.message)
        return cls(err.kind, err.message, line=err.line, column=err.column)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"line={self.line}: {self.message}"
        return f"line={self.line} col={self.column}: {self.message}"
