from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

@dataclass(frozen=True)
class SrcPos:
    line: int
    column: int = 1

class ErrorKind(Enum):
    UNRECOGNIZED_INSTRUCTION = "unrecognized instruction"
    INVALID_SEGMENT = "invalid memory segment"
    EMPTY_INPUT = "empty input"

@dataclass
class ParseError:
    message: str
    line: int
    column: int
    kind: ErrorKind = ErrorKind.UNRECOGNIZED_INSTRUCTION

# ---- Kinds ----
class Direction(Enum):
    PUSH = "push"
    POP = "pop"

class Segment(Enum):
    LOCAL = "local"
    ARGUMENT = "argument"
    THIS = "this"
    THAT = "that"
    TEMP = "temp"
    POINTER = "pointer"
    STATIC = "static"
    CONSTANT = "constant"

class UnaryKind(Enum):
    NEG = "neg"
    NOT = "not"

class BinaryKind(Enum):
    ADD = "add"
    SUB = "sub"
    AND = "and"
    OR = "or"

class CompareKind(Enum):
    EQ = "eq"
    LT = "lt"
    GT = "gt"

# ---- Instructions ----
@dataclass(frozen=True)
class UnaryOp:
    kind: UnaryKind
    pos: Optional[SrcPos] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.kind.value

@dataclass(frozen=True)
class BinaryOp:
    kind: BinaryKind
    pos: Optional[SrcPos] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.kind.value

@dataclass(frozen=True)
class CompareOp:
    kind: CompareKind
    pos: Optional[SrcPos] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.kind.value

@dataclass(frozen=True)
class MemoryOp:
    direction: Direction
    segment: Segment
    index: int
    pos: Optional[SrcPos] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.direction.value} {self.segment.value} {self.index}"

Instruction = Union[UnaryOp, BinaryOp, CompareOp, MemoryOp]

# operator mnemonic -> instruction factory, used by the parser
OPERATORS = {
    **{k.value: (UnaryOp, k) for k in UnaryKind},
    **{k.value: (BinaryOp, k) for k in BinaryKind},
    **{k.value: (CompareOp, k) for k in CompareKind},
}
