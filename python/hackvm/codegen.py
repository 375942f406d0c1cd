# python/hackvm/codegen.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

from .ast import (
    BinaryKind, BinaryOp, CompareKind, CompareOp, Direction, ErrorKind,
    Instruction, MemoryOp, Segment, UnaryKind, UnaryOp,
)
from .compare import emit_compare_call
from .emit_asm import (
    AsmProgram, SCRATCH,
    emit_at, emit_dec_sp, emit_pop_d, emit_pop_operands, emit_push_d, emit_store_d,
)
from .errors import TranslationError
from .parser import MAX_CONSTANT
from .segments import DIRECT_SEGMENTS, resolve_address

BINARY_COMP: Dict[BinaryKind, str] = {
    BinaryKind.ADD: "D+M",
    BinaryKind.SUB: "D-M",
    BinaryKind.AND: "D&M",
    BinaryKind.OR: "D|M",
}

UNARY_COMP: Dict[UnaryKind, str] = {
    UnaryKind.NEG: "-M",
    UnaryKind.NOT: "!M",
}


@dataclass
class TranslationContext:
    """State of one translation unit; never shared between units."""
    unit: str
    counters: Dict[CompareKind, int] = field(
        default_factory=lambda: {k: 0 for k in CompareKind}
    )
    uses_compare: bool = False

    def next_return_site(self, kind: CompareKind) -> int:
        n = self.counters[kind]
        self.counters[kind] = n + 1
        self.uses_compare = True
        return n


# ----------------- memory access -----------------

def lower_push(p: AsmProgram, op: MemoryOp, unit: str) -> None:
    if op.segment is Segment.CONSTANT:
        if op.index > MAX_CONSTANT:
            raise TranslationError(
                ErrorKind.INVALID_SEGMENT,
                f"Constant out of range: {op.index} (max {MAX_CONSTANT})",
                line=op.pos.line if op.pos else None,
            )
        emit_at(p, op.index)
        p.add("D=A")
    else:
        resolve_address(p, op.segment, op.index, unit)
        p.add("D=M")
    emit_push_d(p)


def lower_pop(p: AsmProgram, op: MemoryOp, unit: str) -> None:
    if op.segment is Segment.CONSTANT:
        raise TranslationError(
            ErrorKind.INVALID_SEGMENT, "Cannot pop to constant segment",
            line=op.pos.line if op.pos else None,
        )

    if op.segment in DIRECT_SEGMENTS:
        emit_pop_d(p)
        resolve_address(p, op.segment, op.index, unit)
        p.add("M=D")
        return

    # resolving and popping both need A: park the address in R15 first
    resolve_address(p, op.segment, op.index, unit)
    p.add("D=A")
    emit_store_d(p, SCRATCH)
    emit_pop_d(p)
    emit_at(p, SCRATCH)
    p.add("A=M")
    p.add("M=D")


# ----------------- arithmetic / logic -----------------

def lower_binary(p: AsmProgram, op: BinaryOp) -> None:
    emit_pop_operands(p)
    emit_at(p, SCRATCH)
    p.add(f"D={BINARY_COMP[op.kind]}")
    emit_push_d(p)


def lower_unary(p: AsmProgram, op: UnaryOp) -> None:
    emit_dec_sp(p)
    p.add("A=M")
    p.add(f"D={UNARY_COMP[op.kind]}")
    emit_push_d(p)


def lower_compare(p: AsmProgram, op: CompareOp, ctx: TranslationContext) -> None:
    emit_compare_call(p, op.kind, ctx.next_return_site(op.kind))


def lower(p: AsmProgram, ins: Instruction, ctx: TranslationContext) -> None:
    if isinstance(ins, MemoryOp):
        if ins.direction is Direction.PUSH:
            lower_push(p, ins, ctx.unit)
        else:
            lower_pop(p, ins, ctx.unit)
    elif isinstance(ins, BinaryOp):
        lower_binary(p, ins)
    elif isinstance(ins, UnaryOp):
        lower_unary(p, ins)
    elif isinstance(ins, CompareOp):
        lower_compare(p, ins, ctx)
    else:
        raise TranslationError(
            ErrorKind.UNRECOGNIZED_INSTRUCTION, f"Unrecognized instruction: {ins!r}"
        )
