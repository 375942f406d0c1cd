# python/hackvm/compare.py
"""Shared comparison subroutines.

Hack has no call instruction, so eq/lt/gt jump into one shared body per kind
after storing their resume address in R13. The bodies finish in TRUE or
FALSE, which push the sentinel and jump back through R13.
"""
from __future__ import annotations
from typing import Dict

from .ast import CompareKind
from .emit_asm import (
    AsmProgram, RETURN, SCRATCH, TRUE_VALUE, FALSE_VALUE,
    emit_at, emit_jmp, emit_store_d, emit_pop_operands, emit_push_value,
)

TRUE_LABEL = "TRUE"
FALSE_LABEL = "FALSE"
START_LABEL = "START"
BODY_INDENT = "    "

JUMPS: Dict[CompareKind, str] = {
    CompareKind.EQ: "JEQ",
    CompareKind.LT: "JLT",
    CompareKind.GT: "JGT",
}


def subroutine_name(kind: CompareKind) -> str:
    return kind.value.upper()


def return_label(kind: CompareKind, n: int) -> str:
    return f"{subroutine_name(kind)}.{n}.END"


def emit_compare_call(p: AsmProgram, kind: CompareKind, n: int) -> None:
    resume = return_label(kind, n)
    emit_at(p, resume)
    p.add("D=A")
    emit_store_d(p, RETURN)
    emit_jmp(p, subroutine_name(kind))
    p.label(resume)


def emit_result_subroutine(p: AsmProgram, name: str, value: int) -> None:
    p.label(name)
    emit_push_value(p, value)
    emit_at(p, RETURN)
    p.add("A=M")
    p.add("0;JMP")


def emit_compare_subroutine(p: AsmProgram, kind: CompareKind) -> None:
    p.label(subroutine_name(kind))
    emit_pop_operands(p)
    emit_at(p, SCRATCH)
    p.add("D=D-M")
    emit_at(p, TRUE_LABEL)
    p.add(f"D;{JUMPS[kind]}")
    emit_jmp(p, FALSE_LABEL)


def emit_bootstrap(p: AsmProgram) -> None:
    """Jump over the shared bodies, then define TRUE, FALSE, EQ, LT, GT."""
    emit_jmp(p, START_LABEL)
    p.add()

    prev, p.indent = p.indent, BODY_INDENT
    try:
        emit_result_subroutine(p, TRUE_LABEL, TRUE_VALUE)
        p.add()
        emit_result_subroutine(p, FALSE_LABEL, FALSE_VALUE)
        p.add()
        for kind in CompareKind:
            emit_compare_subroutine(p, kind)
            p.add()
    finally:
        p.indent = prev

    p.label(START_LABEL)
    p.add()
