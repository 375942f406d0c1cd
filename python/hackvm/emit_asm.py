# python/hackvm/emit_asm.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List

SP = "SP"
SCRATCH = "R15"   # right operand / cached pop address
RETURN = "R13"    # return address for the shared comparison subroutines

TRUE_VALUE = -1
FALSE_VALUE = 0


@dataclass
class AsmProgram:
    lines: List[str] = field(default_factory=list)
    indent: str = ""

    def add(self, s: str = "") -> None:
        self.lines.append(f"{self.indent}{s}" if s else "")

    def extend(self, lines: Iterable[str]) -> None:
        self.lines.extend(lines)

    def label(self, name: str) -> None:
        # labels are never indented
        self.lines.append(f"({name})")

    def comment(self, text: str) -> None:
        self.add(f"// {text}")

    def save(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            for line in self.lines:
                f.write(line + "\n")


# ----------------- single instructions -----------------

def emit_at(p: AsmProgram, symbol) -> None:
    p.add(f"@{symbol}")

def emit_jmp(p: AsmProgram, label: str) -> None:
    emit_at(p, label)
    p.add("0;JMP")

def emit_store_d(p: AsmProgram, register: str) -> None:
    emit_at(p, register)
    p.add("M=D")

# ----------------- stack protocol -----------------
# SP always points at the next free cell.

def emit_inc_sp(p: AsmProgram) -> None:
    emit_at(p, SP)
    p.add("M=M+1")

def emit_dec_sp(p: AsmProgram) -> None:
    emit_at(p, SP)
    p.add("M=M-1")

def emit_write_top(p: AsmProgram, comp: str = "D") -> None:
    """M[M[SP]] = comp, SP unchanged."""
    emit_at(p, SP)
    p.add("A=M")
    p.add(f"M={comp}")

def emit_push_d(p: AsmProgram) -> None:
    # write, then advance
    emit_write_top(p)
    emit_inc_sp(p)

def emit_push_value(p: AsmProgram, value: int) -> None:
    """Push -1, 0 or 1 without touching D."""
    emit_write_top(p, str(value))
    emit_inc_sp(p)

def emit_pop_d(p: AsmProgram) -> None:
    # retreat, then read
    emit_dec_sp(p)
    p.add("A=M")
    p.add("D=M")

def emit_pop_operands(p: AsmProgram) -> None:
    """Right operand into R15, left operand into D."""
    emit_pop_d(p)
    emit_store_d(p, SCRATCH)
    emit_pop_d(p)
