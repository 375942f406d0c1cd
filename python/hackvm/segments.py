from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Dict, Union

from .ast import ErrorKind, Segment
from .emit_asm import AsmProgram, emit_at
from .errors import TranslationError

TEMP_BASE = 5
POINTER_REGISTERS = ("THIS", "THAT")


@dataclass(frozen=True)
class SegmentDescriptor:
    base: Union[str, int]  # register symbol or fixed address
    indirect: bool         # True: effective = M[base] + i, False: base + i


DESCRIPTORS: Dict[Segment, SegmentDescriptor] = {
    Segment.LOCAL: SegmentDescriptor("LCL", indirect=True),
    Segment.ARGUMENT: SegmentDescriptor("ARG", indirect=True),
    Segment.THIS: SegmentDescriptor("THIS", indirect=True),
    Segment.THAT: SegmentDescriptor("THAT", indirect=True),
    Segment.TEMP: SegmentDescriptor(TEMP_BASE, indirect=False),
}

# Hack symbols: letters, digits, _ . $ : and no leading digit
UNIT_NAME_RE = re.compile(r"[A-Za-z_.$:][A-Za-z0-9_.$:]*")

# segments whose address is a single symbol; resolving them leaves D alone
DIRECT_SEGMENTS = frozenset({Segment.POINTER, Segment.STATIC})


def is_valid_unit_name(unit: str) -> bool:
    return UNIT_NAME_RE.fullmatch(unit) is not None


def static_label(unit: str, index: int) -> str:
    return f"{unit}.{index}"


def pointer_register(index: int) -> str:
    if index not in (0, 1):
        raise TranslationError(
            ErrorKind.INVALID_SEGMENT,
            f"Invalid pointer index: {index} (expected 0 or 1)",
        )
    return POINTER_REGISTERS[index]


def resolve_address(p: AsmProgram, segment: Segment, index: int, unit: str) -> None:
    """Emit code that leaves the effective address of segment[index] in A.

    Base and temp segments go through D; pointer and static do not.
    """
    desc = DESCRIPTORS.get(segment)
    if desc is not None:
        emit_at(p, index)
        p.add("D=A")
        emit_at(p, desc.base)
        p.add("A=D+M" if desc.indirect else "A=D+A")
        return

    if segment is Segment.POINTER:
        emit_at(p, pointer_register(index))
        return

    if segment is Segment.STATIC:
        emit_at(p, static_label(unit, index))
        return

    # constant has no storage behind it
    raise TranslationError(
        ErrorKind.INVALID_SEGMENT,
        f"Invalid memory segment: {segment.value} is not addressable",
    )
