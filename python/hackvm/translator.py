# python/hackvm/translator.py
from __future__ import annotations
from typing import Iterable, List, Sequence

from .ast import Instruction
from .codegen import TranslationContext, lower
from .compare import emit_bootstrap
from .emit_asm import AsmProgram
from .errors import TranslationError
from .parser import parse_lines
from .segments import is_valid_unit_name


def assemble(program: Sequence[Instruction], unit: str) -> AsmProgram:
    """Lower already parsed instructions of one unit into a full listing."""
    if not is_valid_unit_name(unit):
        raise ValueError(f"unit name is not a valid Hack symbol: {unit!r}")
    ctx = TranslationContext(unit=unit)

    body = AsmProgram()
    for ins in program:
        body.comment(str(ins))
        lower(body, ins, ctx)
        body.add()

    if not ctx.uses_compare:
        return body

    out = AsmProgram()
    emit_bootstrap(out)
    out.extend(body.lines)
    return out


def translate(lines: Iterable[str], unit_name: str) -> List[str]:
    """Translate the VM source lines of one unit into Hack assembly lines.

    Raises TranslationError on the first bad line; no partial output.
    """
    res = parse_lines(lines)
    if res.errors:
        raise TranslationError.from_parse_error(res.errors[0])
    return assemble(res.program, unit_name).lines


def translate_text(text: str, unit_name: str) -> List[str]:
    return translate(text.splitlines(), unit_name)
