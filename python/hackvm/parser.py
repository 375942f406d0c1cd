from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union
from lark import Lark, Token, Transformer, exceptions

from .ast import *


@dataclass(frozen=True)
class SourceLine:
    number: int  # 1-based line in the source file
    text: str


@dataclass
class ParseResult:
    program: Optional[List[Instruction]]
    errors: List[ParseError]


COMMENT = "//"
MAX_CONSTANT = 32767  # widest value an A-instruction can load


def strip_comment(line: str) -> str:
    cut = line.find(COMMENT)
    if cut != -1:
        line = line[:cut]
    return line.strip()


def normalize_lines(lines: Iterable[str]) -> List[SourceLine]:
    """Drop comments and blank lines, trim what is left.

    Line numbers of the surviving lines are kept so errors can point back
    into the source file.
    """
    out: List[SourceLine] = []
    for no, raw in enumerate(lines, start=1):
        text = strip_comment(raw)
        if text:
            out.append(SourceLine(number=no, text=text))
    return out


class AstBuilder(Transformer):
    def __init__(self, line: int):
        super().__init__()
        self.line = line

    def _pos(self, tok: Token) -> SrcPos:
        return SrcPos(line=self.line, column=tok.column or 1)

    def start(self, items):
        return items[0]

    def operator(self, items):
        tok = items[0]
        factory, kind = OPERATORS[str(tok)]
        return factory(kind, pos=self._pos(tok))

    def memory_op(self, items):
        access, seg_tok, idx_tok = items
        direction = Direction(str(access))
        try:
            segment = Segment(str(seg_tok))
        except ValueError:
            return ParseError(
                message=f"Invalid memory segment: {seg_tok}",
                line=self.line, column=seg_tok.column or 1,
                kind=ErrorKind.INVALID_SEGMENT,
            )
        index = int(str(idx_tok))

        # constant is a value source, not storage
        if segment is Segment.CONSTANT and direction is Direction.POP:
            return ParseError(
                message="Cannot pop to constant segment",
                line=self.line, column=seg_tok.column or 1,
                kind=ErrorKind.INVALID_SEGMENT,
            )
        if segment is Segment.CONSTANT and index > MAX_CONSTANT:
            return ParseError(
                message=f"Constant out of range: {index} (max {MAX_CONSTANT})",
                line=self.line, column=idx_tok.column or 1,
                kind=ErrorKind.INVALID_SEGMENT,
            )
        if segment is Segment.POINTER and index not in (0, 1):
            return ParseError(
                message=f"Invalid pointer index: {index} (expected 0 or 1)",
                line=self.line, column=idx_tok.column or 1,
                kind=ErrorKind.INVALID_SEGMENT,
            )
        return MemoryOp(direction, segment, index, pos=self._pos(access))


def make_parser() -> Lark:
    with open(__file__.replace("parser.py", "grammar.lark"), "r", encoding="utf-8") as f:
        grammar = f.read()
    return Lark(grammar, start="start", parser="lalr", propagate_positions=True)


_PARSER: Optional[Lark] = None


def parse_line(line: SourceLine) -> Union[Instruction, ParseError]:
    global _PARSER
    if _PARSER is None:
        _PARSER = make_parser()
    try:
        tree = _PARSER.parse(line.text)
    except exceptions.UnexpectedInput as e:
        return ParseError(
            message=f"Unrecognized instruction: {line.text}",
            line=line.number,
            column=max(getattr(e, "column", 1) or 1, 1),  # EOF errors report -1
        )
    return AstBuilder(line.number).transform(tree)


def parse_lines(lines: Iterable[str]) -> ParseResult:
    """Normalize and parse a whole translation unit.

    Stops at the first bad line: translation is all-or-nothing, so there is
    nothing to gain from collecting further errors.
    """
    source = normalize_lines(lines)
    if not source:
        return ParseResult(
            program=None,
            errors=[ParseError(
                message="Invalid input: no instructions to translate",
                line=0, column=0, kind=ErrorKind.EMPTY_INPUT,
            )],
        )

    program: List[Instruction] = []
    for line in source:
        res = parse_line(line)
        if isinstance(res, ParseError):
            return ParseResult(program=None, errors=[res])
        program.append(res)
    return ParseResult(program=program, errors=[])


def parse_text(text: str) -> ParseResult:
    return parse_lines(text.splitlines())
