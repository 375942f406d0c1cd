import pytest

from hackvm.ast import (
    BinaryKind, BinaryOp, CompareKind, CompareOp, Direction, ErrorKind,
    MemoryOp, ParseError, Segment, UnaryKind, UnaryOp,
)
from hackvm.parser import normalize_lines, parse_lines, parse_text, strip_comment

# --- normalization ---
@pytest.mark.parametrize("src, expected", [
    ("push constant 7", "push constant 7"),
    ("   add   ", "add"),
    ("// full comment", ""),
    ("push local 0 // trailing", "push local 0"),
    ("", ""),
])
def test_strip_comment(src, expected):
    assert strip_comment(src) == expected

def test_normalize_keeps_line_numbers():
    src = ["// header", "", "push constant 1", "   ", "  add  // sum"]
    out = normalize_lines(src)
    assert [(l.number, l.text) for l in out] == [(3, "push constant 1"), (5, "add")]

# --- instructions ---
@pytest.mark.parametrize("line, expected", [
    ("add", BinaryOp(BinaryKind.ADD)),
    ("sub", BinaryOp(BinaryKind.SUB)),
    ("and", BinaryOp(BinaryKind.AND)),
    ("or", BinaryOp(BinaryKind.OR)),
    ("neg", UnaryOp(UnaryKind.NEG)),
    ("not", UnaryOp(UnaryKind.NOT)),
    ("eq", CompareOp(CompareKind.EQ)),
    ("lt", CompareOp(CompareKind.LT)),
    ("gt", CompareOp(CompareKind.GT)),
    ("push constant 17", MemoryOp(Direction.PUSH, Segment.CONSTANT, 17)),
    ("pop local 2", MemoryOp(Direction.POP, Segment.LOCAL, 2)),
    ("push argument 1", MemoryOp(Direction.PUSH, Segment.ARGUMENT, 1)),
    ("pop this 6", MemoryOp(Direction.POP, Segment.THIS, 6)),
    ("push that 5", MemoryOp(Direction.PUSH, Segment.THAT, 5)),
    ("pop temp 7", MemoryOp(Direction.POP, Segment.TEMP, 7)),
    ("push pointer 1", MemoryOp(Direction.PUSH, Segment.POINTER, 1)),
    ("pop static 8", MemoryOp(Direction.POP, Segment.STATIC, 8)),
    ("push   local\t3", MemoryOp(Direction.PUSH, Segment.LOCAL, 3)),
])
def test_parse_single_instruction(line, expected):
    res = parse_lines([line])
    assert not res.errors
    assert res.program == [expected]

def test_positions_point_into_source():
    res = parse_text("// c\n\npush constant 1\n  neg\n")
    assert not res.errors
    push, neg = res.program
    assert push.pos.line == 3
    assert neg.pos.line == 4

def test_str_round_trips_source_form():
    res = parse_lines(["push static 3", "gt"])
    assert [str(i) for i in res.program] == ["push static 3", "gt"]

# --- errors ---
@pytest.mark.parametrize("line", [
    "mul",
    "push",
    "push constant",
    "push constant -1",
    "push constant x",
    "pushlocal 0",
    "add 1",
    "addx",
    "push local 0 1",
    "label LOOP",
    "call Foo.bar 2",
])
def test_unrecognized_instruction(line):
    res = parse_lines(["push constant 1", line])
    assert res.program is None
    assert len(res.errors) == 1
    err = res.errors[0]
    assert isinstance(err, ParseError)
    assert err.kind is ErrorKind.UNRECOGNIZED_INSTRUCTION
    assert err.line == 2
    assert "Unrecognized instruction" in err.message

def test_invalid_segment():
    res = parse_lines(["push foobar 0"])
    assert res.program is None
    err = res.errors[0]
    assert err.kind is ErrorKind.INVALID_SEGMENT
    assert "Invalid memory segment: foobar" in err.message

@pytest.mark.parametrize("line, fragment", [
    ("pop constant 3", "Cannot pop to constant segment"),
    ("push pointer 2", "Invalid pointer index: 2"),
    ("pop pointer 7", "Invalid pointer index: 7"),
])
def test_rejected_memory_ops(line, fragment):
    res = parse_lines([line])
    assert res.errors[0].kind is ErrorKind.INVALID_SEGMENT
    assert fragment in res.errors[0].message

def test_stops_at_first_error():
    res = parse_lines(["bogus", "push nowhere 1"])
    assert len(res.errors) == 1
    assert res.errors[0].line == 1

@pytest.mark.parametrize("src", [[], [""], ["// only a comment", "   "]])
def test_empty_input(src):
    res = parse_lines(src)
    assert res.program is None
    assert res.errors[0].kind is ErrorKind.EMPTY_INPUT

def test_constant_range():
    assert not parse_lines(["push constant 32767"]).errors
    res = parse_lines(["push constant 32768"])
    assert res.errors[0].kind is ErrorKind.INVALID_SEGMENT
    assert "Constant out of range: 32768" in res.errors[0].message
