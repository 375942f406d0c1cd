# python/hackvm/cli.py
from __future__ import annotations
import argparse
import sys
from functools import partial
from pathlib import Path
from typing import List

from .emit_asm import AsmProgram
from .errors import TranslationError
from .segments import is_valid_unit_name
from .translator import translate

VM_SUFFIX = ".vm"
ASM_SUFFIX = ".asm"


def read_lines_blocked(path: Path, buf_size: int) -> List[str]:
    # block reads, then split once
    chunks = []
    with open(path, "r", encoding="utf-8") as f:
        for part in iter(partial(f.read, buf_size), ""):
            chunks.append(part)
    return "".join(chunks).splitlines()


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="hackvm",
        description="Translate a VM program (.vm) into Hack assembly (.asm)",
    )
    ap.add_argument("input", help="Input .vm file")
    ap.add_argument("-o", "--output", help="Output .asm file (default: <input stem>.asm next to the input)")
    ap.add_argument("--unit-name", help="Scope for static labels (default: input file stem)")
    ap.add_argument("--buf", type=positive_int, default=64 * 1024, help="Read buffer size")
    ap.add_argument("-q", "--quiet", action="store_true", help="Only print errors")
    args = ap.parse_args(argv)

    inp = Path(args.input)
    if not inp.exists():
        print(f"[io error] input not found: {inp}", file=sys.stderr)
        return 2
    if inp.is_dir():
        print(f"[io error] {inp} is a directory; only single .vm files are supported", file=sys.stderr)
        return 2
    if inp.suffix != VM_SUFFIX:
        print(f"[io error] expected a {VM_SUFFIX} file, got: {inp.name}", file=sys.stderr)
        return 2

    out = Path(args.output) if args.output else inp.with_suffix(ASM_SUFFIX)
    unit = args.unit_name or inp.stem
    if not is_valid_unit_name(unit):
        print(f"[io error] unit name {unit!r} is not a valid Hack symbol (use --unit-name)", file=sys.stderr)
        return 2

    if not args.quiet:
        print(f"Translating file {inp.name} into {out.name}...")

    try:
        lines = read_lines_blocked(inp, args.buf)
    except UnicodeDecodeError as e:
        print(f"[io error] cannot decode {inp}: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"[io error] cannot read {inp}: {e}", file=sys.stderr)
        return 2

    try:
        asm = translate(lines, unit)
    except TranslationError as e:
        print(f"[translate error] {inp.name}: {e}", file=sys.stderr)
        return 3

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        AsmProgram(lines=asm).save(str(out))
    except OSError as e:
        print(f"[io error] cannot write {out}: {e}", file=sys.stderr)
        return 4

    if not args.quiet:
        print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
