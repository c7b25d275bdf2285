from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from stackvm.errors import UnknownToken
from stackvm.instructions import INT64_MAX, INT64_MIN, KEYWORDS, Instruction
from stackvm.program import Line, Program

_INT_RE = re.compile(r"[+-]?[0-9]+")


def split_tokens(raw_line: str) -> list[str] | None:
    """Split one source line into tokens.

    Returns None for lines that carry no instructions (blank or `#` comment).
    Tokens are separated by a single space; runs of spaces yield empty tokens,
    which the assembler rejects.
    """
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    return line.split(" ")


def parse_int64(token: str) -> int | None:
    if _INT_RE.fullmatch(token) is None:
        return None
    value = int(token, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def parse_token(token: str) -> Instruction:
    kind = KEYWORDS.get(token)
    if kind is not None:
        return Instruction(kind)
    value = parse_int64(token)
    if value is None:
        raise UnknownToken(token)
    return Instruction.push_int(value)


def assemble(tokens: Sequence[str], *, index: int) -> Line:
    # Either every token becomes an instruction or the whole line is rejected.
    return Line(index=index, instructions=tuple(parse_token(t) for t in tokens))


def assemble_line(program: Program, tokens: Sequence[str]) -> Line:
    line = assemble(tokens, index=program.next_index)
    program.append(line)
    return line


def load_program(source_lines: Iterable[str]) -> Program:
    program = Program()
    for lineno, raw in enumerate(source_lines, start=1):
        tokens = split_tokens(raw)
        if tokens is None:
            continue
        try:
            assemble_line(program, tokens)
        except UnknownToken as e:
            raise UnknownToken(e.token, line=lineno) from e
    return program


def load_program_file(path: Path) -> Program:
    with path.open("r", encoding="utf-8") as f:
        return load_program(f)
