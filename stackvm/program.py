from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from stackvm.instructions import Instruction


@dataclass(frozen=True, slots=True)
class Line:
    index: int
    instructions: tuple[Instruction, ...]

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __len__(self) -> int:
        return len(self.instructions)


class Program:
    """Append-only sequence of assembled Lines."""

    def __init__(self) -> None:
        self._lines: list[Line] = []

    @property
    def lines(self) -> tuple[Line, ...]:
        return tuple(self._lines)

    @property
    def next_index(self) -> int:
        return len(self._lines)

    def append(self, line: Line) -> None:
        if line.index != self.next_index:
            raise ValueError(
                f"line index {line.index} does not follow program length {self.next_index}"
            )
        self._lines.append(line)

    def dump(self) -> str:
        out: list[str] = []
        for line in self._lines:
            out.append(f"Line {line.index}:")
            out.extend(f"    {ins.render()}" for ins in line.instructions)
        return "".join(s + "\n" for s in out)

    def __iter__(self) -> Iterator[Line]:
        return iter(tuple(self._lines))

    def __len__(self) -> int:
        return len(self._lines)

    def __getitem__(self, index: int) -> Line:
        return self._lines[index]

    def __repr__(self) -> str:
        return f"Program(lines={len(self._lines)})"
