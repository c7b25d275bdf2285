from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InstructionKind(str, Enum):
    PUSH_INT = "push_int"
    PLUS = "+"
    MINUS = "-"
    PRINT = "print"

    @property
    def display(self) -> str:
        return self.value

    @property
    def pops(self) -> int:
        return _KIND_SPECS[self].pops

    @property
    def pushes(self) -> int:
        return _KIND_SPECS[self].pushes

    @property
    def arity(self) -> tuple[int, int]:
        spec = _KIND_SPECS[self]
        return spec.pops, spec.pushes

    @property
    def has_operand(self) -> bool:
        return _KIND_SPECS[self].has_operand

    @classmethod
    def lookup(cls, name: str) -> InstructionKind:
        """Resolve a kind from its display name (`+`) or member name (`plus`)."""
        raw = name.strip()
        for kind in cls:
            if raw == kind.value or raw.upper() == kind.name:
                return kind
        raise ValueError(f"unknown instruction kind: {name!r}")


@dataclass(frozen=True, slots=True)
class KindSpec:
    pops: int
    pushes: int
    has_operand: bool = False


_KIND_SPECS: dict[InstructionKind, KindSpec] = {
    InstructionKind.PUSH_INT: KindSpec(pops=0, pushes=1, has_operand=True),
    InstructionKind.PLUS: KindSpec(pops=2, pushes=1),
    InstructionKind.MINUS: KindSpec(pops=2, pushes=1),
    InstructionKind.PRINT: KindSpec(pops=1, pushes=0),
}

# Tokens that assemble to zero-operand instructions.
KEYWORDS: dict[str, InstructionKind] = {
    kind.value: kind for kind in InstructionKind if not kind.has_operand
}

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary int into the signed 64-bit range (two's complement)."""
    return ((value - INT64_MIN) % 2**64) + INT64_MIN


@dataclass(frozen=True, slots=True)
class Instruction:
    kind: InstructionKind
    operand: int | None = None

    def __post_init__(self) -> None:
        if self.kind.has_operand:
            if self.operand is None:
                raise ValueError(f"'{self.kind.display}' requires an operand")
            if not INT64_MIN <= self.operand <= INT64_MAX:
                raise ValueError(f"operand out of 64-bit range: {self.operand}")
        elif self.operand is not None:
            raise ValueError(f"'{self.kind.display}' takes no operand")

    @classmethod
    def push_int(cls, value: int) -> Instruction:
        return cls(InstructionKind.PUSH_INT, value)

    def render(self) -> str:
        if self.kind.has_operand:
            return f"{self.kind.display}({self.operand})"
        return self.kind.display

    def __str__(self) -> str:
        return self.render()
