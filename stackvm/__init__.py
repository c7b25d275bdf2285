from __future__ import annotations

from stackvm.assembler import assemble, assemble_line, load_program, load_program_file
from stackvm.config import Settings, load_settings
from stackvm.errors import (
    AssemblyError,
    ExecutionError,
    StackUnderflow,
    StackVMError,
    UnimplementedInstruction,
    UnknownToken,
)
from stackvm.instructions import Instruction, InstructionKind
from stackvm.machine import StackMachine, run_program
from stackvm.program import Line, Program
from stackvm.repl import Session, TurnResult, TurnStatus

__all__ = [
    "__version__",
    # Instruction model
    "Instruction",
    "InstructionKind",
    "Line",
    "Program",
    # Assembler
    "assemble",
    "assemble_line",
    "load_program",
    "load_program_file",
    # Machine
    "StackMachine",
    "run_program",
    # Errors
    "StackVMError",
    "AssemblyError",
    "UnknownToken",
    "ExecutionError",
    "StackUnderflow",
    "UnimplementedInstruction",
    # Settings
    "Settings",
    "load_settings",
    # REPL
    "Session",
    "TurnResult",
    "TurnStatus",
]

__version__ = "0.1.0"
