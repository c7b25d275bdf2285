from __future__ import annotations

import argparse
import sys
from pathlib import Path

from stackvm.assembler import load_program_file
from stackvm.config import Settings, load_settings
from stackvm.errors import StackVMError
from stackvm.instructions import InstructionKind
from stackvm.machine import run_program
from stackvm.repl import run_repl


def _existing_path(value: str) -> Path:
    p = Path(value)
    if not p.exists():
        raise argparse.ArgumentTypeError(f"path not found: {value}")
    return p


def _instruction_kind(value: str) -> InstructionKind:
    try:
        return InstructionKind.lookup(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _settings(args: argparse.Namespace) -> Settings:
    try:
        settings = load_settings(args.config)
    except ValueError as e:
        raise SystemExit(f"ERROR: invalid config: {e}") from e
    if args.reserve:
        reserved = [*settings.reserved, *args.reserve]
        settings = settings.model_copy(update={"reserved": reserved})
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="stackvm")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def _add_common_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", type=_existing_path, default=None, help="YAML settings file")
        p.add_argument(
            "--reserve",
            type=_instruction_kind,
            action="append",
            default=[],
            help="treat an instruction as reserved (fails when executed)",
        )

    run_p = sub.add_parser("run", help="assemble and execute a program file")
    run_p.add_argument("path", type=_existing_path)
    run_p.add_argument("--dump", action="store_true", help="print the assembled listing first")
    _add_common_args(run_p)

    repl_p = sub.add_parser("repl", help="interactive read-eval-print loop")
    _add_common_args(repl_p)

    args = parser.parse_args(argv)
    settings = _settings(args)

    if args.cmd == "run":
        try:
            program = load_program_file(args.path)
        except UnicodeDecodeError as e:
            raise SystemExit(f"ERROR: {args.path}: not valid UTF-8") from e
        except OSError as e:
            raise SystemExit(f"ERROR: {e}") from e
        except StackVMError as e:
            raise SystemExit(f"ERROR: {e}") from e

        if args.dump:
            sys.stdout.write(program.dump())

        try:
            run_program(program, reserved=settings.reserved)
        except StackVMError as e:
            sys.stdout.flush()
            raise SystemExit(f"ERROR: {e}") from e
        return 0

    if args.cmd == "repl":
        try:
            run_repl(sys.stdin, sys.stdout, settings)
        except UnicodeDecodeError as e:
            raise SystemExit("ERROR: stdin: not valid UTF-8") from e
        return 0

    raise AssertionError(f"unhandled cmd: {args.cmd}")
