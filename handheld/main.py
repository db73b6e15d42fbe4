import logging
import sys
from typing import List, Optional

from handheld.asm_ops import Instruction, swap_opcode
from handheld.asm_parser import parse_program
from handheld.debugger import Tracer, run_tracer
from handheld.errors import HandheldError
from handheld.formatter import Formatter
from handheld.interpreter import HandheldVM, Looped
from handheld.repair import find_fix


def load(ifile: str) -> List[Instruction]:
    with open(ifile, 'r', encoding='utf-8') as f:
        lines = f.read().splitlines()
    return parse_program(lines)


def execute(ifile: str):
    outcome = HandheldVM().run(load(ifile))
    if isinstance(outcome, Looped):
        print(f"Loop detected: address {outcome.pc} was about to run a second time.")
        print(f"Accumulator before the repeat: {outcome.accumulator}")
    else:
        print("Terminated naturally.")
        print(f"Final accumulator: {outcome.accumulator}")
    print(f"Steps: {outcome.steps}")


def fix(ifile: str, ofile: Optional[str] = None, workers: Optional[int] = None):
    program = load(ifile)
    address, accumulator = find_fix(program, workers)
    before = program[address]
    after = swap_opcode(before)
    print(f"Changed `{before}` into `{after}` at address {address}.")
    print(f"Final accumulator: {accumulator}")
    if ofile:
        program[address] = after
        with open(ofile, 'w', encoding='utf-8') as f:
            f.write(Formatter().format(program))


def trace(ifile: str, interactive: bool = False):
    run_tracer(Tracer(load(ifile)), interactive)


def format_file(ifile: str):
    print(Formatter().format(load(ifile)), end="")


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    arg_parser = argparse.ArgumentParser(description="Handheld console boot code interpreter")
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="Log interpreter and repair details")
    subparsers = arg_parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run", help="Run a program until it terminates or an instruction is about to repeat"
    )
    run_parser.add_argument("input", help="Input program file")

    repair_parser = subparsers.add_parser(
        "repair", help="Find the single jmp/nop swap that makes the program terminate"
    )
    repair_parser.add_argument("input", help="Input program file")
    repair_parser.add_argument("-o", "--output", help="Write the repaired program to this file")
    repair_parser.add_argument("-w", "--workers", type=int, default=None, help="Try candidates in parallel threads")

    trace_parser = subparsers.add_parser("trace", help="Print every step of a run")
    trace_parser.add_argument("input", help="Input program file")
    trace_parser.add_argument(
        "-i", "--interactive", action="store_true", help="Step on Enter, 'f' runs to the end"
    )

    format_parser = subparsers.add_parser("format", help="Print the program in canonical form")
    format_parser.add_argument("input", help="Input program file")

    args = arg_parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s:%(message)s")

    try:
        if args.command == "run":
            execute(args.input)
        elif args.command == "repair":
            fix(args.input, args.output, args.workers)
        elif args.command == "trace":
            trace(args.input, args.interactive)
        elif args.command == "format":
            format_file(args.input)
    except HandheldError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
