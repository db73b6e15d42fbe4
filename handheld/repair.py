import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Optional, Sequence, Tuple

from handheld.asm_ops import AccI, Instruction, swap_opcode
from handheld.errors import AddressFault, NoFixFound
from handheld.interpreter import Outcome, Terminated, run

log = logging.getLogger(__name__)


def candidates(program: Sequence[Instruction]) -> Iterator[Tuple[int, List[Instruction]]]:
    """Yields (address, program copy with that instruction swapped) for every jmp/nop, lowest address first."""
    for address, instr in enumerate(program):
        if isinstance(instr, AccI):
            continue
        candidate = list(program)
        candidate[address] = swap_opcode(instr)
        yield address, candidate


def try_candidate(candidate: Sequence[Instruction]) -> Optional[Outcome]:
    try:
        return run(candidate)
    except AddressFault as e:
        log.debug("Candidate rejected: %s", e)
        return None


def find_fix(program: Sequence[Instruction], workers: Optional[int] = None) -> Tuple[int, int]:
    """
    Finds the lowest address whose jmp/nop swap makes the program terminate.

    Args:
        program: Instructions to repair; never modified
        workers: Run candidates in a thread pool of this size when greater than 1

    Returns:
        (address of the swapped instruction, accumulator at termination)

    Raises:
        NoFixFound: every candidate loops or faults
    """
    pending = list(candidates(program))
    if workers is not None and workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            # map() yields in submission order, so the scan stays lowest-address-first.
            outcomes = list(executor.map(try_candidate, [c for _, c in pending]))
    else:
        outcomes = (try_candidate(c) for _, c in pending)
    for (address, _), outcome in zip(pending, outcomes):
        if isinstance(outcome, Terminated):
            log.debug("Swapping `%s` at address %d terminates with accumulator %d",
                      program[address], address, outcome.accumulator)
            return address, outcome.accumulator
        log.debug("Swapping address %d does not terminate: %s", address, outcome)
    raise NoFixFound(len(program), len(pending))


def repair(program: Sequence[Instruction], workers: Optional[int] = None) -> List[Instruction]:
    """Returns a copy of `program` with the first terminating swap applied."""
    address, _ = find_fix(program, workers)
    fixed = list(program)
    fixed[address] = swap_opcode(fixed[address])
    return fixed
