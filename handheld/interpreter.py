import logging
from dataclasses import dataclass
from typing import FrozenSet, Sequence, Union

from handheld.asm_ops import Instruction, MachineState
from handheld.errors import AddressFault

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Terminated:
    """The program counter landed exactly one past the last instruction."""
    accumulator: int
    steps: int = 0


@dataclass(frozen=True)
class Looped:
    """Address `pc` was about to run a second time; `accumulator` is the value before that."""
    accumulator: int
    pc: int
    visited: FrozenSet[int]
    steps: int = 0


Outcome = Union[Terminated, Looped]


def step(state: MachineState, instr: Instruction, program_length: int) -> MachineState:
    """
    Applies one instruction to a machine state.

    Args:
        state: State before the instruction runs
        instr: Instruction at `state.pc`
        program_length: Number of instructions; pc == program_length means termination

    Returns:
        The new machine state

    Raises:
        AddressFault: the new pc is negative or past program_length
    """
    next_state = instr.apply(state)
    if not 0 <= next_state.pc <= program_length:
        raise AddressFault(instr, state, next_state.pc)
    return next_state


def run(program: Sequence[Instruction]) -> Outcome:
    """Runs `program` until it terminates naturally or an address is about to repeat."""
    n = len(program)
    state = MachineState()
    visited = set()
    steps = 0
    while state.pc != n:
        if state.pc in visited:
            return Looped(state.accumulator, state.pc, frozenset(visited), steps)
        visited.add(state.pc)
        state = step(state, program[state.pc], n)
        steps += 1
    return Terminated(state.accumulator, steps)


class HandheldVM:
    def run(self, instructions: Sequence[Instruction]) -> Outcome:
        outcome = run(instructions)
        if isinstance(outcome, Looped):
            log.debug("Loop detected at address %d after %d steps, accumulator %d",
                      outcome.pc, outcome.steps, outcome.accumulator)
        else:
            log.debug("Terminated after %d steps, accumulator %d", outcome.steps, outcome.accumulator)
        return outcome
