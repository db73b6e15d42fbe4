from typing import Optional, Sequence, Set

from handheld.asm_ops import Instruction, MachineState
from handheld.interpreter import Looped, Outcome, Terminated, step


class Tracer:
    """Executes a program one instruction at a time, stopping on the same conditions as `run`."""

    def __init__(self, program: Sequence[Instruction]):
        self.program = program
        self.state = MachineState()
        self.visited: Set[int] = set()
        self.steps = 0
        self.outcome: Optional[Outcome] = None
        self.check_finished()

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def check_finished(self):
        if self.state.pc == len(self.program):
            self.outcome = Terminated(self.state.accumulator, self.steps)
        elif self.state.pc in self.visited:
            self.outcome = Looped(self.state.accumulator, self.state.pc, frozenset(self.visited), self.steps)

    def forward(self):
        if self.finished:
            return
        self.visited.add(self.state.pc)
        self.state = step(self.state, self.program[self.state.pc], len(self.program))
        self.steps += 1
        self.check_finished()

    def print_state(self):
        print()
        print(f"step {self.steps} | pc {self.state.pc} | acc {self.state.accumulator}")
        print("--------------------------------------------------------------")
        cur_ip = self.state.pc
        asm_prefix = f"{cur_ip:>4}"
        shift_str = " " * (len(asm_prefix) + 3)
        if 0 <= cur_ip - 1 < len(self.program):
            print(shift_str + str(self.program[cur_ip - 1]))
        if cur_ip < len(self.program):
            print(f"{asm_prefix} > {self.program[cur_ip]}")
        else:
            print(f"{asm_prefix} > <end>")
        if cur_ip + 1 < len(self.program):
            print(shift_str + str(self.program[cur_ip + 1]))
        if isinstance(self.outcome, Looped):
            print(f"Loop: address {self.outcome.pc} is about to run again")
        elif isinstance(self.outcome, Terminated):
            print("Terminated")
        print()


def run_tracer(tracer: Tracer, interactive: bool = False) -> Outcome:
    tracer.print_state()
    while not tracer.finished:
        if interactive:
            i = input()
            if i == "f":
                interactive = False
            elif i != "":
                continue
        tracer.forward()
        tracer.print_state()
    return tracer.outcome
